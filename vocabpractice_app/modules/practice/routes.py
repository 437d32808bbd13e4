# File: vocabpractice_app/modules/practice/routes.py
# Student practice wizard. GET renders the current step, each step posts to
# its own endpoint and redirects back to the wizard page.

from flask import current_app, flash, redirect, render_template, session, url_for

from vocabpractice_app.core.error_handlers import (
    StoreError,
    SubmitError,
    ValidationError,
    WizardStateError,
)
from vocabpractice_app.services.data_store import DataStore

from . import practice_bp
from .forms import (
    RestartForm,
    SentenceForm,
    StudentNameForm,
    TeacherSelectForm,
    WordSetSelectForm,
)
from .wizard import Answering, Complete, EnterName, PracticeWizard, SelectWordSet


def _load_wizard() -> PracticeWizard:
    return PracticeWizard.from_dict(session.get(PracticeWizard.SESSION_KEY))


def _save_wizard(wizard: PracticeWizard) -> None:
    session[PracticeWizard.SESSION_KEY] = wizard.to_dict()


def _flash_form_errors(form) -> None:
    for errors in form.errors.values():
        for error in errors:
            flash(error, 'warning')


def _run_step(form, action):
    """Apply one wizard transition and report its outcome as a flash message."""
    wizard = _load_wizard()
    if not form.validate_on_submit():
        _flash_form_errors(form)
        return redirect(url_for('practice.index'))

    try:
        action(wizard)
    except ValidationError as e:
        flash(e.message, 'warning')
    except SubmitError as e:
        flash(e.message, 'danger')
    except WizardStateError as e:
        current_app.logger.warning(f"Practice step rejected: {e.message}")
        flash('That step is no longer available, please continue from here.', 'info')
    except StoreError:
        flash('Something went wrong, please try again.', 'danger')
    else:
        if isinstance(wizard.state, Complete):
            flash('Great work! Your answers have been submitted.', 'success')
    finally:
        _save_wizard(wizard)

    return redirect(url_for('practice.index'))


@practice_bp.route('/')
def index():
    """Render whichever step the wizard is on."""
    wizard = _load_wizard()
    state = wizard.state
    store = DataStore()
    context = {'state': state, 'step': wizard.step.value, 'restart_form': RestartForm()}

    if isinstance(state, EnterName):
        context['form'] = StudentNameForm()
    elif isinstance(state, SelectWordSet):
        try:
            context['word_sets'] = store.list_word_sets(state.teacher_id)
        except StoreError:
            flash('Failed to load word sets', 'danger')
            context['word_sets'] = []
        context['form'] = WordSetSelectForm()
    elif isinstance(state, Answering):
        form = SentenceForm()
        form.submit.label.text = 'Submit all answers' if state.is_last_word else 'Next word'
        context['form'] = form
    elif not isinstance(state, Complete):
        try:
            context['teachers'] = store.list_teachers()
        except StoreError:
            flash('Failed to load teachers', 'danger')
            context['teachers'] = []
        context['form'] = TeacherSelectForm()

    return render_template('practice/wizard.html', **context)


@practice_bp.route('/teacher', methods=['POST'])
def choose_teacher():
    form = TeacherSelectForm()
    return _run_step(form, lambda wizard: wizard.select_teacher(form.teacher_id.data))


@practice_bp.route('/name', methods=['POST'])
def enter_name():
    form = StudentNameForm()
    return _run_step(form, lambda wizard: wizard.enter_name(form.student_name.data))


@practice_bp.route('/word-set', methods=['POST'])
def choose_word_set():
    form = WordSetSelectForm()
    return _run_step(form, lambda wizard: wizard.select_word_set(form.word_set_id.data))


@practice_bp.route('/answer', methods=['POST'])
def answer():
    form = SentenceForm()
    return _run_step(form, lambda wizard: wizard.advance(form.sentence.data))


@practice_bp.route('/restart', methods=['POST'])
def restart():
    """Discard the run; from the completion page this returns to the landing page."""
    try:
        wizard = _load_wizard()
    except StoreError:
        # the draft stays behind until it is purged
        wizard = None
    finished = wizard is not None and isinstance(wizard.state, Complete)
    if wizard is not None:
        wizard.restart()
    session.pop(PracticeWizard.SESSION_KEY, None)
    if finished:
        return redirect(url_for('landing.index'))
    return redirect(url_for('practice.index'))
