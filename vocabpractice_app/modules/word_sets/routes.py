# File: vocabpractice_app/modules/word_sets/routes.py
# Teacher pages: dashboard, create, detail, edit words, delete, student
# answers and restart. Every page is scoped to the signed-in teacher.

from flask import current_app, flash, redirect, render_template, request, url_for
from flask_login import login_required

from vocabpractice_app.core.error_handlers import NotFoundError, StoreError, ValidationError

from ..auth.provider import get_auth_provider
from . import word_sets_bp
from .forms import ConfirmForm, WordListForm, WordSetForm
from .services.word_set_service import WordSetService


def _teacher_id() -> int:
    return get_auth_provider().require_teacher_id()


def _not_found():
    return render_template('errors/not_found.html', message='Word set not found'), 404


def _handle_row_buttons(form) -> bool:
    """Apply an "add word" / "remove word" click; True when the page should re-render."""
    if form.add_word.data:
        form.add_row()
        return True
    remove_index = request.form.get('remove_word', type=int)
    if remove_index is not None:
        if not form.remove_row(remove_index):
            flash('A word set needs at least one word.', 'warning')
        return True
    return False


def _flash_form_errors(form) -> None:
    for errors in form.errors.values():
        for error in errors:
            if isinstance(error, list):
                # FieldList entries report a list per row
                for message in error:
                    flash(message, 'warning')
            elif isinstance(error, str):
                flash(error, 'warning')


@word_sets_bp.route('/dashboard')
@login_required
def dashboard():
    """List the teacher's own word sets with word and submission counts."""
    word_sets = []
    load_failed = False
    try:
        word_sets = WordSetService().list_dashboard(_teacher_id())
    except StoreError:
        flash('Failed to load word sets', 'danger')
        load_failed = True
    return render_template('word_sets/dashboard.html', word_sets=word_sets, load_failed=load_failed)


@word_sets_bp.route('/word-sets/new', methods=['GET', 'POST'])
@login_required
def create_word_set():
    form = WordSetForm()
    if request.method == 'GET':
        form.pad_rows(current_app.config.get('WORD_SET_FORM_MIN_ROWS', 1))
        return render_template('word_sets/create.html', form=form)

    if _handle_row_buttons(form):
        return render_template('word_sets/create.html', form=form)

    if not form.validate_on_submit():
        _flash_form_errors(form)
        return render_template('word_sets/create.html', form=form)

    try:
        word_set = WordSetService().create_word_set(_teacher_id(), form.title.data, form.words.data)
    except ValidationError as e:
        flash(e.message, 'warning')
    except StoreError:
        flash('Failed to create word set', 'danger')
    else:
        flash(f'Word set "{word_set.title}" created.', 'success')
        return redirect(url_for('word_sets.detail', word_set_id=word_set.id))

    return render_template('word_sets/create.html', form=form)


@word_sets_bp.route('/word-sets/<int:word_set_id>')
@login_required
def detail(word_set_id):
    try:
        word_set = WordSetService().load_detail(_teacher_id(), word_set_id)
    except NotFoundError:
        return _not_found()
    except StoreError:
        flash('Failed to load word set', 'danger')
        word_set = None
    return render_template('word_sets/detail.html', word_set=word_set, word_set_id=word_set_id)


@word_sets_bp.route('/word-sets/<int:word_set_id>/words', methods=['GET', 'POST'])
@login_required
def edit_words(word_set_id):
    """Edit the word list; saving replaces every word of the set."""
    service = WordSetService()
    teacher_id = _teacher_id()
    try:
        word_set = service.load_detail(teacher_id, word_set_id)
    except NotFoundError:
        return _not_found()
    except StoreError:
        flash('Failed to load word set', 'danger')
        return redirect(url_for('word_sets.dashboard'))

    if request.method == 'GET':
        form = WordListForm()
        form.set_rows([word.word for word in word_set.words])
        return render_template('word_sets/edit_words.html', form=form, word_set=word_set)

    form = WordListForm()
    if _handle_row_buttons(form):
        return render_template('word_sets/edit_words.html', form=form, word_set=word_set)

    if not form.validate_on_submit():
        _flash_form_errors(form)
        return render_template('word_sets/edit_words.html', form=form, word_set=word_set)

    try:
        words = service.replace_words(teacher_id, word_set_id, form.words.data)
    except NotFoundError:
        return _not_found()
    except ValidationError as e:
        flash(e.message, 'warning')
    except StoreError:
        flash('Failed to save words', 'danger')
    else:
        flash(f'Saved {len(words)} words.', 'success')
        return redirect(url_for('word_sets.detail', word_set_id=word_set_id))

    return render_template('word_sets/edit_words.html', form=form, word_set=word_set)


@word_sets_bp.route('/word-sets/<int:word_set_id>/delete', methods=['GET', 'POST'])
@login_required
def delete_word_set(word_set_id):
    service = WordSetService()
    teacher_id = _teacher_id()
    try:
        word_set = service.load_detail(teacher_id, word_set_id)
    except NotFoundError:
        return _not_found()
    except StoreError:
        flash('Failed to load word set', 'danger')
        return redirect(url_for('word_sets.dashboard'))

    form = ConfirmForm()
    if request.method == 'POST':
        if not (form.validate_on_submit() and form.confirmed):
            flash('Please confirm before deleting.', 'warning')
            return redirect(url_for('word_sets.delete_word_set', word_set_id=word_set_id))
        try:
            service.delete_word_set(teacher_id, word_set_id)
        except NotFoundError:
            return _not_found()
        except StoreError:
            flash('Failed to delete word set', 'danger')
            return redirect(url_for('word_sets.detail', word_set_id=word_set_id))
        flash(f'Word set "{word_set.title}" deleted.', 'success')
        return redirect(url_for('word_sets.dashboard'))

    return render_template('word_sets/confirm_delete.html', form=form, word_set=word_set)


@word_sets_bp.route('/word-sets/<int:word_set_id>/student/<path:student_name>')
@login_required
def student_answers(word_set_id, student_name):
    """The student's latest answers; an unknown student shows an empty list."""
    try:
        result = WordSetService().student_answers(_teacher_id(), word_set_id, student_name)
    except NotFoundError:
        return _not_found()
    except StoreError:
        flash('Failed to load answers', 'danger')
        result = None
    return render_template(
        'word_sets/student_answers.html',
        result=result,
        word_set_id=word_set_id,
        student_name=student_name,
    )


@word_sets_bp.route('/word-sets/<int:word_set_id>/restart/<path:student_name>', methods=['GET', 'POST'])
@login_required
def restart_student(word_set_id, student_name):
    """Delete every submission of the student for this set, after confirmation."""
    service = WordSetService()
    teacher_id = _teacher_id()
    try:
        word_set = service.load_detail(teacher_id, word_set_id)
    except NotFoundError:
        return _not_found()
    except StoreError:
        flash('Failed to load word set', 'danger')
        return redirect(url_for('word_sets.dashboard'))

    form = ConfirmForm()
    if request.method == 'POST':
        if not (form.validate_on_submit() and form.confirmed):
            flash('Please confirm before restarting.', 'warning')
            return redirect(url_for('word_sets.restart_student', word_set_id=word_set_id, student_name=student_name))
        try:
            deleted = service.restart_student(teacher_id, word_set_id, student_name)
        except NotFoundError:
            return _not_found()
        except ValidationError as e:
            flash(e.message, 'warning')
        except StoreError:
            flash('Failed to restart student progress', 'danger')
        else:
            flash(f'Progress for {student_name} restarted ({deleted} submission(s) removed).', 'success')
        return redirect(url_for('word_sets.detail', word_set_id=word_set_id))

    return render_template(
        'word_sets/confirm_restart.html',
        form=form,
        word_set=word_set,
        student_name=student_name,
    )
