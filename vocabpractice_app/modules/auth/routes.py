# File: vocabpractice_app/modules/auth/routes.py
from urllib.parse import urlparse

from flask import render_template, flash, redirect, url_for, request

from vocabpractice_app.core.error_handlers import StoreError, ValidationError

from . import auth_bp
from .forms import LoginForm, RegistrationForm
from .provider import get_auth_provider


def _safe_next_page():
    next_page = request.args.get('next')
    if not next_page or urlparse(next_page).netloc != '':
        return url_for('word_sets.dashboard')
    return next_page


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    provider = get_auth_provider()
    if provider.current_teacher is not None:
        return redirect(url_for('word_sets.dashboard'))

    form = LoginForm()
    if form.validate_on_submit():
        try:
            provider.sign_in(form.email.data, form.password.data, remember=form.remember_me.data)
        except ValidationError as e:
            flash(e.message, 'danger')
            return redirect(request.full_path)
        except StoreError:
            flash('Sign-in is unavailable right now, please try again.', 'danger')
            return render_template('auth/login.html', form=form)

        flash('Signed in.', 'success')
        return redirect(_safe_next_page())

    return render_template('auth/login.html', form=form)


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Sign out; POST only, the global CSRF check covers the header button."""
    get_auth_provider().sign_out()
    return redirect(url_for('landing.index'))


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    provider = get_auth_provider()
    if provider.current_teacher is not None:
        return redirect(url_for('word_sets.dashboard'))

    form = RegistrationForm()
    if form.validate_on_submit():
        try:
            provider.sign_up(form.full_name.data, form.email.data, form.password.data)
        except ValidationError as e:
            flash(e.message, 'danger')
        except StoreError:
            flash('Failed to create account.', 'danger')
        else:
            flash('Account created. Please sign in.', 'success')
            return redirect(url_for('auth.login'))

    return render_template('auth/register.html', form=form)
