"""
Auth Service - teacher account logic.

Handles registration and credential checks, decoupled from the routes.
"""
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vocabpractice_app.core.error_handlers import StoreError, ValidationError
from vocabpractice_app.models import Teacher, db
from vocabpractice_app.utils.db_session import run_with_retry


class AuthService:
    """Service for teacher account operations."""

    @staticmethod
    def normalize_email(email: str) -> str:
        return (email or '').strip().lower()

    @staticmethod
    def register_teacher(full_name: str, email: str, password: str) -> Teacher:
        """
        Create a teacher account.

        Raises:
            ValidationError: blank name, short password or email already taken
            StoreError: the insert was rejected for another reason
        """
        full_name = (full_name or '').strip()
        email = AuthService.normalize_email(email)
        min_length = current_app.config.get('AUTH_MIN_PASSWORD_LENGTH', 8)

        if not full_name or not email:
            raise ValidationError('Please provide your name and email.')
        if len(full_name) > current_app.config.get('AUTH_FULL_NAME_MAX_LENGTH', 120):
            raise ValidationError('That name is too long.')
        if len(email) > current_app.config.get('AUTH_EMAIL_MAX_LENGTH', 120):
            raise ValidationError('That email is too long.')
        if len(password or '') < min_length:
            raise ValidationError(f'Password must be at least {min_length} characters.')

        def _create():
            teacher = Teacher(full_name=full_name, email=email)
            teacher.set_password(password)
            db.session.add(teacher)
            db.session.flush()
            return teacher

        try:
            teacher = run_with_retry(db.session, _create)
        except IntegrityError as exc:
            db.session.rollback()
            raise ValidationError('This email is already registered.') from exc
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Teacher registration failed: {exc}", exc_info=True)
            raise StoreError('Failed to create account', operation='register_teacher') from exc

        current_app.logger.info(f"Teacher registered: {email} ({teacher.id})")
        return teacher

    @staticmethod
    def authenticate(email: str, password: str) -> Optional[Teacher]:
        """
        Verify credentials.

        Returns:
            Teacher if valid, None otherwise.

        Raises:
            StoreError: the account lookup failed
        """
        try:
            teacher = Teacher.query.filter_by(email=AuthService.normalize_email(email)).first()
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.error(f"Teacher lookup for sign-in failed: {exc}", exc_info=True)
            raise StoreError('Failed to sign in', operation='authenticate') from exc

        if teacher and teacher.check_password(password or ''):
            return teacher
        return None
