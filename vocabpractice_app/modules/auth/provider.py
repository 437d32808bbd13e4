"""Auth Provider: the teacher session handed to the manager pages.

One provider is created per request and kept on ``flask.g``. Its status
starts as ``loading`` and becomes ``resolved`` or ``absent`` once the
Flask-Login session has been looked at.
"""
from __future__ import annotations

from typing import Optional

from flask import current_app, g
from flask_login import current_user, login_user, logout_user

from vocabpractice_app.core.error_handlers import AuthorizationError, ValidationError

from .schemas import SessionStatus, TeacherDTO
from .services.auth_service import AuthService


class AuthProvider:
    """Teacher session lifecycle: sign-in, sign-out, sign-up, current teacher."""

    def __init__(self):
        self._status = SessionStatus.LOADING
        self._teacher: Optional[TeacherDTO] = None

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is SessionStatus.LOADING

    def resolve(self) -> SessionStatus:
        """Look up the signed-in teacher, once per request."""
        if self.loading:
            if current_user.is_authenticated:
                self._set_teacher(TeacherDTO.from_model(current_user))
            else:
                self._set_teacher(None)
        return self._status

    @property
    def current_teacher(self) -> Optional[TeacherDTO]:
        self.resolve()
        return self._teacher

    def require_teacher_id(self) -> int:
        """Id that every manager write is scoped to."""
        teacher = self.current_teacher
        if teacher is None:
            raise AuthorizationError('Please sign in as a teacher.')
        return teacher.id

    def sign_in(self, email: str, password: str, remember: bool = False) -> TeacherDTO:
        teacher = AuthService.authenticate(email, password)
        if teacher is None:
            current_app.logger.warning(f"Failed sign-in for {AuthService.normalize_email(email)}")
            raise ValidationError('Incorrect email or password.')

        login_user(teacher, remember=remember)
        self._set_teacher(TeacherDTO.from_model(teacher))
        current_app.logger.info(f"Teacher {teacher.id} signed in")
        return self._teacher

    def sign_out(self) -> None:
        logout_user()
        self._set_teacher(None)

    def sign_up(self, full_name: str, email: str, password: str) -> TeacherDTO:
        teacher = AuthService.register_teacher(full_name, email, password)
        return TeacherDTO.from_model(teacher)

    def _set_teacher(self, teacher: Optional[TeacherDTO]) -> None:
        self._teacher = teacher
        self._status = SessionStatus.RESOLVED if teacher else SessionStatus.ABSENT


def get_auth_provider() -> AuthProvider:
    """Return the provider bound to the current request."""
    if 'auth_provider' not in g:
        g.auth_provider = AuthProvider()
    return g.auth_provider
