"""Server-side progress of a practice run that has not been submitted yet."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from ..db_instance import db


def _utcnow():
    return datetime.now(timezone.utc)


class PracticeDraft(db.Model):
    """Word snapshot and sentences typed so far; the browser only keeps ``id``."""

    __tablename__ = 'practice_drafts'

    id = db.Column(db.String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    teacher_id = db.Column(db.Integer, db.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False)
    word_set_id = db.Column(db.Integer, db.ForeignKey('word_sets.id', ondelete='CASCADE'), nullable=False, index=True)
    student_name = db.Column(db.String(255), nullable=False)
    # [{"id", "word", "position"}, ...] as they were when the run started
    words = db.Column(db.JSON, nullable=False)
    # [{"word_id", "sentence"}, ...] in word order
    answers = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f'<PracticeDraft {self.id} set={self.word_set_id}>'
