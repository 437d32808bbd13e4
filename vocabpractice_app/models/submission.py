"""Submission and answer models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..db_instance import db


class Submission(db.Model):
    """One completed practice attempt by a named student against a word set."""

    __tablename__ = 'submissions'
    __table_args__ = (
        db.Index('ix_submissions_set_student', 'word_set_id', 'student_name'),
    )

    id = db.Column(db.Integer, primary_key=True)
    word_set_id = db.Column(db.Integer, db.ForeignKey('word_sets.id', ondelete='CASCADE'), nullable=False, index=True)
    # Free text typed by the student, not a foreign identity
    student_name = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    answers = db.relationship(
        'Answer',
        backref='submission',
        lazy=True,
        order_by='Answer.id',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f'<Submission {self.id} {self.student_name!r}>'


class Answer(db.Model):
    """A student's sentence for one word within one submission."""

    __tablename__ = 'answers'

    id = db.Column(db.Integer, primary_key=True)
    submission_id = db.Column(db.Integer, db.ForeignKey('submissions.id', ondelete='CASCADE'), nullable=False, index=True)
    word_id = db.Column(db.Integer, db.ForeignKey('words.id', ondelete='CASCADE'), nullable=False, index=True)
    sentence = db.Column(db.Text, nullable=False)

    word = db.relationship('Word', lazy='joined')

    def __repr__(self) -> str:
        return f'<Answer {self.id} word={self.word_id}>'
