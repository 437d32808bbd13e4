"""Word set and word models."""

from __future__ import annotations

from datetime import datetime, timezone

from ..db_instance import db


class WordSet(db.Model):
    """A titled, ordered collection of words owned by one teacher."""

    __tablename__ = 'word_sets'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    teacher_id = db.Column(db.Integer, db.ForeignKey('teachers.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    words = db.relationship(
        'Word',
        backref='word_set',
        lazy=True,
        order_by='Word.position',
        cascade='all, delete-orphan',
        passive_deletes=True,
    )
    submissions = db.relationship(
        'Submission',
        backref='word_set',
        lazy=True,
        cascade='all, delete-orphan',
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f'<WordSet {self.id} {self.title!r}>'


class Word(db.Model):
    """One word of a set. ``position`` is zero-based and unique per set."""

    __tablename__ = 'words'
    __table_args__ = (
        db.UniqueConstraint('word_set_id', 'position', name='uq_words_set_position'),
        # replaced words must never hand their id to a new row
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True)
    word_set_id = db.Column(db.Integer, db.ForeignKey('word_sets.id', ondelete='CASCADE'), nullable=False, index=True)
    word = db.Column(db.String(255), nullable=False)
    position = db.Column(db.Integer, nullable=False)

    def __repr__(self) -> str:
        return f'<Word {self.position}:{self.word!r}>'
