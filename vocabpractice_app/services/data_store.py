"""Data Store: typed CRUD over teachers, word sets, words, submissions, answers and practice drafts.

Reads return model instances and translate database failures into
:class:`StoreError`. Write primitives only flush; they must run inside
:meth:`DataStore.transaction`, which commits the whole unit of work or rolls
it back.
"""
from __future__ import annotations

import functools
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from ..core.error_handlers import StoreError
from ..models import Answer, PracticeDraft, Submission, Teacher, Word, WordSet, db
from ..utils.db_session import run_with_retry

T = TypeVar("T")


def _read(operation: str):
    """Translate SQLAlchemy failures of a read into :class:`StoreError`."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except SQLAlchemyError as exc:
                self.session.rollback()
                current_app.logger.error(f"Store read '{operation}' failed: {exc}", exc_info=True)
                raise StoreError(f"Failed to load {operation.replace('_', ' ')}", operation=operation) from exc
        return wrapper
    return decorator


class DataStore:
    """Relational store behind the wizard and the word set manager."""

    def __init__(self):
        self.session = db.session

    # ------------------------------------------------------------------
    # Unit of work
    # ------------------------------------------------------------------
    def transaction(self, operation: str, work: Callable[[], T]) -> T:
        """Run ``work`` in one transaction and commit it.

        SQLite lock contention is absorbed by :func:`run_with_retry` before
        anything is reported; a raised ``StoreError`` is final.

        Raises:
            StoreError: if any statement or the commit is rejected. The
                transaction is rolled back, nothing from ``work`` persists.
        """
        try:
            return run_with_retry(self.session, work)
        except SQLAlchemyError as exc:
            self.session.rollback()
            current_app.logger.error(f"Store write '{operation}' failed: {exc}", exc_info=True)
            raise StoreError(f"Failed to {operation.replace('_', ' ')}", operation=operation) from exc
        except Exception:
            self.session.rollback()
            raise

    # ------------------------------------------------------------------
    # teachers
    # ------------------------------------------------------------------
    @_read('teachers')
    def list_teachers(self) -> List[Teacher]:
        return Teacher.query.order_by(Teacher.full_name, Teacher.id).all()

    @_read('teacher')
    def get_teacher(self, teacher_id: int) -> Optional[Teacher]:
        return self.session.get(Teacher, teacher_id)

    # ------------------------------------------------------------------
    # word_sets
    # ------------------------------------------------------------------
    @_read('word_set')
    def get_word_set(self, word_set_id: int) -> Optional[WordSet]:
        return self.session.get(WordSet, word_set_id)

    @_read('word_sets')
    def list_word_sets(self, teacher_id: int) -> List[WordSet]:
        """Word sets of one teacher, newest first."""
        return (
            WordSet.query.filter_by(teacher_id=teacher_id)
            .order_by(WordSet.created_at.desc(), WordSet.id.desc())
            .all()
        )

    def insert_word_set(self, teacher_id: int, title: str) -> WordSet:
        word_set = WordSet(teacher_id=teacher_id, title=title)
        self.session.add(word_set)
        self.session.flush()
        return word_set

    def delete_word_set(self, word_set_id: int) -> int:
        """Delete one word set; words, submissions and answers cascade."""
        return WordSet.query.filter_by(id=word_set_id).delete(synchronize_session='fetch')

    # ------------------------------------------------------------------
    # words
    # ------------------------------------------------------------------
    @_read('words')
    def list_words(self, word_set_id: int) -> List[Word]:
        return Word.query.filter_by(word_set_id=word_set_id).order_by(Word.position).all()

    def insert_words(self, word_set_id: int, words: Sequence[str]) -> List[Word]:
        """Insert ``words`` at positions ``0..n-1`` in the given order."""
        rows = [
            Word(word_set_id=word_set_id, word=text, position=index)
            for index, text in enumerate(words)
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows

    def delete_words(self, word_set_id: int) -> int:
        return Word.query.filter_by(word_set_id=word_set_id).delete(synchronize_session='fetch')

    @_read('word_counts')
    def count_words_by_set(self, word_set_ids: Iterable[int]) -> Dict[int, int]:
        return self._count_by_set(Word, word_set_ids)

    # ------------------------------------------------------------------
    # submissions
    # ------------------------------------------------------------------
    @_read('submissions')
    def list_submissions(self, word_set_id: int) -> List[Submission]:
        """Submissions of one word set, newest first."""
        return (
            Submission.query.filter_by(word_set_id=word_set_id)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .all()
        )

    @_read('latest_submission')
    def latest_submission(self, word_set_id: int, student_name: str) -> Optional[Submission]:
        return (
            Submission.query.filter_by(word_set_id=word_set_id, student_name=student_name)
            .order_by(Submission.created_at.desc(), Submission.id.desc())
            .first()
        )

    def insert_submission(self, word_set_id: int, student_name: str) -> Submission:
        submission = Submission(word_set_id=word_set_id, student_name=student_name)
        self.session.add(submission)
        self.session.flush()
        return submission

    def delete_submissions(self, word_set_id: int, student_name: str) -> int:
        """Delete every submission of the pair; answers cascade."""
        return (
            Submission.query.filter_by(word_set_id=word_set_id, student_name=student_name)
            .delete(synchronize_session='fetch')
        )

    @_read('submission_counts')
    def count_submissions_by_set(self, word_set_ids: Iterable[int]) -> Dict[int, int]:
        return self._count_by_set(Submission, word_set_ids)

    # ------------------------------------------------------------------
    # answers
    # ------------------------------------------------------------------
    def insert_answers(self, submission_id: int, answers: Sequence[Tuple[int, str]]) -> List[Answer]:
        """Insert ``(word_id, sentence)`` pairs in order."""
        rows = [
            Answer(submission_id=submission_id, word_id=word_id, sentence=sentence)
            for word_id, sentence in answers
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows

    @_read('answers')
    def list_answers(self, submission_id: int) -> List[Tuple[Answer, Word]]:
        """Answers of a submission joined to their word, in insertion order."""
        return (
            self.session.query(Answer, Word)
            .join(Word, Answer.word_id == Word.id)
            .filter(Answer.submission_id == submission_id)
            .order_by(Answer.id)
            .all()
        )

    # ------------------------------------------------------------------
    # practice_drafts
    # ------------------------------------------------------------------
    @_read('practice_draft')
    def get_draft(self, draft_id: str) -> Optional[PracticeDraft]:
        return self.session.get(PracticeDraft, draft_id)

    def insert_draft(self, teacher_id: int, word_set_id: int, student_name: str,
                     words: List[dict]) -> PracticeDraft:
        draft = PracticeDraft(
            teacher_id=teacher_id,
            word_set_id=word_set_id,
            student_name=student_name,
            words=words,
            answers=[],
        )
        self.session.add(draft)
        self.session.flush()
        return draft

    def update_draft_answers(self, draft_id: str, answers: List[dict]) -> int:
        """Overwrite the stored answers; 0 means the draft is gone."""
        return (
            PracticeDraft.query.filter_by(id=draft_id)
            .update(
                {'answers': answers, 'updated_at': datetime.now(timezone.utc)},
                synchronize_session='fetch',
            )
        )

    def delete_draft(self, draft_id: str) -> int:
        return PracticeDraft.query.filter_by(id=draft_id).delete(synchronize_session='fetch')

    def purge_drafts(self, older_than: datetime) -> int:
        """Drop abandoned runs last touched before ``older_than``."""
        return (
            PracticeDraft.query.filter(PracticeDraft.updated_at < older_than)
            .delete(synchronize_session='fetch')
        )

    # ------------------------------------------------------------------
    def _count_by_set(self, model, word_set_ids: Iterable[int]) -> Dict[int, int]:
        ids = list(word_set_ids)
        if not ids:
            return {}
        rows = (
            self.session.query(model.word_set_id, func.count(model.id))
            .filter(model.word_set_id.in_(ids))
            .group_by(model.word_set_id)
            .all()
        )
        counts = {word_set_id: 0 for word_set_id in ids}
        counts.update({word_set_id: count for word_set_id, count in rows})
        return counts
