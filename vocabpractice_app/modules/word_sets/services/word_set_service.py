"""
Word Set Service - the teacher's word set manager.

Every operation is scoped to the signed-in teacher: a word set owned by
someone else behaves exactly like one that does not exist. Writes that touch
more than one row run in a single store transaction.
"""
from __future__ import annotations

from typing import List, Sequence

from flask import current_app
from pydantic import ValidationError as PydanticValidationError

from vocabpractice_app.core.error_handlers import NotFoundError, ValidationError
from vocabpractice_app.core.signals import (
    student_progress_restarted,
    word_set_created,
    word_set_deleted,
    words_replaced,
)
from vocabpractice_app.models import WordSet
from vocabpractice_app.schemas import WordListInput, WordSetInput
from vocabpractice_app.services.data_store import DataStore

from ..schemas import (
    AnswerViewDTO,
    StudentAnswersDTO,
    SubmissionDTO,
    WordDTO,
    WordSetDetailDTO,
    WordSetSummaryDTO,
)


class WordSetService:
    """Create, inspect, edit and delete word sets and their submissions."""

    def __init__(self, store: DataStore = None):
        self.store = store or DataStore()

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_word_lengths(words: Sequence[str]) -> None:
        max_length = current_app.config.get('WORD_MAX_LENGTH', 255)
        too_long = [word for word in words if len(word) > max_length]
        if too_long:
            raise ValidationError(f'Words can be at most {max_length} characters.', errors={'words': too_long})

    @classmethod
    def parse_word_set(cls, title: str, words: Sequence[str]) -> WordSetInput:
        try:
            data = WordSetInput(title=title, words=list(words or []))
        except PydanticValidationError as exc:
            raise ValidationError('Please provide a title and at least one word') from exc

        max_length = current_app.config.get('WORD_SET_TITLE_MAX_LENGTH', 255)
        if len(data.title) > max_length:
            raise ValidationError(f'Titles can be at most {max_length} characters.')
        cls._check_word_lengths(data.words)
        return data

    @classmethod
    def parse_word_list(cls, words: Sequence[str]) -> List[str]:
        try:
            data = WordListInput(words=list(words or []))
        except PydanticValidationError as exc:
            raise ValidationError('A word set needs at least one word') from exc

        cls._check_word_lengths(data.words)
        return data.words

    def _owned_word_set(self, teacher_id: int, word_set_id: int) -> WordSet:
        word_set = self.store.get_word_set(word_set_id)
        if word_set is None or word_set.teacher_id != teacher_id:
            current_app.logger.warning(f"Word set {word_set_id} not found for teacher {teacher_id}")
            raise NotFoundError('Word set not found', resource='word_set')
        return word_set

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def create_word_set(self, teacher_id: int, title: str, words: Sequence[str]) -> WordSetDetailDTO:
        """Create a set whose words sit at positions ``0..n-1`` in input order."""
        data = self.parse_word_set(title, words)

        def _write():
            word_set = self.store.insert_word_set(teacher_id, data.title)
            rows = self.store.insert_words(word_set.id, data.words)
            return self._detail(word_set, rows, [])

        detail = self.store.transaction('create_word_set', _write)

        current_app.logger.info(
            f"Teacher {teacher_id} created word set {detail.id} with {len(detail.words)} words"
        )
        word_set_created.send(
            current_app._get_current_object(),
            teacher_id=teacher_id,
            word_set_id=detail.id,
            title=detail.title,
            word_count=len(detail.words),
        )
        return detail

    def list_dashboard(self, teacher_id: int) -> List[WordSetSummaryDTO]:
        """Own word sets, newest first, with word and submission counts."""
        word_sets = self.store.list_word_sets(teacher_id)
        ids = [word_set.id for word_set in word_sets]
        word_counts = self.store.count_words_by_set(ids)
        submission_counts = self.store.count_submissions_by_set(ids)
        return [
            WordSetSummaryDTO(
                id=word_set.id,
                title=word_set.title,
                created_at=word_set.created_at,
                word_count=word_counts.get(word_set.id, 0),
                submission_count=submission_counts.get(word_set.id, 0),
            )
            for word_set in word_sets
        ]

    def load_detail(self, teacher_id: int, word_set_id: int) -> WordSetDetailDTO:
        word_set = self._owned_word_set(teacher_id, word_set_id)
        words = self.store.list_words(word_set.id)
        submissions = self.store.list_submissions(word_set.id)
        return self._detail(word_set, words, submissions)

    def replace_words(self, teacher_id: int, word_set_id: int, words: Sequence[str]) -> List[WordDTO]:
        """Swap the whole word list for a freshly positioned one.

        Deleting the old rows and inserting the new ones happen in one
        transaction, so a failed insert leaves the previous list in place.
        """
        cleaned = self.parse_word_list(words)
        word_set = self._owned_word_set(teacher_id, word_set_id)

        def _write():
            self.store.delete_words(word_set.id)
            rows = self.store.insert_words(word_set.id, cleaned)
            return [WordDTO(id=row.id, word=row.word, position=row.position) for row in rows]

        new_words = self.store.transaction('update_words', _write)

        current_app.logger.info(f"Word set {word_set_id} now has {len(new_words)} words")
        words_replaced.send(
            current_app._get_current_object(),
            teacher_id=teacher_id,
            word_set_id=word_set_id,
            word_count=len(new_words),
        )
        return new_words

    def delete_word_set(self, teacher_id: int, word_set_id: int) -> None:
        """Hard delete; words, submissions and answers go with it."""
        word_set = self._owned_word_set(teacher_id, word_set_id)
        self.store.transaction('delete_word_set', lambda: self.store.delete_word_set(word_set.id))

        current_app.logger.info(f"Teacher {teacher_id} deleted word set {word_set_id}")
        word_set_deleted.send(
            current_app._get_current_object(),
            teacher_id=teacher_id,
            word_set_id=word_set_id,
        )

    def restart_student(self, teacher_id: int, word_set_id: int, student_name: str) -> int:
        """Delete every submission of ``student_name`` for the set; returns how many."""
        word_set = self._owned_word_set(teacher_id, word_set_id)
        name = student_name or ''
        if not name.strip():
            raise ValidationError('A student name is required.')

        deleted = self.store.transaction(
            'restart_student_progress',
            lambda: self.store.delete_submissions(word_set.id, name),
        )

        current_app.logger.info(
            f"Restarted {name!r} on word set {word_set_id}: {deleted} submission(s) removed"
        )
        student_progress_restarted.send(
            current_app._get_current_object(),
            teacher_id=teacher_id,
            word_set_id=word_set_id,
            student_name=name,
            deleted_count=deleted,
        )
        return deleted

    def student_answers(self, teacher_id: int, word_set_id: int, student_name: str) -> StudentAnswersDTO:
        """The newest submission of the pair with word/sentence pairs in answer order."""
        word_set = self._owned_word_set(teacher_id, word_set_id)
        submission = self.store.latest_submission(word_set.id, student_name)
        if submission is None:
            return StudentAnswersDTO(
                word_set_id=word_set.id,
                word_set_title=word_set.title,
                student_name=student_name,
            )

        answers = [
            AnswerViewDTO(word=word.word, sentence=answer.sentence)
            for answer, word in self.store.list_answers(submission.id)
        ]
        return StudentAnswersDTO(
            word_set_id=word_set.id,
            word_set_title=word_set.title,
            student_name=student_name,
            submission_id=submission.id,
            submitted_at=submission.created_at,
            answers=answers,
        )

    # ------------------------------------------------------------------
    @staticmethod
    def _detail(word_set, words, submissions) -> WordSetDetailDTO:
        return WordSetDetailDTO(
            id=word_set.id,
            title=word_set.title,
            created_at=word_set.created_at,
            words=[WordDTO(id=w.id, word=w.word, position=w.position) for w in words],
            submissions=[
                SubmissionDTO(id=s.id, student_name=s.student_name, created_at=s.created_at)
                for s in submissions
            ],
        )
