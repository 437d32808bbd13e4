"""
Submission Service - stores a finished practice run.

The submission row and all of its answers are written in one transaction,
so a rejected answer insert never leaves an empty submission behind.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from flask import current_app
from pydantic import ValidationError as PydanticValidationError

from vocabpractice_app.core.error_handlers import ValidationError
from vocabpractice_app.core.signals import submission_completed
from vocabpractice_app.models import Submission
from vocabpractice_app.schemas import AnswerInput
from vocabpractice_app.services.data_store import DataStore


class SubmissionService:
    """Service for creating submissions with their answers."""

    def __init__(self, store: DataStore = None):
        self.store = store or DataStore()

    @staticmethod
    def validate_answers(answers: Sequence[Tuple[int, str]],
                         expected_word_ids: Optional[Sequence[int]] = None) -> List[AnswerInput]:
        """Check completeness and ordering before anything is written."""
        if not answers:
            raise ValidationError('There are no answers to submit.')

        try:
            parsed = [AnswerInput(word_id=word_id, sentence=sentence) for word_id, sentence in answers]
        except PydanticValidationError as exc:
            raise ValidationError('Every answer needs a sentence.') from exc

        word_ids = [answer.word_id for answer in parsed]
        if len(set(word_ids)) != len(word_ids):
            raise ValidationError('Each word can only be answered once.')
        if expected_word_ids is not None and list(expected_word_ids) != word_ids:
            raise ValidationError('Answers do not match the words of this set.')
        return parsed

    def submit(self, word_set_id: int, student_name: str,
               answers: Sequence[Tuple[int, str]],
               expected_word_ids: Optional[Sequence[int]] = None,
               draft_id: Optional[str] = None) -> Submission:
        """
        Create one submission plus one answer per ``(word_id, sentence)`` pair.

        The practice draft named by ``draft_id`` is removed in the same
        transaction, so it survives a failed submit.

        Raises:
            ValidationError: empty name, empty/duplicate answers or answers
                that do not line up with ``expected_word_ids``
            StoreError: the store rejected either write; nothing persists
        """
        name = (student_name or '').strip()
        if not name:
            raise ValidationError('Please enter your name.')
        cleaned = [
            (answer.word_id, answer.sentence)
            for answer in self.validate_answers(answers, expected_word_ids)
        ]

        def _write():
            submission = self.store.insert_submission(word_set_id, name)
            self.store.insert_answers(submission.id, cleaned)
            if draft_id:
                self.store.delete_draft(draft_id)
            return submission

        submission = self.store.transaction('submit_answers', _write)

        current_app.logger.info(
            f"Submission {submission.id} stored for word set {word_set_id} "
            f"({name!r}, {len(cleaned)} answers)"
        )
        submission_completed.send(
            current_app._get_current_object(),
            submission_id=submission.id,
            word_set_id=word_set_id,
            student_name=name,
            answer_count=len(cleaned),
        )
        return submission
