# File: vocabpractice_app/modules/practice/wizard.py
"""Practice wizard: the student flow as an explicit state machine.

Steps run in a fixed order::

    SelectTeacher -> EnterName -> SelectWordSet -> Answering -> Complete

Each step is its own frozen dataclass carrying only the data collected so
far, so a state that skips a step cannot be built. ``PracticeWizard`` owns
the current state, performs the transitions and runs the submit side effect
when the last word is answered. The state round-trips through the Flask
session with :meth:`PracticeWizard.to_dict` / :meth:`PracticeWizard.from_dict`.

Only identifiers go into the session cookie. The words and sentences of a
run in progress live in a :class:`PracticeDraft` row, saved after every
answered word and removed together with the submit.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Tuple, Union

from flask import current_app

from vocabpractice_app.core.error_handlers import (
    StoreError,
    SubmitError,
    ValidationError,
    WizardStateError,
)
from vocabpractice_app.services.data_store import DataStore

from .services.submission_service import SubmissionService


class WizardStep(str, Enum):
    SELECT_TEACHER = 'select_teacher'
    ENTER_NAME = 'enter_name'
    SELECT_WORD_SET = 'select_word_set'
    ANSWERING = 'answering'
    COMPLETE = 'complete'


@dataclass(frozen=True)
class WordEntry:
    id: int
    word: str
    position: int


@dataclass(frozen=True)
class AnswerDraft:
    word_id: int
    sentence: str


@dataclass(frozen=True)
class SelectTeacher:
    step = WizardStep.SELECT_TEACHER


@dataclass(frozen=True)
class EnterName:
    teacher_id: int
    step = WizardStep.ENTER_NAME


@dataclass(frozen=True)
class SelectWordSet:
    teacher_id: int
    student_name: str
    step = WizardStep.SELECT_WORD_SET


@dataclass(frozen=True)
class Answering:
    teacher_id: int
    student_name: str
    word_set_id: int
    draft_id: str
    words: Tuple[WordEntry, ...]
    current_word_index: int = 0
    answers: Tuple[AnswerDraft, ...] = field(default_factory=tuple)
    step = WizardStep.ANSWERING

    @property
    def current_word(self) -> WordEntry:
        return self.words[self.current_word_index]

    @property
    def is_last_word(self) -> bool:
        return self.current_word_index == len(self.words) - 1


@dataclass(frozen=True)
class Complete:
    word_set_id: int
    student_name: str
    submission_id: int
    step = WizardStep.COMPLETE


WizardState = Union[SelectTeacher, EnterName, SelectWordSet, Answering, Complete]


def _coerce_id(value) -> Optional[int]:
    """Form values arrive as strings; blank or non-numeric means "not chosen"."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text.isdigit():
        return None
    return int(text)


class PracticeWizard:
    """Drives one student through a practice run."""

    SESSION_KEY = 'practice_wizard'

    def __init__(self, state: WizardState = None, store: DataStore = None,
                 submission_service: SubmissionService = None):
        self.state: WizardState = state if state is not None else SelectTeacher()
        self.store = store or DataStore()
        self.submission_service = submission_service or SubmissionService(self.store)

    @property
    def step(self) -> WizardStep:
        return self.state.step

    def _expect(self, state_type, action: str):
        if not isinstance(self.state, state_type):
            raise WizardStateError(
                f"Cannot {action} during step '{self.step.value}'.",
                step=self.step.value,
            )
        return self.state

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select_teacher(self, teacher_id) -> EnterName:
        self._expect(SelectTeacher, 'select a teacher')
        resolved_id = _coerce_id(teacher_id)
        if resolved_id is None:
            raise ValidationError('Please select a teacher.')
        if self.store.get_teacher(resolved_id) is None:
            raise ValidationError('Please select a teacher.')

        self.state = EnterName(teacher_id=resolved_id)
        return self.state

    def enter_name(self, student_name: str) -> SelectWordSet:
        state = self._expect(EnterName, 'enter a name')
        name = (student_name or '').strip()
        if not name:
            raise ValidationError('Please enter your name.')
        max_length = current_app.config.get('PRACTICE_STUDENT_NAME_MAX_LENGTH', 255)
        if len(name) > max_length:
            raise ValidationError(f'Names can be at most {max_length} characters.')

        self.state = SelectWordSet(teacher_id=state.teacher_id, student_name=name)
        return self.state

    def select_word_set(self, word_set_id) -> Answering:
        state = self._expect(SelectWordSet, 'select a word set')
        resolved_id = _coerce_id(word_set_id)
        name = (state.student_name or '').strip()
        if not state.teacher_id or not name or resolved_id is None:
            raise ValidationError('Please complete all fields.')

        word_set = self.store.get_word_set(resolved_id)
        if word_set is None or word_set.teacher_id != state.teacher_id:
            raise ValidationError('Please choose one of the listed word sets.')

        words = tuple(
            WordEntry(id=word.id, word=word.word, position=word.position)
            for word in self.store.list_words(resolved_id)
        )
        if not words:
            raise ValidationError('This word set has no words yet.')

        max_age = timedelta(hours=current_app.config.get('PRACTICE_DRAFT_MAX_AGE_HOURS', 72))

        def _start():
            self.store.purge_drafts(datetime.now(timezone.utc) - max_age)
            return self.store.insert_draft(
                state.teacher_id,
                resolved_id,
                name,
                [{'id': w.id, 'word': w.word, 'position': w.position} for w in words],
            )

        draft = self.store.transaction('start_practice', _start)

        self.state = Answering(
            teacher_id=state.teacher_id,
            student_name=name,
            word_set_id=resolved_id,
            draft_id=draft.id,
            words=words,
        )
        return self.state

    def advance(self, sentence: str) -> WizardState:
        """Record the sentence for the current word and move on.

        On the last word this submits every answer. A failed submit leaves
        the wizard on the last word with the earlier answers kept, so the
        student can advance again to retry.
        """
        state = self._expect(Answering, 'answer a word')
        text = (sentence or '').strip()
        if not text:
            raise ValidationError('Please write a sentence.')
        max_length = current_app.config.get('PRACTICE_SENTENCE_MAX_LENGTH', 2000)
        if len(text) > max_length:
            raise ValidationError(f'Sentences can be at most {max_length} characters.')

        # Truncating to the cursor keeps exactly one answer per answered word,
        # also when the final advance is retried after a failed submit.
        answers = state.answers[:state.current_word_index] + (
            AnswerDraft(word_id=state.current_word.id, sentence=text),
        )

        if not state.is_last_word:
            rows = [{'word_id': a.word_id, 'sentence': a.sentence} for a in answers]
            saved = self.store.transaction(
                'save_answer',
                lambda: self.store.update_draft_answers(state.draft_id, rows),
            )
            if not saved:
                # word set deleted or the draft expired
                self.state = SelectTeacher()
                raise WizardStateError('This practice run is no longer available.', step=state.step.value)

            self.state = Answering(
                teacher_id=state.teacher_id,
                student_name=state.student_name,
                word_set_id=state.word_set_id,
                draft_id=state.draft_id,
                words=state.words,
                current_word_index=state.current_word_index + 1,
                answers=answers,
            )
            return self.state

        try:
            submission = self.submission_service.submit(
                state.word_set_id,
                state.student_name,
                [(answer.word_id, answer.sentence) for answer in answers],
                expected_word_ids=[word.id for word in state.words],
                draft_id=state.draft_id,
            )
        except StoreError as exc:
            current_app.logger.warning(
                f"Submit failed for word set {state.word_set_id} ({state.student_name!r}): {exc.message}"
            )
            raise SubmitError() from exc

        self.state = Complete(
            word_set_id=state.word_set_id,
            student_name=state.student_name,
            submission_id=submission.id,
        )
        return self.state

    def restart(self) -> SelectTeacher:
        """Discard everything collected and go back to the first step."""
        state = self.state
        self.state = SelectTeacher()
        if isinstance(state, Answering):
            self._discard_draft(state.draft_id)
        return self.state

    def _discard_draft(self, draft_id: str) -> None:
        try:
            self.store.transaction('discard_practice', lambda: self.store.delete_draft(draft_id))
        except StoreError as exc:
            # purged with the other abandoned drafts later
            current_app.logger.warning(f"Could not discard practice draft {draft_id}: {exc.message}")

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        state = self.state
        data = {'step': state.step.value}
        if isinstance(state, (EnterName, SelectWordSet, Answering)):
            data['teacher_id'] = state.teacher_id
        if isinstance(state, (SelectWordSet, Answering, Complete)):
            data['student_name'] = state.student_name
        if isinstance(state, (Answering, Complete)):
            data['word_set_id'] = state.word_set_id
        if isinstance(state, Answering):
            data['draft_id'] = state.draft_id
        if isinstance(state, Complete):
            data['submission_id'] = state.submission_id
        return data

    @classmethod
    def from_dict(cls, data, store: DataStore = None) -> 'PracticeWizard':
        """Rebuild a wizard; anything malformed starts a fresh run.

        Raises:
            StoreError: the practice draft could not be read
        """
        store = store or DataStore()
        try:
            state = cls._state_from_dict(data, store)
        except (KeyError, TypeError, ValueError):
            state = SelectTeacher()
        return cls(state=state, store=store)

    @staticmethod
    def _state_from_dict(data, store: DataStore) -> WizardState:
        if not data:
            return SelectTeacher()
        step = WizardStep(data['step'])
        if step is WizardStep.SELECT_TEACHER:
            return SelectTeacher()
        if step is WizardStep.ENTER_NAME:
            return EnterName(teacher_id=int(data['teacher_id']))
        if step is WizardStep.SELECT_WORD_SET:
            return SelectWordSet(teacher_id=int(data['teacher_id']), student_name=str(data['student_name']))
        if step is WizardStep.ANSWERING:
            return PracticeWizard._answering_from_draft(data, store)
        return Complete(
            word_set_id=int(data['word_set_id']),
            student_name=str(data['student_name']),
            submission_id=int(data['submission_id']),
        )

    @staticmethod
    def _answering_from_draft(data, store: DataStore) -> Answering:
        teacher_id = int(data['teacher_id'])
        student_name = str(data['student_name'])
        word_set_id = int(data['word_set_id'])
        draft_id = data['draft_id']
        if not isinstance(draft_id, str):
            raise ValueError('draft id must be a string')

        draft = store.get_draft(draft_id)
        if draft is None:
            raise ValueError('practice draft is gone')
        if (draft.teacher_id, draft.word_set_id, draft.student_name) != (teacher_id, word_set_id, student_name):
            raise ValueError('practice draft belongs to another run')

        words = tuple(
            WordEntry(id=int(w['id']), word=str(w['word']), position=int(w['position']))
            for w in draft.words
        )
        answers = tuple(
            AnswerDraft(word_id=int(a['word_id']), sentence=str(a['sentence']))
            for a in draft.answers
        )
        if not words or len(answers) >= len(words):
            raise ValueError('inconsistent answering state')
        if any(answer.word_id != word.id for answer, word in zip(answers, words)):
            raise ValueError('answers do not follow the word order')
        return Answering(
            teacher_id=teacher_id,
            student_name=student_name,
            word_set_id=word_set_id,
            draft_id=draft_id,
            words=words,
            current_word_index=len(answers),
            answers=answers,
        )
