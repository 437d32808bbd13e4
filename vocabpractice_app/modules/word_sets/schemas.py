# File: vocabpractice_app/modules/word_sets/schemas.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import List


@dataclass(frozen=True)
class WordDTO:
    id: int
    word: str
    position: int


@dataclass(frozen=True)
class SubmissionDTO:
    id: int
    student_name: str
    created_at: datetime


@dataclass(frozen=True)
class StudentSummaryDTO:
    """One row per student: their newest submission and how many exist."""
    student_name: str
    latest_submission_id: int
    latest_submitted_at: datetime
    attempt_count: int


@dataclass(frozen=True)
class WordSetSummaryDTO:
    id: int
    title: str
    created_at: datetime
    word_count: int = 0
    submission_count: int = 0


@dataclass(frozen=True)
class WordSetDetailDTO:
    id: int
    title: str
    created_at: datetime
    words: List[WordDTO] = field(default_factory=list)
    submissions: List[SubmissionDTO] = field(default_factory=list)

    @property
    def students(self) -> List[StudentSummaryDTO]:
        """Submissions grouped by student name, newest student first."""
        grouped = {}
        for submission in self.submissions:
            summary = grouped.get(submission.student_name)
            if summary is None:
                # submissions are newest-first, so the first seen is the latest
                grouped[submission.student_name] = StudentSummaryDTO(
                    student_name=submission.student_name,
                    latest_submission_id=submission.id,
                    latest_submitted_at=submission.created_at,
                    attempt_count=1,
                )
            else:
                grouped[submission.student_name] = StudentSummaryDTO(
                    student_name=summary.student_name,
                    latest_submission_id=summary.latest_submission_id,
                    latest_submitted_at=summary.latest_submitted_at,
                    attempt_count=summary.attempt_count + 1,
                )
        return list(grouped.values())


@dataclass(frozen=True)
class AnswerViewDTO:
    word: str
    sentence: str


@dataclass(frozen=True)
class StudentAnswersDTO:
    word_set_id: int
    word_set_title: str
    student_name: str
    submission_id: int = None
    submitted_at: datetime = None
    answers: List[AnswerViewDTO] = field(default_factory=list)

    @property
    def has_submission(self) -> bool:
        return self.submission_id is not None
