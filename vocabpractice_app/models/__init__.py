"""Database models package."""

from ..db_instance import db

from .teacher import Teacher
from .word_set import Word, WordSet
from .submission import Answer, Submission
from .practice_draft import PracticeDraft

__all__ = [
    'db',
    'Teacher',
    'WordSet',
    'Word',
    'Submission',
    'Answer',
    'PracticeDraft',
]
