from dataclasses import dataclass
from enum import Enum


class SessionStatus(str, Enum):
    """Resolution state of the teacher session."""

    LOADING = 'loading'
    RESOLVED = 'resolved'
    ABSENT = 'absent'


@dataclass(frozen=True)
class TeacherDTO:
    id: int
    full_name: str
    email: str

    @classmethod
    def from_model(cls, teacher) -> 'TeacherDTO':
        return cls(id=teacher.id, full_name=teacher.full_name, email=teacher.email)
