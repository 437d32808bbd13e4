from typing import List

from pydantic import BaseModel, Field, field_validator


def normalize_words(raw_words) -> List[str]:
    """Trim every entry and drop the blank ones, keeping input order."""
    if raw_words is None:
        return []
    if isinstance(raw_words, str):
        raw_words = [raw_words]
    return [str(word).strip() for word in raw_words if word is not None and str(word).strip()]


class WordListInput(BaseModel):
    """An edited word list: blanks are dropped, at least one word must remain."""
    words: List[str] = Field(min_length=1)

    @field_validator('words', mode='before')
    @classmethod
    def _clean_words(cls, value):
        return normalize_words(value)

    class Config:
        extra = "ignore"


class WordSetInput(WordListInput):
    title: str = Field(min_length=1)

    @field_validator('title', mode='before')
    @classmethod
    def _clean_title(cls, value):
        return (value or '').strip()


class AnswerInput(BaseModel):
    word_id: int
    sentence: str = Field(min_length=1)

    @field_validator('sentence', mode='before')
    @classmethod
    def _clean_sentence(cls, value):
        return (value or '').strip()
