"""
Cards Schemas
=============
Pydantic request models for the deck/card API. Field limits come from
``CardsModuleDefaultConfig``.
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import CardsModuleDefaultConfig as _cfg

Difficulty = Literal['easy', 'medium', 'hard']


def _clean_tags(tags):
    if tags is None:
        return None
    cleaned = [tag.strip() for tag in tags if tag.strip()]
    for tag in cleaned:
        if len(tag) > _cfg.TAG_MAX_LENGTH:
            raise ValueError(f'Each tag cannot exceed {_cfg.TAG_MAX_LENGTH} characters')
    if len(cleaned) > _cfg.MAX_TAGS:
        raise ValueError(f'A maximum of {_cfg.MAX_TAGS} tags is allowed')
    return cleaned


class DeckCreate(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=_cfg.DECK_NAME_MAX_LENGTH)
    description: str = Field(default='', max_length=_cfg.DECK_DESCRIPTION_MAX_LENGTH)
    is_public: bool = False
    tags: List[str] = Field(default_factory=list)

    @field_validator('tags')
    @classmethod
    def valid_tags(cls, v):
        return _clean_tags(v)


class CardCreate(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    deck_id: int
    front: str = Field(min_length=1, max_length=_cfg.CARD_TEXT_MAX_LENGTH)
    back: str = Field(min_length=1, max_length=_cfg.CARD_TEXT_MAX_LENGTH)
    difficulty: Difficulty = _cfg.DEFAULT_DIFFICULTY
    tags: List[str] = Field(default_factory=list)

    @field_validator('tags')
    @classmethod
    def valid_tags(cls, v):
        return _clean_tags(v)


class CardUpdate(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)

    front: Optional[str] = Field(default=None, min_length=1, max_length=_cfg.CARD_TEXT_MAX_LENGTH)
    back: Optional[str] = Field(default=None, min_length=1, max_length=_cfg.CARD_TEXT_MAX_LENGTH)
    difficulty: Optional[Difficulty] = None
    tags: Optional[List[str]] = None

    @field_validator('tags')
    @classmethod
    def valid_tags(cls, v):
        return _clean_tags(v)


class CardStatsUpdate(BaseModel):
    """Absolute (never delta) statistics overwrite."""
    model_config = ConfigDict(extra='ignore')

    study_count: int = Field(ge=0)
    correct_count: int = Field(ge=0)
    last_studied: Optional[datetime] = None

    @model_validator(mode='after')
    def correct_within_studied(self):
        if self.correct_count > self.study_count:
            raise ValueError('correct_count cannot exceed study_count')
        return self


class DifficultyQuery(BaseModel):
    model_config = ConfigDict(extra='ignore')

    difficulty: Optional[Literal['easy', 'medium', 'hard', 'all']] = None

    @field_validator('difficulty', mode='before')
    @classmethod
    def blank_is_none(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            return v or None
        return v

    @property
    def filter_value(self) -> Optional[str]:
        return None if self.difficulty in (None, 'all') else self.difficulty
