"""
Study Schemas
=============
Plain dataclasses exchanged between the engine, the statistics sync and the
card store adapters. No ORM objects cross this boundary.
"""

from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from flashlearn_app.utils.accuracy import compute_accuracy
from flashlearn_app.utils.time_utils import parse_iso_datetime


@dataclass(frozen=True)
class StudyCard:
    """Snapshot of a card as the store returned it."""
    card_id: int
    deck_id: int
    front: str
    back: str
    difficulty: str = 'medium'
    tags: Tuple[str, ...] = ()
    study_count: int = 0
    correct_count: int = 0
    last_studied: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StudyCard':
        """Build from the card JSON form (``Card.to_dict`` / API payload)."""
        return cls(
            card_id=data['card_id'],
            deck_id=data['deck_id'],
            front=data.get('front', ''),
            back=data.get('back', ''),
            difficulty=data.get('difficulty') or 'medium',
            tags=tuple(data.get('tags') or ()),
            study_count=int(data.get('study_count') or 0),
            correct_count=int(data.get('correct_count') or 0),
            last_studied=parse_iso_datetime(data.get('last_studied')),
        )

    @property
    def accuracy(self) -> int:
        return compute_accuracy(self.correct_count, self.study_count)

    def with_stats(self, payload: 'StatsPayload') -> 'StudyCard':
        return replace(
            self,
            study_count=payload.study_count,
            correct_count=payload.correct_count,
            last_studied=payload.last_studied,
        )


@dataclass(frozen=True)
class StatsPayload:
    """Absolute cumulative counters sent to the store after one answer."""
    study_count: int
    correct_count: int
    last_studied: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'study_count': self.study_count,
            'correct_count': self.correct_count,
            'last_studied': self.last_studied.isoformat(),
        }


@dataclass
class SessionStatistics:
    total_cards: int = 0
    studied_cards: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class SessionSummary:
    """What the completion screen shows."""
    deck_id: int
    total_cards: int = 0
    studied_cards: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    accuracy: int = 0
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
