"""Database models package for FlashLearn."""

from ..core.extensions import db

from ..modules.auth.models import User
from ..modules.cards.models import Card, Deck

__all__ = [
    'db',
    'User',
    'Deck',
    'Card',
]
