from __future__ import annotations
from sqlalchemy.sql import func
from sqlalchemy.types import JSON
from flashlearn_app.core.extensions import db
from flashlearn_app.utils.accuracy import compute_accuracy
from flashlearn_app.utils.time_utils import isoformat_or_none
from .config import CardsModuleDefaultConfig


class Deck(db.Model):
    """A named collection of cards owned by one user."""
    __tablename__ = 'decks'

    deck_id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), default='')
    creator_user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=False, index=True)
    is_public = db.Column(db.Boolean, default=False, nullable=False)
    tags = db.Column(JSON, default=list)
    # Cached COUNT(cards); refreshed by DeckService.refresh_card_count
    card_count = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    cards = db.relationship('Card', backref='deck', lazy=True, cascade='all, delete-orphan')

    def to_dict(self) -> dict:
        creator = self.creator
        return {
            'deck_id': self.deck_id,
            'name': self.name,
            'description': self.description or '',
            'created_by': {
                'user_id': self.creator_user_id,
                'username': creator.username if creator else None,
            },
            'is_public': self.is_public,
            'tags': list(self.tags or []),
            'card_count': self.card_count,
            'created_at': isoformat_or_none(self.created_at),
            'updated_at': isoformat_or_none(self.updated_at),
        }

    def __repr__(self):
        return f'<Deck {self.deck_id} {self.name!r}>'


class Card(db.Model):
    """A front/back pair with a difficulty label and cumulative study statistics."""
    __tablename__ = 'cards'
    __table_args__ = (
        db.CheckConstraint('study_count >= 0', name='ck_cards_study_count_non_negative'),
        db.CheckConstraint('correct_count >= 0 AND correct_count <= study_count', name='ck_cards_correct_count_bounds'),
    )

    card_id = db.Column(db.Integer, primary_key=True)
    front = db.Column(db.String(500), nullable=False)
    back = db.Column(db.String(500), nullable=False)
    deck_id = db.Column(db.Integer, db.ForeignKey('decks.deck_id'), nullable=False, index=True)
    creator_user_id = db.Column(db.Integer, db.ForeignKey('users.user_id'), nullable=False)
    difficulty = db.Column(db.String(10), default=CardsModuleDefaultConfig.DEFAULT_DIFFICULTY, nullable=False)
    tags = db.Column(JSON, default=list)
    study_count = db.Column(db.Integer, default=0, nullable=False)
    correct_count = db.Column(db.Integer, default=0, nullable=False)
    last_studied = db.Column(db.DateTime(timezone=True), nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), server_default=func.now())
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def accuracy(self) -> int:
        return compute_accuracy(self.correct_count or 0, self.study_count or 0)

    def to_dict(self) -> dict:
        return {
            'card_id': self.card_id,
            'front': self.front,
            'back': self.back,
            'deck_id': self.deck_id,
            'deck_name': self.deck.name if self.deck else None,
            'created_by': self.creator_user_id,
            'difficulty': self.difficulty,
            'tags': list(self.tags or []),
            'study_count': self.study_count,
            'correct_count': self.correct_count,
            'accuracy': self.accuracy,
            'last_studied': isoformat_or_none(self.last_studied),
            'created_at': isoformat_or_none(self.created_at),
            'updated_at': isoformat_or_none(self.updated_at),
        }

    def __repr__(self):
        return f'<Card {self.card_id} deck={self.deck_id}>'
