"""
Card Service - card CRUD and the statistics write path used by study sessions.
"""
from typing import List, Optional

from flask import current_app

from flashlearn_app.core.extensions import db
from flashlearn_app.core.error_handlers import NotFoundError
from flashlearn_app.utils.time_utils import utcnow
from ..models import Card
from ..schemas import CardCreate, CardStatsUpdate, CardUpdate
from .deck_service import DeckService


class CardService:
    """Service for Card related operations."""

    @staticmethod
    def get_accessible_card(card_id: int, user) -> Card:
        card = db.session.get(Card, card_id)
        if card is None or not (card.creator_user_id == user.user_id or user.is_admin):
            raise NotFoundError('Card not found or access denied', resource='card')
        return card

    @staticmethod
    def create_card(user, data: CardCreate) -> Card:
        deck = DeckService.get_accessible_deck(data.deck_id, user)
        card = Card(
            front=data.front,
            back=data.back,
            deck_id=deck.deck_id,
            creator_user_id=user.user_id,
            difficulty=data.difficulty,
            tags=data.tags,
        )
        db.session.add(card)
        DeckService.refresh_card_count(deck, commit=False)
        db.session.commit()
        return card

    @staticmethod
    def list_cards(deck_id: int, user, difficulty: Optional[str] = None) -> List[Card]:
        """
        Cards of an accessible deck, newest first.

        An empty list is a valid answer, not an error.
        """
        deck = DeckService.get_accessible_deck(deck_id, user)
        query = Card.query.filter_by(deck_id=deck.deck_id)
        if difficulty:
            query = query.filter_by(difficulty=difficulty)
        return query.order_by(Card.created_at.desc(), Card.card_id.desc()).all()

    @staticmethod
    def update_card(card_id: int, user, data: CardUpdate) -> Card:
        card = CardService.get_accessible_card(card_id, user)
        for field in ('front', 'back', 'difficulty', 'tags'):
            value = getattr(data, field)
            if value is not None:
                setattr(card, field, value)
        db.session.commit()
        return card

    @staticmethod
    def update_card_stats(card_id: int, user, data: CardStatsUpdate) -> Card:
        """Overwrite the cumulative counters with absolute values (last write wins)."""
        card = CardService.get_accessible_card(card_id, user)
        card.study_count = data.study_count
        card.correct_count = data.correct_count
        card.last_studied = data.last_studied or utcnow()
        db.session.commit()
        current_app.logger.debug(
            f"Card {card_id} stats set to {card.correct_count}/{card.study_count}"
        )
        return card

    @staticmethod
    def delete_card(card_id: int, user) -> None:
        card = CardService.get_accessible_card(card_id, user)
        deck = card.deck
        db.session.delete(card)
        if deck is not None:
            DeckService.refresh_card_count(deck, commit=False)
        db.session.commit()
