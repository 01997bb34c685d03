"""
Deck Service - deck lifecycle and ownership checks.
"""
from flask import current_app
from sqlalchemy import func

from flashlearn_app.core.extensions import db
from flashlearn_app.core.error_handlers import NotFoundError
from flashlearn_app.core.signals import deck_deleted
from ..models import Card, Deck
from ..schemas import DeckCreate


class DeckService:
    """Service for Deck related operations."""

    @staticmethod
    def can_access(deck: Deck, user) -> bool:
        return deck.creator_user_id == user.user_id or user.is_admin

    @staticmethod
    def get_accessible_deck(deck_id: int, user) -> Deck:
        """Return the deck if ``user`` owns it (or is admin); 404 otherwise."""
        deck = db.session.get(Deck, deck_id)
        if deck is None or not DeckService.can_access(deck, user):
            raise NotFoundError('Deck not found or access denied', resource='deck')
        return deck

    @staticmethod
    def create_deck(user, data: DeckCreate) -> Deck:
        deck = Deck(
            name=data.name,
            description=data.description,
            creator_user_id=user.user_id,
            is_public=data.is_public,
            tags=data.tags,
        )
        db.session.add(deck)
        db.session.commit()
        current_app.logger.info(f"Deck created: {deck.deck_id} by user {user.user_id}")
        return deck

    @staticmethod
    def list_decks(user):
        """The user's decks, most recently updated first. Admins see every deck."""
        query = Deck.query
        if not user.is_admin:
            query = query.filter_by(creator_user_id=user.user_id)
        return query.order_by(Deck.updated_at.desc(), Deck.deck_id.desc()).all()

    @staticmethod
    def refresh_card_count(deck: Deck, commit: bool = True) -> int:
        """Recompute the cached card count from the cards table."""
        db.session.flush()
        deck.card_count = db.session.query(func.count(Card.card_id)).filter(Card.deck_id == deck.deck_id).scalar() or 0
        if commit:
            db.session.commit()
        return deck.card_count

    @staticmethod
    def delete_deck(deck_id: int, user) -> int:
        """Delete a deck and every card in it. Returns the number of cards removed."""
        deck = DeckService.get_accessible_deck(deck_id, user)
        removed = len(deck.cards)
        # Deck.cards cascades the delete to every card
        db.session.delete(deck)
        db.session.commit()
        current_app.logger.info(f"Deck {deck_id} deleted with {removed} cards")

        try:
            deck_deleted.send(current_app._get_current_object(), user_id=user.user_id, deck_id=deck_id, cards_deleted=removed)
        except Exception as e:
            current_app.logger.error(f"Error emitting deck_deleted signal: {e}")
        return removed
