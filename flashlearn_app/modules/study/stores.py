# File: flashlearn_app/modules/study/stores.py
"""
Card store adapters used by the study engine.

ApiCardStore talks to a running FlashLearn server over HTTP with a bearer
token. LocalCardStore goes straight through CardService inside an app
context. Both hand the engine plain StudyCard snapshots and translate their
own failures into FetchError / SyncError.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from flashlearn_app.core.error_handlers import FlashLearnError
from flashlearn_app.core.extensions import db
from flashlearn_app.core.logging_config import get_logger
from .errors import FetchError, SyncError
from .schemas import StatsPayload, StudyCard

logger = get_logger('flashlearn.study')


class CardStore(ABC):
    """What the engine needs from wherever cards live."""

    @abstractmethod
    def list_cards(self, deck_id: int, difficulty: Optional[str] = None) -> List[StudyCard]:
        pass

    @abstractmethod
    def update_card_stats(self, card_id: int, payload: StatsPayload) -> None:
        pass


class ApiCardStore(CardStore):

    def __init__(self, base_url: str, token: str, timeout: float = 10, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._token = token
        self._http = session or requests

    def _headers(self) -> Dict[str, str]:
        return {
            'Authorization': f'Bearer {self._token}',
            'Accept': 'application/json',
        }

    @staticmethod
    def _body(response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

    def list_cards(self, deck_id: int, difficulty: Optional[str] = None) -> List[StudyCard]:
        url = f'{self.base_url}/api/cards/decks/{deck_id}/cards'
        params = {'difficulty': difficulty} if difficulty else None
        try:
            response = self._http.get(url, headers=self._headers(), params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Card list request failed for deck %s: %s", deck_id, e)
            raise FetchError(f"Failed to load cards: {e}") from e

        body = self._body(response)
        if not response.ok or not body.get('success'):
            message = body.get('message') or f"Failed to load cards (HTTP {response.status_code})"
            raise FetchError(message, status_code=response.status_code)

        cards = (body.get('data') or {}).get('cards') or []
        try:
            return [StudyCard.from_dict(card) for card in cards]
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(f"Malformed card data: {e}", status_code=response.status_code) from e

    def update_card_stats(self, card_id: int, payload: StatsPayload) -> None:
        url = f'{self.base_url}/api/cards/{card_id}/stats'
        try:
            response = self._http.put(url, headers=self._headers(), json=payload.to_dict(), timeout=self.timeout)
        except requests.RequestException as e:
            raise SyncError(f"Failed to update card statistics: {e}", card_id=card_id) from e

        body = self._body(response)
        if not response.ok or not body.get('success'):
            message = body.get('message') or f"HTTP {response.status_code}"
            raise SyncError(message, card_id=card_id, status_code=response.status_code)


class LocalCardStore(CardStore):
    """Runs the card service in-process on behalf of ``user_id``."""

    def __init__(self, app, user_id: int):
        self.app = app
        self.user_id = user_id

    def _load_user(self, error_cls):
        from flashlearn_app.modules.auth.models import User
        user = db.session.get(User, self.user_id)
        if user is None:
            raise error_cls('User not found')
        return user

    def list_cards(self, deck_id: int, difficulty: Optional[str] = None) -> List[StudyCard]:
        from flashlearn_app.modules.cards.services import CardService

        with self.app.app_context():
            try:
                user = self._load_user(FetchError)
                cards = CardService.list_cards(deck_id, user, difficulty)
                return [StudyCard.from_dict(card.to_dict()) for card in cards]
            except FlashLearnError as e:
                raise FetchError(e.message, status_code=e.status_code) from e
            except SQLAlchemyError as e:
                raise FetchError(f"Failed to load cards: {e}") from e

    def update_card_stats(self, card_id: int, payload: StatsPayload) -> None:
        from flashlearn_app.modules.cards.schemas import CardStatsUpdate
        from flashlearn_app.modules.cards.services import CardService

        with self.app.app_context():
            try:
                user = self._load_user(SyncError)
                data = CardStatsUpdate(
                    study_count=payload.study_count,
                    correct_count=payload.correct_count,
                    last_studied=payload.last_studied,
                )
                CardService.update_card_stats(card_id, user, data)
            except PydanticValidationError as e:
                raise SyncError(f"Rejected statistics for card {card_id}: {e.errors()[0]['msg']}", card_id=card_id) from e
            except FlashLearnError as e:
                raise SyncError(e.message, card_id=card_id, status_code=e.status_code) from e
            except SQLAlchemyError as e:
                db.session.rollback()
                raise SyncError(f"Failed to update card statistics: {e}", card_id=card_id) from e
