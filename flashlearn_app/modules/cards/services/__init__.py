"""
Cards Services
==============
Service layer for decks and cards (only layer that touches the DB).

- DeckService: deck lifecycle, ownership, cached card counts
- CardService: card CRUD and statistics overwrite
- SeedService: "Getting Started" deck for new accounts
"""

from .deck_service import DeckService
from .card_service import CardService
from .seed_service import SeedService

__all__ = ['DeckService', 'CardService', 'SeedService']
