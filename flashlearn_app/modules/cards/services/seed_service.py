"""
Seed Service - the "Getting Started" deck every new account receives.
"""
from flask import current_app

from flashlearn_app.core.extensions import db
from ..models import Card, Deck
from .deck_service import DeckService

SEED_DECK = {
    'name': 'Getting Started',
    'description': (
        'Welcome to FlashLearn! This is a sample deck to help you get started. '
        'Feel free to edit or delete these cards.'
    ),
    'tags': ['welcome', 'sample'],
}

SEED_CARDS = [
    {
        'front': 'What is spaced repetition?',
        'back': (
            'Spaced repetition is a learning technique that involves increasing intervals of time between '
            'subsequent review of previously learned material to exploit the psychological spacing effect.'
        ),
        'difficulty': 'medium',
        'tags': ['learning', 'technique'],
    },
    {
        'front': 'What is active recall?',
        'back': (
            'Active recall is a study method where you actively retrieve information from memory rather than '
            'passively reviewing it. This strengthens memory retention.'
        ),
        'difficulty': 'medium',
        'tags': ['learning', 'technique'],
    },
    {
        'front': 'How often should you review flashcards?',
        'back': (
            'Review frequency depends on your mastery level. New cards may need daily review, while '
            'well-mastered cards can be reviewed less frequently using spaced repetition algorithms.'
        ),
        'difficulty': 'easy',
        'tags': ['study', 'tips'],
    },
    {
        'front': 'What makes a good flashcard?',
        'back': (
            'A good flashcard has a clear, specific question on the front and a concise answer on the back. '
            'It should test one concept at a time and avoid unnecessary information.'
        ),
        'difficulty': 'easy',
        'tags': ['tips', 'creation'],
    },
    {
        'front': 'What is the forgetting curve?',
        'back': (
            'The forgetting curve is a hypothesis that shows how information is lost over time when there is '
            'no attempt to retain it. Regular review helps flatten this curve.'
        ),
        'difficulty': 'hard',
        'tags': ['psychology', 'learning'],
    },
]


class SeedService:

    @staticmethod
    def create_seed_deck(user_id: int) -> Deck:
        deck = Deck(
            name=SEED_DECK['name'],
            description=SEED_DECK['description'],
            creator_user_id=user_id,
            is_public=False,
            tags=list(SEED_DECK['tags']),
        )
        db.session.add(deck)
        db.session.flush()

        db.session.add_all([
            Card(
                front=card['front'],
                back=card['back'],
                deck_id=deck.deck_id,
                creator_user_id=user_id,
                difficulty=card['difficulty'],
                tags=list(card['tags']),
            )
            for card in SEED_CARDS
        ])
        DeckService.refresh_card_count(deck, commit=False)
        db.session.commit()

        current_app.logger.info(f"Seed deck created for user {user_id} with {len(SEED_CARDS)} cards")
        return deck
