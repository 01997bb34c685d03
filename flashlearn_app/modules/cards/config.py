# File: flashlearn_app/modules/cards/config.py

class CardsModuleDefaultConfig:
    CARD_TEXT_MAX_LENGTH = 500
    DECK_NAME_MAX_LENGTH = 100
    DECK_DESCRIPTION_MAX_LENGTH = 500
    TAG_MAX_LENGTH = 20
    MAX_TAGS = 5
    DIFFICULTIES = ('easy', 'medium', 'hard')
    DEFAULT_DIFFICULTY = 'medium'
