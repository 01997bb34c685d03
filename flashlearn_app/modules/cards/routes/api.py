# File: flashlearn_app/modules/cards/routes/api.py
# Every route requires a bearer token.
from flask import request
from flask_login import current_user, login_required
from flashlearn_app.core.error_handlers import success_response
from flashlearn_app.utils.validation import parse_payload
from .. import cards_bp as blueprint
from ..schemas import CardCreate, CardStatsUpdate, CardUpdate, DeckCreate, DifficultyQuery
from ..services import CardService, DeckService

# ==================== DECK ROUTES ====================

@blueprint.route('/decks', methods=['POST'])
@login_required
def create_deck():
    data = parse_payload(DeckCreate)
    deck = DeckService.create_deck(current_user, data)
    return success_response({'deck': deck.to_dict()}, message='Deck created successfully', status_code=201)


@blueprint.route('/decks', methods=['GET'])
@login_required
def list_decks():
    decks = DeckService.list_decks(current_user)
    return success_response({'decks': [deck.to_dict() for deck in decks]})


@blueprint.route('/decks/<int:deck_id>', methods=['DELETE'])
@login_required
def delete_deck(deck_id):
    DeckService.delete_deck(deck_id, current_user)
    return success_response(message='Deck deleted successfully')

# ==================== CARD ROUTES ====================

@blueprint.route('', methods=['POST'])
@login_required
def create_card():
    data = parse_payload(CardCreate)
    card = CardService.create_card(current_user, data)
    return success_response({'card': card.to_dict()}, message='Card created successfully', status_code=201)


@blueprint.route('/decks/<int:deck_id>/cards', methods=['GET'])
@login_required
def list_cards(deck_id):
    """Cards in a deck, optionally ``?difficulty=easy|medium|hard|all``."""
    query = parse_payload(DifficultyQuery, request.args.to_dict())
    cards = CardService.list_cards(deck_id, current_user, difficulty=query.filter_value)
    deck = DeckService.get_accessible_deck(deck_id, current_user)
    return success_response({
        'cards': [card.to_dict() for card in cards],
        'deck': deck.to_dict(),
    })


@blueprint.route('/<int:card_id>', methods=['PUT'])
@login_required
def update_card(card_id):
    data = parse_payload(CardUpdate)
    card = CardService.update_card(card_id, current_user, data)
    return success_response({'card': card.to_dict()}, message='Card updated successfully')


@blueprint.route('/<int:card_id>/stats', methods=['PUT'])
@login_required
def update_card_stats(card_id):
    data = parse_payload(CardStatsUpdate)
    card = CardService.update_card_stats(card_id, current_user, data)
    return success_response({'card': card.to_dict()}, message='Card statistics updated')


@blueprint.route('/<int:card_id>', methods=['DELETE'])
@login_required
def delete_card(card_id):
    CardService.delete_card(card_id, current_user)
    return success_response(message='Card deleted successfully')
