import pytest

from flashlearn_app import db
from flashlearn_app.core.signals import deck_deleted
from flashlearn_app.models import Card, Deck

from conftest import bearer


@pytest.fixture
def deck(client, auth_headers):
    response = client.post(
        '/api/cards/decks',
        headers=auth_headers,
        json={'name': '  Spanish Verbs ', 'description': 'Common verbs', 'tags': [' spanish ', '', 'verbs']},
    )
    assert response.status_code == 201
    return response.get_json()['data']['deck']


def add_card(client, headers, deck_id, front='hablar', back='to speak', difficulty='medium', **extra):
    payload = {'deck_id': deck_id, 'front': front, 'back': back, 'difficulty': difficulty}
    payload.update(extra)
    return client.post('/api/cards', headers=headers, json=payload)


def test_routes_require_token(client):
    for method, path in [
        ('get', '/api/cards/decks'),
        ('post', '/api/cards/decks'),
        ('post', '/api/cards'),
        ('get', '/api/cards/decks/1/cards'),
        ('put', '/api/cards/1/stats'),
        ('delete', '/api/cards/1'),
    ]:
        response = getattr(client, method)(path)
        assert response.status_code == 401, path


def test_create_deck_cleans_input(deck):
    assert deck['name'] == 'Spanish Verbs'
    assert deck['tags'] == ['spanish', 'verbs']
    assert deck['card_count'] == 0
    assert deck['is_public'] is False
    assert deck['created_by']['username'] == 'alice'


def test_create_deck_validation(client, auth_headers):
    response = client.post('/api/cards/decks', headers=auth_headers, json={'name': ''})
    assert response.status_code == 400
    assert response.get_json()['code'] == 'VALIDATION_ERROR'

    response = client.post(
        '/api/cards/decks',
        headers=auth_headers,
        json={'name': 'Too many tags', 'tags': ['a', 'b', 'c', 'd', 'e', 'f']},
    )
    assert response.status_code == 400


def test_list_decks_newest_update_first(client, auth_headers, deck):
    add_card(client, auth_headers, deck['deck_id'])

    response = client.get('/api/cards/decks', headers=auth_headers)
    assert response.status_code == 200
    names = [d['name'] for d in response.get_json()['data']['decks']]
    assert names[0] == 'Spanish Verbs'
    assert 'Getting Started' in names


def test_card_count_follows_adds_and_deletes(client, auth_headers, deck):
    deck_id = deck['deck_id']
    first = add_card(client, auth_headers, deck_id).get_json()['data']['card']
    add_card(client, auth_headers, deck_id, front='comer', back='to eat')

    listing = client.get(f'/api/cards/decks/{deck_id}/cards', headers=auth_headers).get_json()['data']
    assert listing['deck']['card_count'] == 2
    assert [c['front'] for c in listing['cards']] == ['comer', 'hablar']

    assert client.delete(f"/api/cards/{first['card_id']}", headers=auth_headers).status_code == 200
    listing = client.get(f'/api/cards/decks/{deck_id}/cards', headers=auth_headers).get_json()['data']
    assert listing['deck']['card_count'] == 1


def test_card_json_form(client, auth_headers, deck):
    card = add_card(client, auth_headers, deck['deck_id'], tags=['verb']).get_json()['data']['card']
    assert card['deck_name'] == 'Spanish Verbs'
    assert card['study_count'] == 0
    assert card['correct_count'] == 0
    assert card['accuracy'] == 0
    assert card['last_studied'] is None
    assert card['tags'] == ['verb']


def test_blank_tags_do_not_count_toward_limit(client, auth_headers, deck):
    response = add_card(client, auth_headers, deck['deck_id'], tags=['verb', ' ', ' ', ' ', ' ', ' '])
    assert response.status_code == 201
    assert response.get_json()['data']['card']['tags'] == ['verb']

    response = add_card(client, auth_headers, deck['deck_id'], tags=['a', 'b', '', 'c', 'd', 'e', 'f'])
    assert response.status_code == 400


def test_create_card_validation(client, auth_headers, deck):
    response = add_card(client, auth_headers, deck['deck_id'], front='   ')
    assert response.status_code == 400

    response = add_card(client, auth_headers, deck['deck_id'], difficulty='extreme')
    assert response.status_code == 400

    response = add_card(client, auth_headers, deck['deck_id'], back='x' * 501)
    assert response.status_code == 400


def test_difficulty_filter(client, auth_headers, deck):
    deck_id = deck['deck_id']
    add_card(client, auth_headers, deck_id, front='ser', difficulty='hard')
    add_card(client, auth_headers, deck_id, front='ir', difficulty='easy')
    add_card(client, auth_headers, deck_id, front='estar', difficulty='hard')

    url = f'/api/cards/decks/{deck_id}/cards'
    hard = client.get(url, headers=auth_headers, query_string={'difficulty': 'hard'}).get_json()['data']['cards']
    assert sorted(c['front'] for c in hard) == ['estar', 'ser']

    everything = client.get(url, headers=auth_headers, query_string={'difficulty': 'all'}).get_json()['data']['cards']
    assert len(everything) == 3

    bad = client.get(url, headers=auth_headers, query_string={'difficulty': 'extreme'})
    assert bad.status_code == 400


def test_update_card(client, auth_headers, deck):
    card = add_card(client, auth_headers, deck['deck_id']).get_json()['data']['card']

    response = client.put(
        f"/api/cards/{card['card_id']}",
        headers=auth_headers,
        json={'back': 'to talk', 'difficulty': 'easy'},
    )
    assert response.status_code == 200
    updated = response.get_json()['data']['card']
    assert updated['front'] == 'hablar'
    assert updated['back'] == 'to talk'
    assert updated['difficulty'] == 'easy'


def test_update_card_ignores_statistics(client, auth_headers, deck):
    card = add_card(client, auth_headers, deck['deck_id']).get_json()['data']['card']

    response = client.put(f"/api/cards/{card['card_id']}", headers=auth_headers, json={'study_count': 9})
    assert response.status_code == 200
    assert response.get_json()['data']['card']['study_count'] == 0


def test_stats_overwrite_is_absolute(client, auth_headers, deck):
    card = add_card(client, auth_headers, deck['deck_id']).get_json()['data']['card']
    url = f"/api/cards/{card['card_id']}/stats"

    response = client.put(url, headers=auth_headers, json={'study_count': 4, 'correct_count': 3})
    assert response.status_code == 200
    stats = response.get_json()['data']['card']
    assert (stats['study_count'], stats['correct_count'], stats['accuracy']) == (4, 3, 75)
    assert stats['last_studied'] is not None

    response = client.put(
        url, headers=auth_headers,
        json={'study_count': 5, 'correct_count': 3, 'last_studied': '2024-01-02T03:04:05Z'},
    )
    stats = response.get_json()['data']['card']
    assert (stats['study_count'], stats['correct_count']) == (5, 3)
    assert stats['last_studied'].startswith('2024-01-02T03:04:05')


def test_stats_reject_inconsistent_counts(client, auth_headers, deck):
    card = add_card(client, auth_headers, deck['deck_id']).get_json()['data']['card']
    url = f"/api/cards/{card['card_id']}/stats"

    assert client.put(url, headers=auth_headers, json={'study_count': 1, 'correct_count': 2}).status_code == 400
    assert client.put(url, headers=auth_headers, json={'study_count': -1, 'correct_count': 0}).status_code == 400


def test_other_users_cannot_see_cards(client, auth_headers, register_user, deck):
    card = add_card(client, auth_headers, deck['deck_id']).get_json()['data']['card']
    other = bearer(register_user(username='mallory').get_json()['data']['token'])

    response = client.get(f"/api/cards/decks/{deck['deck_id']}/cards", headers=other)
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Deck not found or access denied'

    response = client.put(f"/api/cards/{card['card_id']}/stats", headers=other, json={'study_count': 1, 'correct_count': 1})
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Card not found or access denied'

    response = add_card(client, other, deck['deck_id'])
    assert response.status_code == 404


def test_admin_sees_every_deck(client, auth_headers, admin_headers, deck):
    response = client.get('/api/cards/decks', headers=admin_headers)
    names = [d['name'] for d in response.get_json()['data']['decks']]
    assert 'Spanish Verbs' in names

    response = client.get(f"/api/cards/decks/{deck['deck_id']}/cards", headers=admin_headers)
    assert response.status_code == 200


def test_delete_deck_cascades(app, client, auth_headers, deck):
    deck_id = deck['deck_id']
    add_card(client, auth_headers, deck_id)
    add_card(client, auth_headers, deck_id, front='comer')

    received = []

    def on_deleted(sender, **kwargs):
        received.append(kwargs)

    deck_deleted.connect(on_deleted)
    try:
        response = client.delete(f'/api/cards/decks/{deck_id}', headers=auth_headers)
    finally:
        deck_deleted.disconnect(on_deleted)

    assert response.status_code == 200
    assert received and received[0]['deck_id'] == deck_id
    assert received[0]['cards_deleted'] == 2
    with app.app_context():
        assert db.session.get(Deck, deck_id) is None
        assert Card.query.filter_by(deck_id=deck_id).count() == 0

    response = client.get(f'/api/cards/decks/{deck_id}/cards', headers=auth_headers)
    assert response.status_code == 404


def test_unknown_api_route(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'Route not found', 'code': 'NOT_FOUND'}


def test_health(client):
    response = client.get('/api/health')
    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == 'FlashLearn API is running'
    assert body['data']['timestamp']
