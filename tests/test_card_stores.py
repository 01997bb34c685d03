from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from flashlearn_app import db
from flashlearn_app.models import Card, Deck
from flashlearn_app.modules.study import (
    ApiCardStore,
    FetchError,
    LocalCardStore,
    StatisticsSync,
    StatsPayload,
    SyncError,
    start_session,
)

CARD_JSON = {
    'card_id': 11,
    'deck_id': 3,
    'front': 'hola',
    'back': 'hello',
    'difficulty': 'easy',
    'tags': ['greeting'],
    'study_count': 4,
    'correct_count': 2,
    'accuracy': 50,
    'last_studied': '2024-05-01T10:00:00+00:00',
}


def fake_response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    if body is None:
        response.json.side_effect = ValueError('no json')
    else:
        response.json.return_value = body
    return response


def payload(study_count=5, correct_count=3):
    return StatsPayload(study_count, correct_count, datetime(2024, 5, 2, 8, 30, tzinfo=timezone.utc))

# ==================== API STORE ====================

def test_api_list_cards_sends_bearer_and_filter():
    body = {'success': True, 'data': {'cards': [CARD_JSON], 'deck': {'deck_id': 3}}}
    with patch('flashlearn_app.modules.study.stores.requests.get', return_value=fake_response(200, body)) as get:
        store = ApiCardStore('http://localhost:5000/', 'tok-123', timeout=3)
        cards = store.list_cards(3, 'easy')

    get.assert_called_once()
    args, kwargs = get.call_args
    assert args[0] == 'http://localhost:5000/api/cards/decks/3/cards'
    assert kwargs['headers']['Authorization'] == 'Bearer tok-123'
    assert kwargs['params'] == {'difficulty': 'easy'}
    assert kwargs['timeout'] == 3

    assert len(cards) == 1
    card = cards[0]
    assert (card.card_id, card.deck_id, card.difficulty) == (11, 3, 'easy')
    assert (card.study_count, card.correct_count) == (4, 2)
    assert card.tags == ('greeting',)
    assert card.accuracy == 50
    assert card.last_studied == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_api_list_cards_without_filter():
    body = {'success': True, 'data': {'cards': []}}
    with patch('flashlearn_app.modules.study.stores.requests.get', return_value=fake_response(200, body)) as get:
        assert ApiCardStore('http://api', 'tok').list_cards(3) == []
    assert get.call_args.kwargs['params'] is None


def test_api_list_cards_error_message_from_server():
    body = {'success': False, 'message': 'Deck not found or access denied', 'code': 'NOT_FOUND'}
    with patch('flashlearn_app.modules.study.stores.requests.get', return_value=fake_response(404, body)):
        with pytest.raises(FetchError) as exc:
            ApiCardStore('http://api', 'tok').list_cards(3)
    assert exc.value.message == 'Deck not found or access denied'
    assert exc.value.status_code == 404


def test_api_list_cards_network_error():
    with patch('flashlearn_app.modules.study.stores.requests.get', side_effect=requests.ConnectionError('refused')):
        with pytest.raises(FetchError):
            ApiCardStore('http://api', 'tok').list_cards(3)


def test_api_list_cards_non_json_error():
    with patch('flashlearn_app.modules.study.stores.requests.get', return_value=fake_response(502)):
        with pytest.raises(FetchError) as exc:
            ApiCardStore('http://api', 'tok').list_cards(3)
    assert '502' in exc.value.message


def test_api_update_card_stats_sends_absolute_values():
    http = MagicMock()
    http.put.return_value = fake_response(200, {'success': True})
    store = ApiCardStore('http://api', 'tok', session=http)

    store.update_card_stats(11, payload())

    args, kwargs = http.put.call_args
    assert args[0] == 'http://api/api/cards/11/stats'
    assert kwargs['json'] == {
        'study_count': 5,
        'correct_count': 3,
        'last_studied': '2024-05-02T08:30:00+00:00',
    }
    assert kwargs['headers']['Authorization'] == 'Bearer tok'


def test_api_update_card_stats_failures():
    http = MagicMock()
    http.put.return_value = fake_response(401, {'success': False, 'message': 'Token expired'})
    store = ApiCardStore('http://api', 'tok', session=http)

    with pytest.raises(SyncError) as exc:
        store.update_card_stats(11, payload())
    assert exc.value.message == 'Token expired'
    assert exc.value.card_id == 11

    http.put.side_effect = requests.Timeout('slow')
    with pytest.raises(SyncError):
        store.update_card_stats(11, payload())


def test_api_update_card_stats_rejects_unsuccessful_envelope():
    http = MagicMock()
    http.put.return_value = fake_response(200, {'success': False, 'message': 'Statistics not saved'})
    store = ApiCardStore('http://api', 'tok', session=http)

    with pytest.raises(SyncError) as exc:
        store.update_card_stats(11, payload())
    assert exc.value.message == 'Statistics not saved'
    assert exc.value.status_code == 200

    http.put.return_value = fake_response(200)
    with pytest.raises(SyncError) as exc:
        store.update_card_stats(11, payload())
    assert '200' in exc.value.message


class FlaskClientHttp:
    """Lets ApiCardStore talk to the app through the Flask test client."""

    class Response:
        def __init__(self, response):
            self._response = response
            self.status_code = response.status_code
            self.ok = response.status_code < 400

        def json(self):
            return self._response.get_json()

    def __init__(self, client):
        self.client = client

    def get(self, url, headers=None, params=None, timeout=None):
        return self.Response(self.client.get(url, headers=headers, query_string=params))

    def put(self, url, headers=None, json=None, timeout=None):
        return self.Response(self.client.put(url, headers=headers, json=json))


def test_api_store_against_running_app(app, client, user_token):
    store = ApiCardStore('', user_token, session=FlaskClientHttp(client))
    decks = client.get('/api/cards/decks', headers={'Authorization': f'Bearer {user_token}'}).get_json()['data']['decks']
    deck_id = decks[0]['deck_id']

    session = start_session(store, deck_id, 'easy')
    assert session.total_cards == 2

    for correct in (True, False):
        session.reveal()
        store.update_card_stats(session.current_card.card_id, session.record_answer(correct))

    with app.app_context():
        easy = Card.query.filter_by(deck_id=deck_id, difficulty='easy').all()
        assert sorted((c.study_count, c.correct_count) for c in easy) == [(1, 0), (1, 1)]

# ==================== LOCAL STORE ====================

@pytest.fixture
def seeded_user(app, register_user):
    user_id = register_user().get_json()['data']['user']['user_id']
    with app.app_context():
        deck = Deck.query.filter_by(creator_user_id=user_id).first()
        return user_id, deck.deck_id


def test_local_store_lists_cards(app, seeded_user):
    user_id, deck_id = seeded_user
    store = LocalCardStore(app, user_id)

    assert len(store.list_cards(deck_id)) == 5
    hard = store.list_cards(deck_id, 'hard')
    assert [c.difficulty for c in hard] == ['hard']


def test_local_store_access_errors(app, seeded_user, register_user):
    _, deck_id = seeded_user
    other_id = register_user(username='mallory').get_json()['data']['user']['user_id']

    with pytest.raises(FetchError) as exc:
        LocalCardStore(app, other_id).list_cards(deck_id)
    assert exc.value.status_code == 404

    with pytest.raises(FetchError):
        LocalCardStore(app, 999).list_cards(deck_id)


def test_local_store_rejects_bad_stats(app, seeded_user):
    user_id, deck_id = seeded_user
    store = LocalCardStore(app, user_id)
    card_id = store.list_cards(deck_id)[0].card_id

    with pytest.raises(SyncError):
        store.update_card_stats(999999, payload())
    with pytest.raises(SyncError):
        # correct_count above study_count never reaches the database
        store.update_card_stats(card_id, StatsPayload(1, 2, datetime.now(timezone.utc)))

    with app.app_context():
        assert db.session.get(Card, card_id).study_count == 0


def test_local_session_persists_cumulative_statistics(app, seeded_user):
    user_id, deck_id = seeded_user
    store = LocalCardStore(app, user_id)
    syncer = StatisticsSync(store)

    session = start_session(store, deck_id, syncer=syncer)
    while not session.is_complete:
        session.reveal()
        session.record_answer(True)
        # One write at a time against the shared in-memory connection
        assert syncer.wait(timeout=10)

    session.restart()
    session.reveal()
    session.record_answer(False)
    assert syncer.wait(timeout=10)
    session.end()

    refreshed = {c.card_id: c for c in store.list_cards(deck_id)}
    first = session.draw[0].card_id
    assert (refreshed[first].study_count, refreshed[first].correct_count) == (2, 1)
    others = [c for card_id, c in refreshed.items() if card_id != first]
    assert all((c.study_count, c.correct_count) == (1, 1) for c in others)
    assert all(c.last_studied is not None for c in refreshed.values())
