# File: flashlearn_app/modules/study/engine/session.py
"""
Study Session Engine
====================
Walks a shuffled draw of cards one at a time: show the front, reveal the
back, record whether the answer was right, move on. Session statistics live
only in memory; each answer pushes the card's new cumulative counters to the
store through a StatisticsSync without waiting for it.
"""

from dataclasses import replace
from enum import Enum
from typing import List, Optional

from flashlearn_app.core.logging_config import get_logger
from flashlearn_app.modules.cards.config import CardsModuleDefaultConfig
from flashlearn_app.utils.accuracy import compute_accuracy
from flashlearn_app.utils.time_utils import utcnow
from ..errors import EmptySetError, FetchError, InvalidTransitionError
from ..schemas import SessionStatistics, SessionSummary, StatsPayload, StudyCard
from ..signals import study_session_completed, study_session_started
from .shuffle import fisher_yates_shuffle

logger = get_logger('flashlearn.study')


class SessionPhase(str, Enum):
    SHOWING = 'showing'
    FLIPPED = 'flipped'
    COMPLETE = 'complete'
    ENDED = 'ended'


def normalize_difficulty(difficulty: Optional[str]) -> Optional[str]:
    """None / '' / 'all' mean no filter. Anything unknown is rejected."""
    if difficulty is None:
        return None
    value = str(difficulty).strip().lower()
    if value in ('', 'all'):
        return None
    if value not in CardsModuleDefaultConfig.DIFFICULTIES:
        raise ValueError(f"Unknown difficulty: {difficulty!r}")
    return value


class StudySession:
    """
    One pass (or several, via restart) over a fixed draw of cards.

    Construct through ``StudySession.start`` / ``start_session``; the
    constructor expects an already shuffled, non-empty draw.
    """

    def __init__(self, deck_id, draw: List[StudyCard], difficulty: Optional[str] = None, syncer=None):
        if not draw:
            raise EmptySetError(deck_id, difficulty)
        self.deck_id = deck_id
        self.difficulty = difficulty
        self._draw = list(draw)
        self._syncer = syncer
        self._cursor = 0
        self._flipped = False
        self._phase = SessionPhase.SHOWING
        self._stats = SessionStatistics(total_cards=len(self._draw))

    @classmethod
    def start(cls, store, deck_id, difficulty: Optional[str] = None, *, rng=None, syncer=None) -> 'StudySession':
        """
        Load the deck's cards once, filter, shuffle and open a session.

        Raises:
            ValueError: unknown difficulty (before anything is fetched).
            FetchError: the store could not list the cards.
            EmptySetError: nothing matched the filter.
        """
        wanted = normalize_difficulty(difficulty)

        try:
            cards = store.list_cards(deck_id, wanted)
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to load cards for deck {deck_id}: {e}") from e

        if wanted is not None:
            cards = [card for card in cards if card.difficulty == wanted]
        if not cards:
            raise EmptySetError(deck_id, wanted)

        session = cls(deck_id, fisher_yates_shuffle(cards, rng), difficulty=wanted, syncer=syncer)
        logger.info(
            "Study session started: deck=%s difficulty=%s cards=%s",
            deck_id, wanted or 'all', session.total_cards,
        )
        session._emit(study_session_started, deck_id=deck_id,
                      total_cards=session.total_cards, difficulty=wanted)
        return session

    # -- read-only state ---------------------------------------------------

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def flipped(self) -> bool:
        return self._flipped

    @property
    def total_cards(self) -> int:
        return self._stats.total_cards

    @property
    def draw(self) -> List[StudyCard]:
        return list(self._draw)

    @property
    def statistics(self) -> SessionStatistics:
        return replace(self._stats)

    @property
    def is_complete(self) -> bool:
        return self._phase == SessionPhase.COMPLETE

    @property
    def current_card(self) -> Optional[StudyCard]:
        if self._phase in (SessionPhase.COMPLETE, SessionPhase.ENDED):
            return None
        return self._draw[self._cursor]

    @property
    def accuracy(self) -> int:
        return compute_accuracy(self._stats.correct_answers, self._stats.studied_cards)

    def summary(self) -> SessionSummary:
        return SessionSummary(
            deck_id=self.deck_id,
            total_cards=self._stats.total_cards,
            studied_cards=self._stats.studied_cards,
            correct_answers=self._stats.correct_answers,
            incorrect_answers=self._stats.incorrect_answers,
            accuracy=self.accuracy,
            completed=self._stats.studied_cards == self._stats.total_cards,
        )

    # -- transitions -------------------------------------------------------

    def reveal(self) -> StudyCard:
        """Flip the current card. A second call while flipped does nothing."""
        if self._phase == SessionPhase.FLIPPED:
            return self._draw[self._cursor]
        self._require(SessionPhase.SHOWING, 'reveal a card')
        self._flipped = True
        self._phase = SessionPhase.FLIPPED
        return self._draw[self._cursor]

    def record_answer(self, correct: bool) -> StatsPayload:
        """
        Score the flipped card and move on.

        Returns the payload handed to the statistics sync: the card's new
        absolute study/correct counts, not a delta.
        """
        self._require(SessionPhase.FLIPPED, 'record an answer')
        correct = bool(correct)
        card = self._draw[self._cursor]

        self._stats.studied_cards += 1
        if correct:
            self._stats.correct_answers += 1
        else:
            self._stats.incorrect_answers += 1

        payload = StatsPayload(
            study_count=card.study_count + 1,
            correct_count=card.correct_count + (1 if correct else 0),
            last_studied=utcnow(),
        )
        self._draw[self._cursor] = card.with_stats(payload)

        if self._syncer is not None:
            self._syncer.submit(card.card_id, payload)

        self._advance()
        return payload

    def restart(self) -> None:
        """Same draw, same order, statistics zeroed. Nothing is refetched."""
        if self._phase == SessionPhase.ENDED:
            raise InvalidTransitionError('restart', self._phase)
        self._cursor = 0
        self._flipped = False
        self._phase = SessionPhase.SHOWING
        self._stats = SessionStatistics(total_cards=len(self._draw))
        logger.debug("Study session restarted: deck=%s", self.deck_id)

    def end(self) -> SessionSummary:
        if self._phase != SessionPhase.ENDED:
            self._phase = SessionPhase.ENDED
            self._flipped = False
            logger.info(
                "Study session ended: deck=%s studied=%s/%s",
                self.deck_id, self._stats.studied_cards, self._stats.total_cards,
            )
        return self.summary()

    # -- internals ---------------------------------------------------------

    def _advance(self) -> None:
        self._flipped = False
        if self._cursor + 1 < len(self._draw):
            self._cursor += 1
            self._phase = SessionPhase.SHOWING
            return

        self._phase = SessionPhase.COMPLETE
        summary = self.summary()
        logger.info(
            "Study session complete: deck=%s correct=%s/%s accuracy=%s%%",
            self.deck_id, summary.correct_answers, summary.studied_cards, summary.accuracy,
        )
        self._emit(study_session_completed, summary=summary)

    def _require(self, phase: SessionPhase, action: str) -> None:
        if self._phase != phase:
            raise InvalidTransitionError(action, self._phase)

    def _emit(self, sig, **kwargs) -> None:
        try:
            sig.send(self, **kwargs)
        except Exception as e:
            logger.error("Study signal receiver failed (%s): %s", sig.name, e, exc_info=True)

    def __repr__(self):
        return (
            f"<StudySession deck={self.deck_id} phase={self._phase.value} "
            f"cursor={self._cursor}/{self.total_cards}>"
        )


def start_session(store, deck_id, difficulty: Optional[str] = None, *, rng=None, syncer=None) -> StudySession:
    return StudySession.start(store, deck_id, difficulty, rng=rng, syncer=syncer)
