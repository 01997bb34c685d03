# File: flashlearn_app/modules/study/__init__.py
"""
Study module: the flashcard session engine and the adapters it uses to
reach the card store. Has no routes of its own; sessions run wherever the
caller runs them and talk to the cards API (or CardService) for storage.
"""

from .engine import SessionPhase, StatisticsSync, StudySession, fisher_yates_shuffle, start_session
from .errors import EmptySetError, FetchError, InvalidTransitionError, StudySessionError, SyncError
from .schemas import SessionStatistics, SessionSummary, StatsPayload, StudyCard
from .stores import ApiCardStore, CardStore, LocalCardStore

__all__ = [
    'ApiCardStore',
    'CardStore',
    'EmptySetError',
    'FetchError',
    'InvalidTransitionError',
    'LocalCardStore',
    'SessionPhase',
    'SessionStatistics',
    'SessionSummary',
    'StatisticsSync',
    'StatsPayload',
    'StudyCard',
    'StudySession',
    'StudySessionError',
    'SyncError',
    'fisher_yates_shuffle',
    'start_session',
]
