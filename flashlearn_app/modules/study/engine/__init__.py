from .session import SessionPhase, StudySession, normalize_difficulty, start_session
from .shuffle import fisher_yates_shuffle
from .stats_sync import StatisticsSync

__all__ = [
    'SessionPhase',
    'StudySession',
    'StatisticsSync',
    'fisher_yates_shuffle',
    'normalize_difficulty',
    'start_session',
]
