# File: flashlearn_app/modules/study/engine/stats_sync.py
"""
Fire-and-forget statistics writes.

Each answer spawns a daemon thread that pushes the card's new absolute
counters to the store. Nothing waits on it; a failure is logged and dropped.
The worker holds only the store and the payload, never the session, so a
session can be torn down while writes are still in flight.
"""

import threading
from typing import List, Optional

from flashlearn_app.core.logging_config import get_logger
from ..errors import SyncError
from ..schemas import StatsPayload


class StatisticsSync:

    def __init__(self, store, logger=None):
        self._store = store
        self._logger = logger or get_logger('flashlearn.study.sync')
        self._lock = threading.Lock()
        self._pending: List[threading.Thread] = []

    def submit(self, card_id, payload: StatsPayload) -> Optional[threading.Thread]:
        """Start the write in the background and return immediately."""
        thread = threading.Thread(
            target=self._run,
            args=(card_id, payload),
            name=f'stats-sync-{card_id}',
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            self._logger.error("Could not start statistics sync for card %s: %s", card_id, e)
            return None

        with self._lock:
            self._pending = [t for t in self._pending if t.is_alive()]
            self._pending.append(thread)
        return thread

    def _run(self, card_id, payload: StatsPayload) -> None:
        try:
            self._store.update_card_stats(card_id, payload)
        except SyncError as e:
            self._logger.warning("Statistics sync failed for card %s: %s", card_id, e.message)
        except Exception:
            self._logger.exception("Unexpected error during statistics sync for card %s", card_id)
        else:
            self._logger.debug(
                "Synced card %s: %s/%s", card_id, payload.correct_count, payload.study_count
            )

    @property
    def pending(self) -> int:
        with self._lock:
            return sum(1 for t in self._pending if t.is_alive())

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Join in-flight writes. True when none is left running."""
        with self._lock:
            threads = list(self._pending)
        for thread in threads:
            thread.join(timeout)
        return not any(t.is_alive() for t in threads)
