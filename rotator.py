import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from met_client import MetCollectionClient
from results import Failure, FailureKind, Result, Success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RotationState:
    """Snapshot of the rotating artwork, valid at the moment it was read."""
    artwork: Optional[Dict[str, Any]] = None
    cursor: int = 0
    ticks_failed: int = 0
    updated_at: Optional[float] = None

    @property
    def loading(self) -> bool:
        return self.artwork is None


class ArtworkRotator:
    """Shows a different artwork every ``interval`` seconds.

    The rotator is the only writer of its state. Readers get immutable
    ``RotationState`` snapshots from ``snapshot()``.
    """

    def __init__(self, client: MetCollectionClient, interval: float = 10):
        self._client = client
        self.interval = interval
        self._state = RotationState()
        self._lock = threading.Lock()
        self._in_flight = threading.Lock()
        self._stopped = threading.Event()
        self._thread = None

    def snapshot(self) -> RotationState:
        with self._lock:
            return self._state

    def start(self):
        """Start the background timer. Calling it again is a no-op."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name='artwork-rotator', daemon=True)
        self._thread.start()
        logger.info(f"Artwork rotation started, interval {self.interval}s")

    def stop(self):
        self._stopped.set()

    def _run(self):
        # Each tick gets its own worker so a slow fetch never delays the schedule.
        while not self._stopped.wait(self.interval):
            threading.Thread(target=self.tick, name='artwork-rotator-tick', daemon=True).start()

    def tick(self) -> Optional[Result]:
        """Advance to the next artwork.

        Returns the tick's result, or None when the tick was skipped because
        the previous one has not completed yet.
        """
        if not self._in_flight.acquire(blocking=False):
            logger.warning("Previous artwork rotation still in progress, skipping tick")
            return None
        try:
            return self._advance()
        finally:
            self._in_flight.release()

    def _advance(self) -> Result:
        cursor = self.snapshot().cursor
        try:
            result = self._fetch_at(cursor)
        except Exception as e:
            logger.error(f"Unexpected error rotating artwork at index {cursor}: {str(e)}")
            result = Failure(FailureKind.TRANSPORT, str(e))

        with self._lock:
            state = self._state
            if result.ok:
                self._state = replace(state, artwork=dict(result.value),
                                      cursor=state.cursor + 1, updated_at=time.time())
            else:
                # Keep showing the previous artwork; the index still moves on.
                self._state = replace(state, cursor=state.cursor + 1,
                                      ticks_failed=state.ticks_failed + 1)
        return result

    def _fetch_at(self, cursor: int) -> Result:
        listing = self._client.list_object_ids()
        if not listing.ok:
            return listing

        object_ids = listing.value
        object_id = object_ids[cursor % len(object_ids)]
        artwork = self._client.fetch_object(object_id)
        if not artwork.ok:
            return artwork
        if not isinstance(artwork.value, dict):
            return Failure(FailureKind.EMPTY_RESPONSE, f"Unexpected record for objectID {object_id}")
        return Success(artwork.value)
