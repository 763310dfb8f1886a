import dataclasses
import logging
import threading
from typing import Callable, Optional

from navhistory.domain import Entry, HistoryState
from navhistory.exceptions import AtBeginningError, AtEndError, PersistenceError
from navhistory.services.projections import CurrentState, current_state, empty_state
from navhistory.services.protocols import SnapshotGateway
from navhistory.services.url_normalizer import NormalizedUrl, normalize_url
from navhistory.utils.datetime_utils import utc_now_iso

logger = logging.getLogger(__name__)


class HistoryStore:
    """Owns the navigation history and the cursor into it.

    Every mutation is applied in memory first and then handed to the snapshot
    gateway. A failed save is logged and remembered in `last_persist_error`
    but never rolls back the in-memory change: for the running process the
    in-memory state is authoritative.

    Mutations (including their save) are serialized behind one lock. State is
    only ever replaced with a new immutable `HistoryState`, so readers use
    `state` without locking.
    """

    def __init__(
        self,
        gateway: SnapshotGateway,
        normalizer: Callable[[str], NormalizedUrl] = normalize_url,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.gateway = gateway
        self.normalizer = normalizer
        self.clock = clock
        self._lock = threading.Lock()
        self._state = HistoryState.empty()
        self.last_persist_error: Optional[str] = None

    @property
    def state(self) -> HistoryState:
        return self._state

    def init(self) -> HistoryState:
        """Restore the last snapshot, or start empty and persist that."""
        with self._lock:
            try:
                loaded = self.gateway.load()
            except PersistenceError as e:
                logger.warning("Could not load history snapshot, starting fresh: %s", e)
                loaded = None
            if loaded is not None:
                self._state = loaded
                logger.info("History loaded: %d entries, cursor=%d", loaded.total, loaded.cursor)
            else:
                logger.info("No existing history, starting fresh")
                self._state = HistoryState.empty()
                self._persist()
            return self._state

    def shutdown(self) -> None:
        """Attempt a final save of the current state."""
        with self._lock:
            if self._persist():
                logger.info("History saved on shutdown (%d entries)", self._state.total)

    def visit(self, raw_url) -> CurrentState:
        # Normalization failures propagate before any state is touched.
        normalized = self.normalizer(raw_url)
        with self._lock:
            entry = Entry(address=normalized.address, visited_at=self.clock(), label=normalized.label)
            previous = self._state
            self._state = previous.with_visit(entry)
            discarded = previous.total - (previous.cursor + 1)
            if discarded:
                logger.debug("Discarded %d forward entries", discarded)
            logger.info("Visited %s", entry.address)
            self._persist()
            return dataclasses.replace(current_state(self._state), can_go_forward=False)

    def back(self) -> CurrentState:
        with self._lock:
            state = self._state
            if state.cursor <= 0:
                raise AtBeginningError(state.cursor)
            self._state = state.with_cursor(state.cursor - 1)
            self._persist()
            return current_state(self._state)

    def forward(self) -> CurrentState:
        with self._lock:
            state = self._state
            if state.cursor >= state.total - 1:
                raise AtEndError(state.cursor, state.total)
            self._state = state.with_cursor(state.cursor + 1)
            self._persist()
            return current_state(self._state)

    def clear(self) -> CurrentState:
        with self._lock:
            self._state = HistoryState.empty()
            logger.info("History cleared")
            self._persist()
            return empty_state()

    def _persist(self) -> bool:
        # Caller must hold self._lock.
        try:
            self.gateway.save(self._state)
        except PersistenceError as e:
            logger.exception("Failed to save history")
            self.last_persist_error = str(e)
            return False
        self.last_persist_error = None
        return True
