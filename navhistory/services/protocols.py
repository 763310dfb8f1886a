"""Protocol (interface) definitions for services."""

from typing import Optional, Protocol

from navhistory.domain import HistoryState


class SnapshotGateway(Protocol):
    """Durable storage for whole-history snapshots.

    The store only needs "load prior state if present" and "persist current
    state"; how the snapshot is stored is up to the implementation.
    """

    def load(self) -> Optional[HistoryState]:
        """Return the stored state, or None when no snapshot exists.

        Raises `PersistenceError` when a snapshot exists but cannot be read.
        """
        ...

    def save(self, state: HistoryState) -> None:
        """Replace the stored snapshot with `state`.

        Raises `PersistenceError` on failure.
        """
        ...
