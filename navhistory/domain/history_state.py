from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from navhistory.domain.entry import Entry


@dataclass(frozen=True)
class HistoryState:
    """Immutable snapshot of the navigation history.

    `entries` is in visit order and `cursor` points at the current page, or is
    -1 when the history is empty. Positions (empty, at start, in the middle,
    at end) are derived from `(cursor, len(entries))` rather than tracked.
    """

    entries: tuple[Entry, ...] = ()
    cursor: int = -1

    def __post_init__(self):
        # Normalize lists handed in by callers so the snapshot stays immutable.
        object.__setattr__(self, "entries", tuple(self.entries))
        if not isinstance(self.cursor, int) or isinstance(self.cursor, bool):
            raise ValueError("cursor must be an integer")
        if not -1 <= self.cursor < len(self.entries):
            raise ValueError(f"cursor {self.cursor} out of range for {len(self.entries)} entries")
        if self.entries and self.cursor == -1:
            raise ValueError("non-empty history must have a current entry")

    @classmethod
    def empty(cls) -> "HistoryState":
        return cls()

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return self.cursor == -1

    @property
    def at_start(self) -> bool:
        return self.cursor == 0 and self.total > 1

    @property
    def in_middle(self) -> bool:
        return 0 < self.cursor < self.total - 1

    @property
    def at_end(self) -> bool:
        return self.total >= 1 and self.cursor == self.total - 1

    @property
    def can_go_back(self) -> bool:
        return self.cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self.cursor < self.total - 1

    @property
    def current(self) -> Optional[Entry]:
        if self.cursor < 0:
            return None
        return self.entries[self.cursor]

    def with_visit(self, entry: Entry) -> "HistoryState":
        """Return the state after visiting `entry`.

        Entries after the cursor (the forward branch) are discarded before the
        new entry is appended.
        """
        kept = self.entries[: self.cursor + 1]
        entries = kept + (entry,)
        return HistoryState(entries=entries, cursor=len(entries) - 1)

    def with_cursor(self, cursor: int) -> "HistoryState":
        return HistoryState(entries=self.entries, cursor=cursor)

    def to_dict(self) -> dict:
        return {
            "pages": [e.to_dict() for e in self.entries],
            "currentIndex": self.cursor,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HistoryState":
        """Rebuild a state from its snapshot form, raising `ValueError` if it is malformed."""
        if not isinstance(data, dict):
            raise ValueError("snapshot must be an object")
        pages = data.get("pages")
        cursor = data.get("currentIndex")
        if not isinstance(pages, list):
            raise ValueError("snapshot 'pages' must be a list")
        entries = tuple(Entry.from_dict(p) for p in pages)
        return cls(entries=entries, cursor=cursor)
