"""Read-only views derived from a HistoryState."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from navhistory.domain import Entry, HistoryState


@dataclass(frozen=True)
class CurrentState:
    page: str
    can_go_back: bool
    can_go_forward: bool
    current_index: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "page": self.page,
            "canGoBack": self.can_go_back,
            "canGoForward": self.can_go_forward,
            "currentIndex": self.current_index,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class HistoryItem:
    entry: Entry
    index: int
    is_current: bool

    def to_dict(self) -> dict:
        d = self.entry.to_dict()
        d["index"] = self.index
        d["isCurrent"] = self.is_current
        return d


@dataclass(frozen=True)
class HistoryView:
    history: List[HistoryItem]
    current_index: int
    total_pages: int

    def to_dict(self) -> dict:
        return {
            "history": [item.to_dict() for item in self.history],
            "currentIndex": self.current_index,
            "totalPages": self.total_pages,
        }


def current_state(state: HistoryState) -> CurrentState:
    current = state.current
    return CurrentState(
        page=current.address if current is not None else "",
        can_go_back=state.can_go_back,
        can_go_forward=state.can_go_forward,
        current_index=state.cursor,
        total_pages=state.total,
    )


def empty_state() -> CurrentState:
    return current_state(HistoryState.empty())


def full_history(state: HistoryState) -> HistoryView:
    """Annotate every entry with its 1-based position and whether it is current.

    Entries stay in visit order.
    """
    items = [
        HistoryItem(entry=entry, index=i + 1, is_current=(i == state.cursor))
        for i, entry in enumerate(state.entries)
    ]
    return HistoryView(history=items, current_index=state.cursor, total_pages=state.total)
