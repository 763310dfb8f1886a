"""Domain objects for NavHistory - explicit re-exports to satisfy linters."""
from .entry import Entry as Entry
from .history_state import HistoryState as HistoryState

__all__ = ["Entry", "HistoryState"]
