"""Custom exceptions for NavHistory services."""


class NavigationError(Exception):
    """Base class for rejected history operations that leave state unchanged."""


class InvalidUrlError(NavigationError):
    """Raised when a visit is requested with an empty or malformed URL."""

    def __init__(self, raw, reason: str = "invalid URL format"):
        self.raw = raw
        self.reason = reason
        super().__init__(f"URL {raw!r}: {reason}")


class AtBeginningError(NavigationError):
    """Raised when back() is requested with no previous entry."""

    def __init__(self, cursor: int):
        self.cursor = cursor
        super().__init__(f"Cannot go back from position {cursor}")


class AtEndError(NavigationError):
    """Raised when forward() is requested with no next entry."""

    def __init__(self, cursor: int, total: int):
        self.cursor = cursor
        self.total = total
        super().__init__(f"Cannot go forward from position {cursor} of {total}")


class PersistenceError(Exception):
    """Raised when the history snapshot cannot be read or written."""

    def __init__(self, path: str, original: Exception):
        self.path = path
        self.original = original
        super().__init__(f"Snapshot I/O failed for {path}: {original}")
