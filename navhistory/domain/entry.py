from dataclasses import dataclass


@dataclass(frozen=True)
class Entry:
    """One visited location. Immutable once created."""

    address: str
    visited_at: str
    label: str

    def to_dict(self) -> dict:
        return {
            "url": self.address,
            "timestamp": self.visited_at,
            "title": self.label,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        """Build an Entry from its snapshot form.

        Raises `ValueError` when a required field is missing or not a string.
        """
        if not isinstance(data, dict):
            raise ValueError("entry must be an object")
        address = data.get("url")
        visited_at = data.get("timestamp")
        label = data.get("title")
        for name, value in (("url", address), ("timestamp", visited_at), ("title", label)):
            if not isinstance(value, str):
                raise ValueError(f"entry field {name!r} must be a string")
        return cls(address=address, visited_at=visited_at, label=label)

    def __repr__(self):
        return f"<Entry url={self.address} at={self.visited_at}>"
