import json
import logging
import os
import tempfile
from typing import Optional

from navhistory.domain import HistoryState
from navhistory.exceptions import PersistenceError

logger = logging.getLogger(__name__)


class JsonFileSnapshotRepository:
    """Filesystem/JSON IO for the history snapshot.

    Responsibility: read and write one JSON document holding the whole
    history. It does NOT know about navigation rules.
    """

    def __init__(self, *, path: str):
        self.path = path

    def load(self) -> Optional[HistoryState]:
        """Return the stored state, or None if the snapshot file does not exist."""
        if not os.path.isfile(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError, RecursionError) as e:
            raise PersistenceError(self.path, e) from e
        try:
            return HistoryState.from_dict(data)
        except ValueError as e:
            raise PersistenceError(self.path, e) from e

    def save(self, state: HistoryState) -> None:
        """Write `state` to a temp file next to the target and atomically replace it."""
        directory = os.path.dirname(os.path.abspath(self.path))
        payload = json.dumps(state.to_dict(), indent=2)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix=".history-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise PersistenceError(self.path, e) from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    logger.warning("Could not remove temporary snapshot %s", tmp_path)
        logger.debug("Saved history snapshot to %s (%d entries)", self.path, state.total)
