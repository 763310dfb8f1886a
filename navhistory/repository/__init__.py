from .snapshot_file import JsonFileSnapshotRepository

__all__ = ["JsonFileSnapshotRepository"]
