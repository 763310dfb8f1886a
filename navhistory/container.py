"""Dependency injection container for the application."""
from dependency_injector import containers, providers

from navhistory import config as env
from navhistory.repository.snapshot_file import JsonFileSnapshotRepository
from navhistory.services.history_store import HistoryStore


# Environment variables used by the container (read via `navhistory.config` helpers).
#
# NAVHISTORY_HISTORY_FILE (str, default: "<cwd>/history.json")
#   Path of the JSON snapshot holding the whole history. Parent directories
#   are created on first save.
#
# NAVHISTORY_HOST (str, default: "0.0.0.0")
# NAVHISTORY_PORT (int, default: 8080)
#   Address the HTTP API listens on.
#
# NAVHISTORY_CORS_ORIGINS (comma-separated str, default: "http://localhost:5174")
#   Browser origins allowed to call the API.
#
# LOG_LEVEL (str, default: "INFO")
ENV = {
    "NAVHISTORY_HISTORY_FILE": env.history_file(),
    "NAVHISTORY_HOST": env.get_str_env("NAVHISTORY_HOST", "0.0.0.0"),
    "NAVHISTORY_PORT": env.get_int_env("NAVHISTORY_PORT", 8080),
    "NAVHISTORY_CORS_ORIGINS": env.get_list_env("NAVHISTORY_CORS_ORIGINS", ["http://localhost:5174"]),
    "LOG_LEVEL": env.log_level(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the NavHistory application."""

    config = providers.Configuration(default=ENV)

    snapshot_repository = providers.Singleton(
        JsonFileSnapshotRepository,
        path=config.NAVHISTORY_HISTORY_FILE.as_(str),
    )

    # One store per process; the API and shutdown hooks share it.
    history_store = providers.Singleton(
        HistoryStore,
        gateway=snapshot_repository,
    )
