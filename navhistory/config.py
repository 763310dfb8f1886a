import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_loaded = load_dotenv()
if not _loaded and Path(".env").exists():
	raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return None
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_list_env(name: str, default: list[str]) -> list[str]:
	"""Return a comma-separated env var as a list, dropping blank items."""
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return list(default)
	return [item.strip() for item in raw.split(",") if item.strip()]


def history_file() -> str:
	return get_str_env("NAVHISTORY_HISTORY_FILE", os.path.join(os.getcwd(), "history.json"))


def log_level() -> str:
	level = get_str_env("LOG_LEVEL", "INFO").strip().upper()
	if not isinstance(logging.getLevelName(level), int):
		logging.warning("Invalid LOG_LEVEL: %r", level)
		return "INFO"
	return level
