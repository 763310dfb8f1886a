"""Validation and canonicalization of user-typed addresses."""
import ipaddress
import logging
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from navhistory.exceptions import InvalidUrlError

logger = logging.getLogger(__name__)

DEFAULT_SCHEME_PREFIX = "https://"
_KNOWN_PREFIXES = ("http://", "https://")

# Code points a URL host may never contain.
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#%/:<>?@[\\]^|")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BRACKETED_HOST = re.compile(r"^\[([^\]]+)\](:\d*)?$")


@dataclass(frozen=True)
class NormalizedUrl:
    address: str
    label: str


def _ensure_scheme(value: str) -> str:
    if value.startswith(_KNOWN_PREFIXES):
        return value
    return DEFAULT_SCHEME_PREFIX + value


def _is_well_formed(address: str) -> bool:
    if _CONTROL_CHARS.search(address):
        return False
    try:
        parts = urlsplit(address)
        # .port raises ValueError for non-numeric or out-of-range ports
        parts.port
    except ValueError:
        return False
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return False
    host = parts.hostname
    if not host:
        return False
    host_port = parts.netloc.rpartition("@")[2]
    if "[" in host_port or "]" in host_port:
        # only a whole bracketed IPv6 literal, optionally followed by a port
        literal = _BRACKETED_HOST.match(host_port)
        if literal is None:
            return False
        try:
            ipaddress.IPv6Address(literal.group(1))
        except ValueError:
            return False
        return True
    return not any(ch in _FORBIDDEN_HOST_CHARS for ch in host)


def derive_label(address: str) -> str:
    """Return the host portion of `address` for display.

    Falls back to everything before the first '/' when the host cannot be
    extracted.
    """
    try:
        host = urlsplit(address).hostname
    except ValueError:
        host = None
    if not host:
        logger.debug("Could not extract host from %s, using prefix", address)
        return address.split("/")[0]
    if ":" in host:
        return f"[{host}]"
    return host


def normalize_url(raw) -> NormalizedUrl:
    """Validate `raw` and return its canonical address and display label.

    Addresses without an explicit `http://` or `https://` prefix get
    `https://` prepended. Raises `InvalidUrlError` for non-string, empty or
    malformed input.
    """
    if not isinstance(raw, str) or not raw:
        raise InvalidUrlError(raw, "URL is required and must be a string")
    trimmed = raw.strip()
    if not trimmed:
        raise InvalidUrlError(raw, "URL is empty")

    address = _ensure_scheme(trimmed)
    if not _is_well_formed(address):
        raise InvalidUrlError(raw)
    return NormalizedUrl(address=address, label=derive_label(address))
