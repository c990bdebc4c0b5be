"""Identifier checks and ISO 8601 helpers used when building ERN messages.

The predicates here are independent of the message tree. They are intended
for callers that want to check a UPC/EAN/ISRC/ISWC/DPID before handing it to
a builder; builders themselves accept any string.
"""

from __future__ import annotations

from datetime import UTC, datetime
import re
import secrets
from typing import TYPE_CHECKING

from .constants import Patterns

if TYPE_CHECKING:
    from collections.abc import Iterable

_DIGITS_12 = re.compile(Patterns.DIGITS_12, re.ASCII)
_DIGITS_13 = re.compile(Patterns.DIGITS_13, re.ASCII)
_ISRC = re.compile(Patterns.ISRC, re.ASCII)
_ISWC = re.compile(Patterns.ISWC, re.ASCII)
_DPID = re.compile(Patterns.DPID, re.ASCII)
_DURATION = re.compile(Patterns.DURATION, re.ASCII)


def _check_digit(digits: str, *, odd_weight: int, even_weight: int) -> int:
    total = 0
    for position, char in enumerate(digits):
        weight = odd_weight if position % 2 == 0 else even_weight
        total += int(char) * weight
    return (10 - (total % 10)) % 10


def validate_upc(upc: str) -> bool:
    """Return True for a 12-digit UPC-A whose last digit is the check digit."""
    if not _DIGITS_12.fullmatch(upc):
        return False
    return _check_digit(upc[:11], odd_weight=3, even_weight=1) == int(upc[11])


def validate_ean(ean: str) -> bool:
    """Return True for a 13-digit EAN whose last digit is the check digit."""
    if not _DIGITS_13.fullmatch(ean):
        return False
    return _check_digit(ean[:12], odd_weight=1, even_weight=3) == int(ean[12])


def validate_isrc(isrc: str) -> bool:
    """Check the CC-XXX-YY-NNNNN shape after dropping hyphens.

    Example:
        >>> validate_isrc("US-RC1-76-07839")
        True
    """
    cleaned = isrc.upper().replace("-", "")
    return bool(_ISRC.fullmatch(cleaned))


def validate_iswc(iswc: str) -> bool:
    # Shape only; the trailing check digit is not verified.
    cleaned = iswc.replace(".", "").replace("-", "")
    return bool(_ISWC.fullmatch(cleaned))


def validate_dpid(dpid: str) -> bool:
    if not 10 <= len(dpid) <= 20:
        return False
    return bool(_DPID.fullmatch(dpid))


def format_duration(seconds: int) -> str:
    """Format a number of seconds as an ISO 8601 ``PT#H#M#S`` duration.

    Args:
        seconds: Total seconds; zero or negative values render as ``PT0S``

    Returns:
        The duration string, e.g. ``PT3M10S`` for 190
    """
    if seconds <= 0:
        return "PT0S"

    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = ["PT"]
    if hours:
        parts.append(f"{hours}H")
    if minutes:
        parts.append(f"{minutes}M")
    if secs or not (hours or minutes):
        parts.append(f"{secs}S")
    return "".join(parts)


def parse_duration(duration: str) -> int:
    """Parse a ``PT#H#M#S`` duration into seconds.

    Raises:
        ValueError: If the string is not in the supported subset (no
            fractional seconds, no day/week/month/year units)
    """
    match = _DURATION.fullmatch(duration.strip())
    if match is None or duration.strip() == "PT":
        raise ValueError(f"invalid duration format: {duration}")
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def format_date(value: datetime) -> str:
    return value.strftime("%Y-%m-%d")


def format_datetime(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%S")


def generate_message_id(prefix: str = "") -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d%H%M%S")
    return f"{prefix or 'MSG'}_{timestamp}_{secrets.token_hex(4)}"


def generate_thread_id(prefix: str = "") -> str:
    timestamp = datetime.now(UTC).strftime("%Y%m%d")
    return f"{prefix or 'THR'}_{timestamp}_{secrets.token_hex(6)}"


def generate_reference(prefix: str = "") -> str:
    return f"{prefix or 'REF'}_{secrets.token_hex(8)}"


def code_list(codes: str | Iterable[str]) -> list[str]:
    """Normalize territory codes to a list; a bare string is one code."""
    if isinstance(codes, str):
        return [codes] if codes else []
    return list(codes)
