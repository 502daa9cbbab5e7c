"""Participant name validation and winner bookkeeping."""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .models import Roster

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 50
MIN_NAMES_TO_SPIN = 2

_FORBIDDEN_CHARS = ("<", ">", "{", "}", "\\")
_SUSPICIOUS_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"<script",
        r"<iframe",
        r"<object",
        r"<embed",
        r"javascript:",
        r"on\w+=",
        r"data:text/html",
        r"<svg.*onload",
        r"eval\(",
        r"expression\(",
    )
)
_ZERO_WIDTH = re.compile("[\u200B-\u200D\uFEFF]")
_WHITESPACE = re.compile(r"\s+")


class InvalidNameError(ValueError):
    """A participant name was rejected; ``str(exc)`` is user-facing."""


def validate_name(name: Optional[str]) -> str:
    """Return the sanitized form of ``name`` or raise :class:`InvalidNameError`."""
    if not name:
        raise InvalidNameError("Name cannot be empty")
    trimmed = str(name).strip()
    if len(trimmed) < NAME_MIN_LENGTH:
        raise InvalidNameError("Name is too short")
    if len(trimmed) > NAME_MAX_LENGTH:
        raise InvalidNameError(f"Name must be {NAME_MAX_LENGTH} characters or less")
    if any(ch in trimmed for ch in _FORBIDDEN_CHARS):
        raise InvalidNameError("Name contains invalid characters")
    if any(p.search(trimmed) for p in _SUSPICIOUS_PATTERNS):
        raise InvalidNameError("Name contains invalid content")

    sanitized = _WHITESPACE.sub(" ", _ZERO_WIDTH.sub("", trimmed))
    if not sanitized:
        raise InvalidNameError("Name cannot be empty")
    return sanitized


def add_name(roster: Roster, name: str) -> str:
    """Validate ``name`` and append it; duplicates are rejected."""
    clean = validate_name(name)
    if clean in roster.names:
        raise InvalidNameError("Name already exists!")
    roster.names.append(clean)
    logger.debug("Added %r (%d names)", clean, len(roster.names))
    return clean


def remove_name(roster: Roster, name: str) -> bool:
    """Remove ``name`` from the wheel and from the winner history."""
    if name not in roster.names:
        return False
    roster.names.remove(name)
    roster.winners = [w for w in roster.winners if w != name]
    logger.debug("Removed %r (%d names)", name, len(roster.names))
    return True


def clear_names(roster: Roster) -> None:
    roster.names.clear()
    roster.winners.clear()


def record_winner(roster: Roster, name: str) -> bool:
    """Append ``name`` to the winner history unless it is already there."""
    if name in roster.winners:
        return False
    roster.winners.append(name)
    return True


def clear_winners(roster: Roster) -> None:
    roster.winners.clear()


def remove_all_winners(roster: Roster) -> List[str]:
    """Drop every past winner from the wheel; returns the removed names."""
    removed = [n for n in roster.names if n in roster.winners]
    roster.names = [n for n in roster.names if n not in roster.winners]
    roster.winners = []
    return removed


def load_roster(names: List[str], winners: List[str]) -> Roster:
    """Rebuild a stored roster, dropping invalid or duplicate names."""
    roster = Roster()
    for name in names:
        try:
            add_name(roster, name)
        except InvalidNameError as exc:
            logger.warning("Dropping stored name %r: %s", name, exc)
    for name in winners:
        if name in roster.names:
            record_winner(roster, name)
    return roster


def can_spin(roster: Roster) -> bool:
    return len(roster.names) >= MIN_NAMES_TO_SPIN


__all__ = [
    "NAME_MIN_LENGTH",
    "NAME_MAX_LENGTH",
    "MIN_NAMES_TO_SPIN",
    "InvalidNameError",
    "validate_name",
    "add_name",
    "remove_name",
    "clear_names",
    "record_winner",
    "clear_winners",
    "remove_all_winners",
    "load_roster",
    "can_spin",
]
