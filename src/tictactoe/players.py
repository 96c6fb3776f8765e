"""Turning raw name input into the two player names a game starts with."""

from __future__ import annotations

from typing import Optional, Tuple

DEFAULT_NAMES: Tuple[str, str] = ("Player 1", "Player 2")


def name_or_default(raw: Optional[str], seat: int) -> str:
    name = (raw or "").strip()
    return name or DEFAULT_NAMES[seat]


def read_player_names(
    first: Optional[str] = None, second: Optional[str] = None
) -> Tuple[str, str]:
    """Blank or missing names fall back to "Player 1" / "Player 2"."""

    return name_or_default(first, 0), name_or_default(second, 1)
