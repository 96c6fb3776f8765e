"""Core rules for two-player tic-tac-toe: board, players and the turn engine."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

Marker = str  # "X" or "O"
EMPTY = ""
BOARD_SIZE = 9
MARKERS: Tuple[Marker, Marker] = ("X", "O")

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


class Phase(str, enum.Enum):
    IN_PROGRESS = "in_progress"
    WON = "won"
    TIED = "tied"


class Renderer(Protocol):
    """Anything that wants to redraw after the engine settles a change."""

    def on_state_change(self, cells: Sequence[str], message: str) -> None:
        ...


# ---------- Board ----------


@dataclass
class Board:
    # '' for empty, otherwise 'X' or 'O'
    cells: List[str] = field(default_factory=lambda: [EMPTY] * BOARD_SIZE)

    def place_marker(self, index: object, marker: Marker) -> bool:
        """Place ``marker`` at ``index``; return False if off-board or taken."""
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < BOARD_SIZE:
            return False
        if self.cells[index] != EMPTY:
            return False
        self.cells[index] = marker
        return True

    def get_cells(self) -> Tuple[str, ...]:
        return tuple(self.cells)

    def reset(self) -> None:
        self.cells[:] = [EMPTY] * BOARD_SIZE

    def is_full(self) -> bool:
        return all(c != EMPTY for c in self.cells)

    def has_line(self, marker: Marker) -> bool:
        return any(
            all(self.cells[i] == marker for i in line) for line in WINNING_LINES
        )


# ---------- Players ----------


@dataclass(frozen=True)
class Player:
    name: str
    marker: Marker


def make_player(name: str, marker: Marker) -> Player:
    return Player(name=name, marker=marker)


# ---------- Engine ----------


class GameEngine:
    """
    Turn/win/tie state machine for one game of tic-tac-toe.

    Invalid input never raises: a move on an occupied or off-board cell, a
    move after the game ended, or a move before ``start`` is simply ignored
    and reported by ``submit_move`` returning False.
    """

    def __init__(self, renderer: Optional[Renderer] = None) -> None:
        self.renderer = renderer
        self.board = Board()
        self._players: Tuple[Player, ...] = ()
        self._active_index = 0
        self._phase: Optional[Phase] = None
        self._message = ""

    # ---- lifecycle ----

    def start(self, name1: str, name2: str) -> None:
        """Begin a fresh game, discarding whatever state came before."""
        self.board = Board()
        self._players = (make_player(name1, MARKERS[0]), make_player(name2, MARKERS[1]))
        self._active_index = 0
        self._phase = Phase.IN_PROGRESS
        self._message = f"{self.active_player.name}'s turn"
        logger.info("Game started: %s (X) vs %s (O)", name1, name2)
        self._notify()

    def submit_move(self, cell_index: object) -> bool:
        if self._phase is not Phase.IN_PROGRESS:
            logger.debug("Ignoring move %r: game not in progress", cell_index)
            return False

        mover = self.active_player
        if not self.board.place_marker(cell_index, mover.marker):
            logger.debug("Ignoring move %r: cell unavailable", cell_index)
            return False
        logger.info("%s placed %s at %s", mover.name, mover.marker, cell_index)

        # Win is checked before tie so a winning last move is never a draw
        if self.board.has_line(mover.marker):
            self._phase = Phase.WON
            self._message = f"{mover.name} wins!"
        elif self.board.is_full():
            self._phase = Phase.TIED
            self._message = "It's a tie!"
        else:
            self._active_index = 1 - self._active_index
            self._message = f"{self.active_player.name}'s turn"

        if self.is_over:
            logger.info("Game over: %s", self._message)
        self._notify()
        return True

    # ---- read API used by renderers ----

    @property
    def cells(self) -> Tuple[str, ...]:
        return self.board.get_cells()

    @property
    def players(self) -> Tuple[Player, ...]:
        return self._players

    @property
    def active_player(self) -> Optional[Player]:
        if not self._players:
            return None
        return self._players[self._active_index]

    @property
    def phase(self) -> Optional[Phase]:
        return self._phase

    @property
    def message(self) -> str:
        return self._message

    @property
    def is_over(self) -> bool:
        return self._phase in (Phase.WON, Phase.TIED)

    @property
    def winner(self) -> Optional[Player]:
        return self.active_player if self._phase is Phase.WON else None

    def snapshot(self) -> Dict[str, object]:
        def player_dict(player: Optional[Player]) -> Optional[Dict[str, str]]:
            if player is None:
                return None
            return {"name": player.name, "marker": player.marker}

        return {
            "cells": list(self.cells),
            "message": self._message,
            "phase": self._phase.value if self._phase else None,
            "players": [player_dict(p) for p in self._players],
            "activePlayer": player_dict(self.active_player),
            "winner": player_dict(self.winner),
        }

    # ---- helpers ----

    def _notify(self) -> None:
        if self.renderer is not None:
            self.renderer.on_state_change(self.cells, self._message)
