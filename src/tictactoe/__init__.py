"""Tic-tac-toe package exposing game logic and the web application."""

from .game import Board, GameEngine, Phase, Player, make_player
from .players import read_player_names
from .ui import app

__all__ = [
    "Board",
    "GameEngine",
    "Phase",
    "Player",
    "app",
    "make_player",
    "read_player_names",
]
