"""Gomoku package exposing the game engine and the web application."""

from .game import GomokuGame, MoveResult
from .ui import app

__all__ = ["GomokuGame", "MoveResult", "app"]
