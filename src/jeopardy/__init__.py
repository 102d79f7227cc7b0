"""Jeopardy package exposing the board model, category fetcher, and web application."""

from .board import Board, Category, Clue, RevealState, handle_cell_click
from .controller import BoardController
from .fetcher import CategoryFetcher, FetchResult, NetworkError
from .ui import app

__all__ = [
    "Board",
    "BoardController",
    "Category",
    "CategoryFetcher",
    "Clue",
    "FetchResult",
    "NetworkError",
    "RevealState",
    "app",
    "handle_cell_click",
]
