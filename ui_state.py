from __future__ import annotations

from enum import Enum, auto
from typing import Dict, List, Tuple


class UIState(Enum):
    MENU = auto()
    BOARD = auto()


class AppState:
    def __init__(self):
        self.current_state = UIState.MENU
        self.title = ""
        self.boards: List[List[str]] = []  # solved boards as text lines
        self.givens: Dict[Tuple[int, int], str] = {}
        self.queens = False
        self.current_idx = 0

    def show(self, title: str, boards: List[List[str]], givens=None, queens: bool = False):
        self.current_state = UIState.BOARD
        self.title = title
        self.boards = boards
        self.givens = givens or {}
        self.queens = queens
        self.current_idx = 0

    def next(self):
        if self.current_idx < len(self.boards) - 1:
            self.current_idx += 1

    def previous(self):
        if self.current_idx > 0:
            self.current_idx -= 1
