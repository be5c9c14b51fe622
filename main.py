from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pygame

from config import CFG
from gui import (
    BG,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    board_cells,
    draw_board,
    draw_menu,
    draw_top_bar,
    get_menu_action,
    window_size,
)
from nqueens import NQueens
from solver import ColumnSelector, SolverOptions
from sudoku import Sudoku
from ui_state import AppState, UIState

log = logging.getLogger(__name__)

SAMPLE_SUDOKU = [
    "..9748...",
    "7........",
    ".2.1.9...",
    "..7...24.",
    ".64.1.59.",
    ".98...3..",
    "...8.3.2.",
    "........6",
    "...2759..",
]


def _view_limit() -> int | None:
    return CFG.MAX_VIEW_SOLUTIONS if CFG.MAX_VIEW_SOLUTIONS > 0 else None


def _viewer_options(options: SolverOptions) -> SolverOptions:
    cap = _view_limit()
    if cap is None or (options.limit is not None and options.limit <= cap):
        return options
    return replace(options, limit=cap)


def solve_nqueens(size: int) -> List[List[str]]:
    options = replace(SolverOptions.from_config(), column_selector=ColumnSelector.FIRST)
    return [board.to_lines() for board in NQueens(size).solve(_viewer_options(options))]


def solve_sudoku(
    lines: Sequence[str],
) -> Tuple[List[List[str]], Dict[Tuple[int, int], str], int]:
    puzzle = Sudoku.parse(lines)
    options = _viewer_options(SolverOptions.from_config())
    boards = [board.to_lines() for board in puzzle.solve(options)]
    return boards, board_cells(puzzle.to_lines()), puzzle.size


def load_sudoku(argv: Sequence[str]) -> List[str]:
    if len(argv) > 1:
        return Path(argv[1]).read_text(encoding="utf-8").splitlines()
    return SAMPLE_SUDOKU


def main(argv: Sequence[str] = sys.argv):
    logging.basicConfig(
        level=CFG.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    sudoku_lines = load_sudoku(argv)

    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Dancing Links")

    title_font = pygame.font.SysFont("SF Pro Display", 32, bold=True)
    label_font = pygame.font.SysFont("SF Pro Text", 24)
    cell_font = pygame.font.SysFont("SF Pro Text", 24, bold=True)
    button_font = pygame.font.SysFont("SF Pro Text", 20)

    clock = pygame.time.Clock()
    app_state = AppState()

    running = True
    while running:
        clock.tick(60)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)

            if app_state.current_state == UIState.MENU:
                if event.type == pygame.MOUSEBUTTONDOWN:
                    action = get_menu_action(event.pos, screen.get_size())
                    if action == "nqueens":
                        log.info("Solving %d-queens...", CFG.NQUEENS_SIZE)
                        boards = solve_nqueens(CFG.NQUEENS_SIZE)
                        app_state.show(f"{CFG.NQUEENS_SIZE}-Queens", boards, queens=True)
                        screen = pygame.display.set_mode(
                            window_size(CFG.NQUEENS_SIZE), pygame.RESIZABLE
                        )
                    elif action == "sudoku":
                        log.info("Solving sudoku...")
                        boards, givens, board_size = solve_sudoku(sudoku_lines)
                        app_state.show("Sudoku", boards, givens=givens)
                        screen = pygame.display.set_mode(
                            window_size(board_size), pygame.RESIZABLE
                        )

            elif app_state.current_state == UIState.BOARD:
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        app_state.current_state = UIState.MENU
                    elif event.key == pygame.K_RIGHT:
                        app_state.next()
                    elif event.key == pygame.K_LEFT:
                        app_state.previous()

        if app_state.current_state == UIState.MENU:
            draw_menu(screen, title_font, button_font)

        elif app_state.current_state == UIState.BOARD:
            screen.fill(BG)
            draw_top_bar(
                screen,
                title_font,
                label_font,
                app_state.title,
                app_state.current_idx,
                len(app_state.boards),
            )
            if app_state.boards:
                draw_board(
                    screen,
                    cell_font,
                    app_state.boards[app_state.current_idx],
                    givens=app_state.givens,
                    queens=app_state.queens,
                )

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
