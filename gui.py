# gui.py

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import pygame

from config import CFG

CELL_SIZE = CFG.CELL_SIZE
TOP_BAR_HEIGHT = 120
MIN_WINDOW_WIDTH = 480

WINDOW_WIDTH = 9 * CELL_SIZE
WINDOW_HEIGHT = 9 * CELL_SIZE + TOP_BAR_HEIGHT

EMPTY_SYMBOL = "."

# Colors – dark mode
BG = (15, 15, 17)
CARD_BG = (30, 30, 34)
GRID = (90, 90, 95)
TEXT_MAIN = (245, 245, 250)
TEXT_SECONDARY = (230, 230, 235)
LIGHT_SQUARE = (45, 45, 49)

QUEEN = (255, 190, 60)
GIVEN = (45, 140, 255)
FILLED = (60, 200, 80)
BOX_BORDER = (220, 90, 90)

MENU_BUTTONS: List[Tuple[str, str]] = [
    ("N-Queens", "nqueens"),
    ("Sudoku", "sudoku"),
]


def window_size(board_size: int) -> Tuple[int, int]:
    width = max(MIN_WINDOW_WIDTH, board_size * CELL_SIZE)
    return width, board_size * CELL_SIZE + TOP_BAR_HEIGHT


def board_cells(lines: Sequence[str]) -> Dict[Tuple[int, int], str]:
    """Map 0-based (row, col) to symbol for every non-empty square."""
    return {
        (r, c): symbol
        for r, line in enumerate(lines)
        for c, symbol in enumerate(line)
        if symbol != EMPTY_SYMBOL
    }


def box_size(board_size: int) -> int:
    root = int(board_size ** 0.5)
    return root if root * root == board_size else 0


def draw_top_bar(
    screen: pygame.Surface,
    title_font: pygame.font.Font,
    label_font: pygame.font.Font,
    title: str,
    current_idx: int,
    total_solutions: int,
):
    width = screen.get_width()
    pygame.draw.rect(screen, BG, (0, 0, width, TOP_BAR_HEIGHT))

    card_rect = pygame.Rect(16, 16, width - 32, TOP_BAR_HEIGHT - 32)
    pygame.draw.rect(screen, CARD_BG, card_rect, border_radius=16)

    title_surf = title_font.render(title, True, TEXT_MAIN)
    screen.blit(title_surf, (card_rect.x + 20, card_rect.y + 12))

    if total_solutions:
        sol_text = f"Solution {current_idx + 1} of {total_solutions}"
    else:
        sol_text = "No solution"
    sol_surf = label_font.render(sol_text, True, TEXT_SECONDARY)
    screen.blit(sol_surf, (card_rect.x + 20, card_rect.y + 48))


def draw_board(
    screen: pygame.Surface,
    cell_font: pygame.font.Font,
    lines: Sequence[str],
    givens: Dict[Tuple[int, int], str] | None = None,
    queens: bool = False,
):
    """
    Draws one solved board.
    givens: squares fixed by the puzzle, drawn in a different color.
    queens: draw every non-empty square as a queen instead of its symbol.
    """
    size = len(lines)
    cells = board_cells(lines)
    givens = givens or {}
    offset_x = (screen.get_width() - size * CELL_SIZE) // 2

    for r in range(size):
        for c in range(size):
            x = offset_x + c * CELL_SIZE
            y = TOP_BAR_HEIGHT + r * CELL_SIZE
            rect = pygame.Rect(x + 2, y + 2, CELL_SIZE - 4, CELL_SIZE - 4)

            if queens and (r + c) % 2 == 0:
                pygame.draw.rect(screen, LIGHT_SQUARE, rect, border_radius=12)
            else:
                pygame.draw.rect(screen, BG, rect, border_radius=12)
                pygame.draw.rect(screen, GRID, rect, width=1, border_radius=12)

            symbol = cells.get((r, c))
            if symbol is None:
                continue

            if queens:
                pygame.draw.circle(screen, QUEEN, rect.center, CELL_SIZE // 3)
                continue

            color = GIVEN if (r, c) in givens else FILLED
            text_surf = cell_font.render(symbol, True, color)
            screen.blit(
                text_surf,
                (
                    x + (CELL_SIZE - text_surf.get_width()) // 2,
                    y + (CELL_SIZE - text_surf.get_height()) // 2,
                ),
            )

    box = box_size(size)
    if not queens and box > 1:
        span = box * CELL_SIZE
        for br in range(box):
            for bc in range(box):
                rect = pygame.Rect(offset_x + bc * span, TOP_BAR_HEIGHT + br * span, span, span)
                pygame.draw.rect(screen, BOX_BORDER, rect, width=2)


def _menu_button_rects(screen_size: Tuple[int, int]) -> List[Tuple[pygame.Rect, str]]:
    w, h = screen_size
    start_y = h // 2
    button_height = 60
    spacing = 20
    button_width = min(400, w - 80)
    return [
        (
            pygame.Rect(
                (w - button_width) // 2,
                start_y + i * (button_height + spacing),
                button_width,
                button_height,
            ),
            action,
        )
        for i, (_, action) in enumerate(MENU_BUTTONS)
    ]


def draw_menu(screen: pygame.Surface, title_font: pygame.font.Font, button_font: pygame.font.Font):
    screen.fill(BG)
    w, h = screen.get_size()

    title_surf = title_font.render("Dancing Links", True, TEXT_MAIN)
    title_rect = title_surf.get_rect(center=(w // 2, h // 4))
    screen.blit(title_surf, title_rect)

    mouse_pos = pygame.mouse.get_pos()
    for (text, _), (rect, _) in zip(MENU_BUTTONS, _menu_button_rects((w, h))):
        color = CARD_BG
        if rect.collidepoint(mouse_pos):
            color = (50, 50, 55)

        pygame.draw.rect(screen, color, rect, border_radius=12)
        pygame.draw.rect(screen, GRID, rect, width=1, border_radius=12)

        label = button_font.render(text, True, TEXT_MAIN)
        screen.blit(label, label.get_rect(center=rect.center))


def get_menu_action(
    mouse_pos: Tuple[int, int],
    screen_size: Tuple[int, int] = (WINDOW_WIDTH, WINDOW_HEIGHT),
) -> str | None:
    for rect, action in _menu_button_rects(screen_size):
        if rect.collidepoint(mouse_pos):
            return action
    return None
