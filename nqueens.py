# nqueens.py
# N-Queens as an exact cover problem

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, Iterable, List, Optional

from dlx import ConfigurationError
from matrix_builder import with_constraint_lines
from solver import ColumnSelector, Solvable, Solver, SolverOptions

log = logging.getLogger(__name__)

EMPTY_SYMBOL = "."
QUEEN_SYMBOL = "X"
PRIMARY_SECONDARY_SEPARATOR = " | "


@dataclass(frozen=True, order=True)
class Cell:
    """Board square, 1-based."""

    row: int
    column: int

    def up(self) -> Cell:
        return Cell(self.row - 1, self.column)

    def down(self) -> Cell:
        return Cell(self.row + 1, self.column)

    def left(self) -> Cell:
        return Cell(self.row, self.column - 1)

    def right(self) -> Cell:
        return Cell(self.row, self.column + 1)

    def up_left(self) -> Cell:
        return Cell(self.row - 1, self.column - 1)

    def up_right(self) -> Cell:
        return Cell(self.row - 1, self.column + 1)

    def down_left(self) -> Cell:
        return Cell(self.row + 1, self.column - 1)

    def down_right(self) -> Cell:
        return Cell(self.row + 1, self.column + 1)


DIRECTIONS: List[Callable[[Cell], Cell]] = [
    Cell.up,
    Cell.up_right,
    Cell.right,
    Cell.down_right,
    Cell.down,
    Cell.down_left,
    Cell.left,
    Cell.up_left,
]


class ConstraintsGenerator:
    """Rows and columns of the N-Queens exact cover instance.

    Every board row and column must hold exactly one queen (primary), every
    diagonal at most one (secondary). Squares attacked by an already placed
    queen get no row at all.
    """

    def __init__(self, size: int, existing: Iterable[Cell] = ()):
        if size < 1:
            raise ConfigurationError(f"Board size must be positive, got {size}")
        self.size = size
        self.primary_formatters = [self.format_row_constraint, self.format_column_constraint]
        self.secondary_formatters = [
            self.format_forward_diagonal_constraint,
            self.format_reverse_diagonal_constraint,
        ]

        self.all_cells = [
            Cell(row, column)
            for row in range(1, size + 1)
            for column in range(1, size + 1)
        ]
        forbidden = {reached for cell in existing for reached in self.reachable_from(cell)}
        self.required_cells = [cell for cell in self.all_cells if cell not in forbidden]

    def is_valid(self, cell: Cell) -> bool:
        return 1 <= cell.row <= self.size and 1 <= cell.column <= self.size

    def reachable_from(self, cell: Cell) -> List[Cell]:
        result = []
        for direction in DIRECTIONS:
            current = direction(cell)
            while self.is_valid(current):
                result.append(current)
                current = direction(current)
        return result

    def format_row_constraint(self, cell: Cell) -> str:
        return f"R{cell.row}"

    def format_column_constraint(self, cell: Cell) -> str:
        return f"C{cell.column}"

    def format_forward_diagonal_constraint(self, cell: Cell) -> str:
        return f"A{cell.row + cell.column - 1}"

    def format_reverse_diagonal_constraint(self, cell: Cell) -> str:
        return f"B{(cell.row - 1) + (self.size - cell.column) + 1}"

    def format_row_name(self, cell: Cell) -> str:
        return f"{cell.row}.{cell.column}"

    def parse_row_name(self, name: str) -> Cell:
        row, sep, column = name.partition(".")
        if not sep or not row.isdigit() or not column.isdigit():
            raise ConfigurationError(f"Unable to parse row name '{name}'")
        return Cell(int(row), int(column))

    def _column_names(self, formatters) -> str:
        names: List[str] = []
        for formatter in formatters:
            distinct = {formatter(cell) for cell in self.all_cells}
            names.extend(sorted(distinct, key=lambda name: int(name[1:])))
        return " ".join(names)

    def generate_column_names(self) -> str:
        return (
            self._column_names(self.primary_formatters)
            + PRIMARY_SECONDARY_SEPARATOR
            + self._column_names(self.secondary_formatters)
        )

    def generate_row(self, cell: Cell) -> str:
        constraints = [f(cell) for f in self.primary_formatters + self.secondary_formatters]
        return f"{self.format_row_name(cell)}: " + " ".join(constraints)

    def generate(self) -> List[str]:
        return [self.generate_column_names()] + [
            self.generate_row(cell) for cell in sorted(self.required_cells)
        ]


@dataclass(frozen=True)
class NQueens(Solvable["NQueens"]):
    size: int
    queens: FrozenSet[Cell] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "queens", frozenset(self.queens))

    @classmethod
    def parse(cls, lines: Iterable[str]) -> NQueens:
        lines = [line.strip() for line in lines if line.strip()]
        size = len(lines)
        queens = []
        for row, line in enumerate(lines, start=1):
            if len(line) != size:
                raise ConfigurationError(
                    f"Expected row {row} to have size {size} but it has size {len(line)}"
                )
            for column, symbol in enumerate(line, start=1):
                if symbol != EMPTY_SYMBOL:
                    queens.append(Cell(row, column))
        return cls(size, queens)

    def solve(self, options: Optional[SolverOptions] = None) -> List[NQueens]:
        if options is None:
            options = SolverOptions(column_selector=ColumnSelector.FIRST)
        generator = ConstraintsGenerator(self.size, self.queens)
        matrix = with_constraint_lines(generator.generate())
        solutions = Solver(matrix, options).solve()
        log.info("%dx%d queens: %d solution(s)", self.size, self.size, len(solutions))
        return [
            NQueens(self.size, [generator.parse_row_name(name) for name in solution.row_names()])
            for solution in solutions
        ]

    def to_lines(self) -> List[str]:
        return [
            "".join(
                QUEEN_SYMBOL if Cell(row, column) in self.queens else EMPTY_SYMBOL
                for column in range(1, self.size + 1)
            )
            for row in range(1, self.size + 1)
        ]

    def to_pretty_string(self) -> str:
        header = f"{type(self).__name__}: size {self.size}x{self.size}"
        return "\n".join([header] + self.to_lines())
