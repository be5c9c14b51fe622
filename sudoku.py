# sudoku.py
# Sudoku (any size, any alphabet) as an exact cover problem

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from dlx import ConfigurationError
from matrix_builder import with_constraint_lines
from solver import Solvable, Solver, SolverOptions

log = logging.getLogger(__name__)

DEFAULT_ALPHABET: Tuple[str, ...] = tuple("123456789ABCDEFGHIJKLMNOPQRSTUVZ")
EMPTY_SYMBOL = "."
# Symbols that would clash with the text encoding of rows and columns.
RESERVED_SYMBOLS = frozenset({EMPTY_SYMBOL, ":", "|"})

ROW_NAME_RE = re.compile(r"r(\d+)c(\d+)#(.+)")


def is_perfect_square(value: int) -> bool:
    return math.isqrt(value) ** 2 == value


def check_alphabet(alphabet: Sequence[str], size: int) -> None:
    if len(alphabet) < size:
        raise ConfigurationError(
            f"Current alphabet {list(alphabet)} should contain at least {size} symbols"
        )
    for symbol in alphabet:
        if len(symbol) != 1 or symbol.isspace() or symbol in RESERVED_SYMBOLS:
            raise ConfigurationError(f"Symbol {symbol!r} can not be used in a sudoku")


@dataclass(frozen=True, order=True)
class Coordinates:
    row: int
    column: int


@dataclass(frozen=True, order=True)
class Cell:
    coordinates: Coordinates
    value: str

    @classmethod
    def at(cls, row: int, column: int, value: str) -> Cell:
        return cls(Coordinates(row, column), value)

    @property
    def row(self) -> int:
        return self.coordinates.row

    @property
    def column(self) -> int:
        return self.coordinates.column


def index_by_coordinates(cells: Iterable[Cell]) -> Dict[Coordinates, Cell]:
    result: Dict[Coordinates, Cell] = {}
    for cell in cells:
        if cell.coordinates in result:
            raise ConfigurationError(f"Cell {cell.coordinates} is given more than once")
        result[cell.coordinates] = cell
    return result


class ConstraintsGenerator:
    """Exact cover rows for a sudoku.

    Columns: every square filled once (``X``), every symbol once per row
    (``R``), per column (``C``) and, for perfect-square sizes, per box
    (``S``). A given square only gets the row for its own symbol.
    """

    def __init__(self, size: int, existing: Iterable[Cell], alphabet: Sequence[str]):
        check_alphabet(alphabet, size)
        self.size = size
        self.existing = index_by_coordinates(existing)

        self.formatters = [
            self.format_cell_constraint,
            self.format_row_constraint,
            self.format_column_constraint,
        ]
        if is_perfect_square(size):
            self.formatters.append(self.format_sector_constraint)

        self.all_possible_cells = [
            Cell.at(row, column, alphabet[number])
            for row in range(1, size + 1)
            for column in range(1, size + 1)
            for number in range(size)
        ]

    def format_cell_constraint(self, cell: Cell) -> str:
        return f"X{cell.row}.{cell.column}"

    def format_row_constraint(self, cell: Cell) -> str:
        return f"R{cell.row}#{cell.value}"

    def format_column_constraint(self, cell: Cell) -> str:
        return f"C{cell.column}#{cell.value}"

    def format_sector_constraint(self, cell: Cell) -> str:
        sector_size = math.isqrt(self.size)
        sector_row = ((cell.row - 1) // sector_size) * sector_size
        sector_column = (cell.column - 1) // sector_size
        return f"S{sector_row + sector_column + 1}#{cell.value}"

    def format_row_name(self, cell: Cell) -> str:
        return f"r{cell.row}c{cell.column}#{cell.value}"

    def parse_row_name(self, name: str) -> Cell:
        match = ROW_NAME_RE.fullmatch(name)
        if match is None:
            raise ConfigurationError(f"Unable to parse row name '{name}'")
        return Cell.at(int(match.group(1)), int(match.group(2)), match.group(3))

    def generate_column_names(self) -> str:
        names = dict.fromkeys(
            formatter(cell) for formatter in self.formatters for cell in self.all_possible_cells
        )
        return " ".join(names)

    def generate_row(self, cell: Cell) -> str:
        constraints = " ".join(formatter(cell) for formatter in self.formatters)
        return f"{self.format_row_name(cell)}: {constraints}"

    def generate(self) -> List[str]:
        empty_cells = [
            cell for cell in self.all_possible_cells if cell.coordinates not in self.existing
        ]
        cells = sorted(list(self.existing.values()) + empty_cells)
        return [self.generate_column_names()] + [self.generate_row(cell) for cell in cells]


def infer_alphabet(size: int, lines: Sequence[str]) -> List[str]:
    seen = {symbol for line in lines for symbol in line if symbol != EMPTY_SYMBOL}
    if len(seen) > size:
        raise ConfigurationError(f"Too many symbols {sorted(seen)} for size {size}")
    missing = [symbol for symbol in DEFAULT_ALPHABET if symbol not in seen]
    return sorted(seen) + missing[: size - len(seen)]


@dataclass(frozen=True)
class Sudoku(Solvable["Sudoku"]):
    size: int
    cells: FrozenSet[Cell] = field(default_factory=frozenset)
    alphabet: Tuple[str, ...] = DEFAULT_ALPHABET

    def __post_init__(self):
        if self.size < 1:
            raise ConfigurationError(f"Sudoku size must be positive, got {self.size}")
        check_alphabet(self.alphabet, self.size)
        cells = index_by_coordinates(self.cells)
        object.__setattr__(self, "cells", frozenset(cells.values()))
        object.__setattr__(self, "alphabet", tuple(sorted(list(self.alphabet)[: self.size])))

    @classmethod
    def parse(cls, lines: Iterable[str]) -> Sudoku:
        lines = [line.strip() for line in lines if line.strip()]
        size = len(lines)
        cells = []
        for row, line in enumerate(lines, start=1):
            if len(line) != size:
                raise ConfigurationError(
                    f"Expected row {row} to have size {size} but it has size {len(line)}"
                )
            for column, symbol in enumerate(line, start=1):
                if symbol != EMPTY_SYMBOL:
                    cells.append(Cell.at(row, column, symbol))
        return cls(size, cells, tuple(infer_alphabet(size, lines)))

    def solve(self, options: Optional[SolverOptions] = None) -> List[Sudoku]:
        generator = ConstraintsGenerator(self.size, self.cells, self.alphabet)
        matrix = with_constraint_lines(generator.generate())
        solutions = Solver(matrix, options).solve()
        log.info("%dx%d sudoku: %d solution(s)", self.size, self.size, len(solutions))
        return [
            Sudoku(
                self.size,
                [generator.parse_row_name(name) for name in solution.row_names()],
                self.alphabet,
            )
            for solution in solutions
        ]

    def value_at(self, row: int, column: int) -> Optional[str]:
        for cell in self.cells:
            if cell.row == row and cell.column == column:
                return cell.value
        return None

    def to_lines(self) -> List[str]:
        values = {cell.coordinates: cell.value for cell in self.cells}
        return [
            "".join(
                values.get(Coordinates(row, column), EMPTY_SYMBOL)
                for column in range(1, self.size + 1)
            )
            for row in range(1, self.size + 1)
        ]

    def to_pretty_string(self) -> str:
        header = f"{type(self).__name__}: size {self.size}x{self.size}"
        return "\n".join([header] + self.to_lines())
