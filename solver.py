# solver.py
# Algorithm X search over a dlx.Matrix

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from operator import attrgetter
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from config import CFG
from dlx import ConfigurationError, ContractViolation, Direction, Matrix, Node

log = logging.getLogger(__name__)

SolutionT = TypeVar("SolutionT")


class ColumnSelector(Enum):
    FIRST = "first"
    SMALLER = "smaller"

    @classmethod
    def from_name(cls, name: str) -> ColumnSelector:
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown column selector {name!r}") from None

    def select(self, columns: Sequence[Node]) -> Node:
        if not columns:
            raise ContractViolation("No column available to branch on")
        if self is ColumnSelector.FIRST:
            return columns[0]
        # min() keeps the first of equal counts, so ties follow ring order.
        return min(columns, key=attrgetter("column_count"))


@dataclass(frozen=True)
class SolverOptions:
    column_selector: ColumnSelector = ColumnSelector.SMALLER
    limit: Optional[int] = None
    logger: Optional[Callable[[str], None]] = None

    def __post_init__(self):
        if self.limit is not None and (
            isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit <= 0
        ):
            raise ConfigurationError(f"Solution limit must be a positive integer, got {self.limit!r}")

    @classmethod
    def with_limit(cls, limit: int) -> SolverOptions:
        return cls(limit=limit)

    @classmethod
    def from_config(cls) -> SolverOptions:
        return cls(
            column_selector=ColumnSelector.from_name(CFG.COLUMN_SELECTOR),
            limit=CFG.SOLUTION_LIMIT,
        )


@dataclass(frozen=True)
class Solution:
    """One exact cover: the body nodes of every chosen row, in search order."""

    nodes: Tuple[Tuple[Node, ...], ...]

    def row_names(self) -> List[str]:
        return [row[0].row_header.label for row in self.nodes]

    def covered_column_names(self) -> List[List[str]]:
        """Column names per row, each list starting at the pivot column of its level."""
        return [[node.column_header.label for node in row] for row in self.nodes]

    def __repr__(self) -> str:
        return (
            f"Solution(row_names={self.row_names()}, "
            f"covered_column_names={self.covered_column_names()})"
        )


class Solvable(ABC, Generic[SolutionT]):
    @abstractmethod
    def solve(self, options: Optional[SolverOptions] = None) -> List[SolutionT]:
        ...

    def has_solutions(self) -> bool:
        return bool(self.solve(SolverOptions.with_limit(1)))

    def has_unique_solution(self) -> bool:
        return len(self.solve(SolverOptions.with_limit(2))) == 1


class ExactCover(Solvable[Solution]):
    """A bare matrix as a Solvable; the puzzle encodings call Solver themselves."""

    def __init__(self, matrix: Matrix):
        self.matrix = matrix

    def solve(self, options: Optional[SolverOptions] = None) -> List[Solution]:
        return Solver(self.matrix, options).solve()


class Solver:
    def __init__(self, matrix: Matrix, options: Optional[SolverOptions] = None):
        self.matrix = matrix
        self.options = options or SolverOptions()
        self.solutions: List[Solution] = []

    def solve(self) -> List[Solution]:
        self.solutions = []
        started = time.perf_counter()
        self._search([])
        log.info(
            "Found %d solution(s) in %.3fs using %s",
            len(self.solutions),
            time.perf_counter() - started,
            self.options.column_selector.name,
        )
        return list(self.solutions)

    def _tracing(self) -> bool:
        return self.options.logger is not None or log.isEnabledFor(logging.DEBUG)

    def _trace(self, message: str, *args) -> None:
        if not self._tracing():
            return
        text = message % args
        log.debug(text)
        if self.options.logger is not None:
            self.options.logger(text)

    def _limit_reached(self) -> bool:
        limit = self.options.limit
        return limit is not None and len(self.solutions) >= limit

    def _capture(self, progress: List[Node]) -> Solution:
        rows = []
        for row_node in progress:
            ring = [row_node] + self.matrix.nodes_after(row_node, Direction.RIGHT)
            rows.append(tuple(node for node in ring if not node.is_header()))
        return Solution(tuple(rows))

    def _search(self, progress: List[Node]) -> bool:
        """One search level. Returns True when a solution was recorded below.

        Every cover issued here is undone before returning, including when the
        solution limit cuts the row loop short.
        """
        matrix = self.matrix
        level = len(progress)
        self._trace("%s: searching level %s", level, level)

        if matrix.is_empty():
            self._trace("%s: *** found solution: %s", level, progress)
            self.solutions.append(self._capture(progress))
            return True

        if self._tracing():
            self._trace(
                "%s: available columns: %s | %s",
                level,
                matrix.primary_columns(),
                matrix.secondary_columns(),
            )
        column = self.options.column_selector.select(matrix.primary_columns())
        matrix.cover_column(column)
        self._trace("%s: chose and covered column %s", level, column)

        found = False
        try:
            for row_node in matrix.nodes_after(column, Direction.DOWN):
                progress.append(row_node)
                self._trace("%s: adding %s to progress", level, row_node)
                covered: List[Node] = []
                try:
                    for node in matrix.nodes_after(row_node, Direction.RIGHT):
                        if node is not row_node.row_header:
                            matrix.cover_column(node.column_header)
                            covered.append(node.column_header)

                    if self._search(progress):
                        found = True
                        if self._limit_reached():
                            return True
                finally:
                    for header in reversed(covered):
                        matrix.uncover_column(header)
                    progress.pop()
                    self._trace("%s: removing %s from progress", level, row_node)
        finally:
            matrix.uncover_column(column)
            self._trace("%s: uncovering column %s", level, column)

        return found
