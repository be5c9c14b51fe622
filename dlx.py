# dlx.py
# Toroidal sparse matrix for Algorithm X (Dancing Links)

from __future__ import annotations

from enum import Enum
from typing import Iterable, Sequence

ROOT_LABEL = "--"
SECONDARY_ROOT_LABEL = "|"


class ExactCoverError(Exception):
    """Base class for every error raised by the exact cover core."""


class ConfigurationError(ExactCoverError, ValueError):
    """Bad input detected while building a matrix or solver."""


class ContractViolation(ExactCoverError, RuntimeError):
    """A search invariant was broken; the matrix can no longer be trusted."""


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class Node:
    """Body cell or header of the matrix.

    Identity is the arena index in ``id``; links are rewired freely during
    search so they never take part in equality.
    """

    __slots__ = (
        "id",
        "label",
        "left",
        "right",
        "up",
        "down",
        "row_header",
        "column_header",
        "column_count",
    )

    def __init__(self, node_id: int, label: str | None = None):
        self.id = node_id
        self.label = label
        self.left: Node = self
        self.right: Node = self
        self.up: Node = self
        self.down: Node = self
        self.row_header: Node = self
        self.column_header: Node = self
        self.column_count = 0

    def __repr__(self) -> str:
        if self.label is not None:
            return self.label
        return f"{self.row_header.label}:{self.column_header.label}"

    def is_header(self) -> bool:
        return self.row_header is self or self.column_header is self

    # Insertion keeps both rings closed: the new node lands between self and
    # its current neighbor on the given side.

    def insert_right(self, node: Node) -> None:
        node.right = self.right
        node.left = self
        self.right.left = node
        self.right = node
        node.row_header = self.row_header

    def insert_left(self, node: Node) -> None:
        self.left.insert_right(node)

    def insert_down(self, node: Node) -> None:
        node.down = self.down
        node.up = self
        self.down.up = node
        self.down = node
        node.column_header = self.column_header
        self.column_header.column_count += 1

    def insert_up(self, node: Node) -> None:
        self.up.insert_down(node)

    def unlink_lr(self) -> None:
        self.left.right = self.right
        self.right.left = self.left

    def relink_lr(self) -> None:
        self.right.left = self
        self.left.right = self

    def unlink_ud(self) -> None:
        self.up.down = self.down
        self.down.up = self.up
        self.column_header.column_count -= 1

    def relink_ud(self) -> None:
        self.column_header.column_count += 1
        self.down.up = self
        self.up.down = self


class Matrix:
    """Exact cover instance built from primary and secondary column names.

    Primary columns must be covered exactly once, secondary columns at most
    once. The primary root anchors both the primary column ring and the row
    header ring; the secondary root only anchors the secondary columns.
    """

    def __init__(
        self,
        primary_columns: Sequence[str],
        secondary_columns: Sequence[str] = (),
    ):
        self.nodes: list[Node] = []
        self.primary_root = self._new_node(ROOT_LABEL)
        self.secondary_root = self._new_node(SECONDARY_ROOT_LABEL)
        self.primary_by_name: dict[str, Node] = {}
        self.secondary_by_name: dict[str, Node] = {}

        self._add_columns(self.primary_root, primary_columns, self.primary_by_name)
        self._add_columns(self.secondary_root, secondary_columns, self.secondary_by_name)

    def _new_node(self, label: str | None = None) -> Node:
        node = Node(len(self.nodes), label)
        self.nodes.append(node)
        return node

    def _add_columns(self, root: Node, names: Iterable[str], index: dict[str, Node]) -> None:
        for name in names:
            if name in self.primary_by_name or name in self.secondary_by_name:
                raise ConfigurationError(f"Column {name} is defined more than once")
            header = self._new_node(name)
            root.insert_left(header)
            index[name] = header

    def column(self, name: str) -> Node:
        header = self.primary_by_name.get(name) or self.secondary_by_name.get(name)
        if header is None:
            raise ConfigurationError(f"Column {name} does not exist")
        return header

    def add_row(self, name: str, column_names: Iterable[str]) -> Node:
        # Resolve every column before touching the rings so a bad row leaves
        # the matrix as it was.
        columns: list[Node] = []
        for column_name in column_names:
            header = self.column(column_name)
            if header in columns:
                raise ConfigurationError(f"Row {name} references column {column_name} twice")
            columns.append(header)

        row_header = self._new_node(name)
        self.primary_root.insert_up(row_header)

        for header in columns:
            node = self._new_node()
            row_header.insert_left(node)
            header.insert_up(node)
        return row_header

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def nodes_after(self, start: Node, direction: Direction) -> list[Node]:
        attr = direction.value
        result: list[Node] = []
        node = getattr(start, attr)
        while node is not start:
            result.append(node)
            node = getattr(node, attr)
        return result

    def primary_columns(self) -> list[Node]:
        return self.nodes_after(self.primary_root, Direction.RIGHT)

    def secondary_columns(self) -> list[Node]:
        return self.nodes_after(self.secondary_root, Direction.RIGHT)

    def uncovered_columns(self) -> list[Node]:
        return self.primary_columns() + self.secondary_columns()

    def uncovered_rows(self) -> list[Node]:
        return self.nodes_after(self.primary_root, Direction.DOWN)

    def uncovered_nodes(self) -> list[Node]:
        return [
            node
            for column in self.uncovered_columns()
            for node in self.nodes_after(column, Direction.DOWN)
        ]

    def is_empty(self) -> bool:
        return self.primary_root.right is self.primary_root

    # ------------------------------------------------------------------
    # Cover / uncover
    # ------------------------------------------------------------------

    def _check_column(self, column: Node) -> None:
        if column.label not in self.primary_by_name and column.label not in self.secondary_by_name:
            raise ContractViolation(f"{column!r} is not a column header")
        if self.column(column.label) is not column:
            raise ContractViolation(f"{column!r} does not belong to this matrix")

    def is_covered(self, column: Node) -> bool:
        self._check_column(column)
        # An uncovered header is reachable from both of its neighbors.
        return column.left.right is not column

    def cover_column(self, column: Node) -> None:
        if self.is_covered(column):
            raise ContractViolation(f"Column {column!r} is already covered")

        column.unlink_lr()
        for row_node in self.nodes_after(column, Direction.DOWN):
            for node in self.nodes_after(row_node, Direction.RIGHT):
                node.unlink_ud()

    def uncover_column(self, column: Node) -> None:
        if not self.is_covered(column):
            raise ContractViolation(f"Column {column!r} is not covered")

        for row_node in self.nodes_after(column, Direction.UP):
            for node in self.nodes_after(row_node, Direction.LEFT):
                node.relink_ud()
        column.relink_lr()

    def __str__(self) -> str:
        columns = self.uncovered_columns()
        lines = [" ".join([self.primary_root.label] + [c.label for c in columns])]
        for row_header in self.uncovered_rows():
            used = {n.column_header.id for n in self.nodes_after(row_header, Direction.RIGHT)}
            cells = ["1" if c.id in used else "0" for c in columns]
            lines.append(" ".join([row_header.label] + cells))
        return "\n".join(lines) + "\n"
