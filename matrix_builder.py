# matrix_builder.py
# Build a dlx.Matrix from its text encoding

"""Text encoding of an exact cover instance.

The first line lists the primary column names, optionally followed by ``|``
and the secondary column names. Every other line is one row, optionally
prefixed with ``name:``. Rows either list the column names they use
(constraint lines) or give one non-negative integer per column in header
order (boolean matrix), where anything above zero marks a used column.
Rows without a name are called ``R<line number>``.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from dlx import ConfigurationError, Matrix

SECONDARY_SEPARATOR = "|"


def parse_column_names(header: str) -> Tuple[List[str], List[str]]:
    primary, sep, secondary = header.partition(SECONDARY_SEPARATOR)
    return primary.split(), secondary.split() if sep else []


def row_name(index: int, line: str) -> str:
    name, sep, _ = line.partition(":")
    return name.strip() if sep else f"R{index}"


def row_values(line: str) -> List[str]:
    _, sep, rest = line.partition(":")
    return (rest if sep else line).split()


def booleans_to_column_names(values: Sequence[str], column_names: Sequence[str]) -> List[str]:
    if len(values) != len(column_names):
        raise ConfigurationError(
            f"Row {list(values)} is expected to have size {len(column_names)} "
            f"but it is {len(values)}"
        )
    result = []
    for value, name in zip(values, column_names):
        try:
            flag = int(value)
        except ValueError:
            raise ConfigurationError(f"Cell value {value!r} is not an integer") from None
        if flag < 0:
            raise ConfigurationError(f"Cell value {value!r} is negative")
        if flag > 0:
            result.append(name)
    return result


def create(lines: Sequence[str], to_column_names: Callable[[str], List[str]]) -> Matrix:
    lines = [line for line in lines if line.strip()]
    if len(lines) < 2:
        raise ConfigurationError("Expected a header line and at least one row")

    primary, secondary = parse_column_names(lines[0])
    matrix = Matrix(primary, secondary)
    for index, line in enumerate(lines[1:], start=1):
        matrix.add_row(row_name(index, line), to_column_names(line))
    return matrix


def with_constraint_lines(lines: Sequence[str]) -> Matrix:
    return create(lines, row_values)


def from_boolean_matrix(lines: Sequence[str]) -> Matrix:
    header = next((line for line in lines if line.strip()), "")
    primary, secondary = parse_column_names(header)
    column_names = primary + secondary
    return create(lines, lambda line: booleans_to_column_names(row_values(line), column_names))
