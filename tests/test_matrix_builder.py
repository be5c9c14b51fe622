import pytest

from dlx import ConfigurationError, Direction
from matrix_builder import (
    from_boolean_matrix,
    parse_column_names,
    row_name,
    row_values,
    with_constraint_lines,
)


def column_names(matrix):
    return [c.label for c in matrix.uncovered_columns()]


def row_names(matrix):
    return [r.label for r in matrix.uncovered_rows()]


def row_columns(matrix, index):
    row = matrix.uncovered_rows()[index - 1]
    return [n.column_header.label for n in matrix.nodes_after(row, Direction.RIGHT)]


def test_from_constraint_lines():
    matrix = with_constraint_lines(["A B C D", "B D", "A C", "A D", "B C"])

    assert column_names(matrix) == ["A", "B", "C", "D"]
    assert row_names(matrix) == ["R1", "R2", "R3", "R4"]
    assert row_columns(matrix, 4) == ["B", "C"]


def test_from_constraint_lines_with_row_names():
    matrix = with_constraint_lines(["A B C D", "r1: B D", "r2: A C", "r3: A D", "r4: B C"])

    assert row_names(matrix) == ["r1", "r2", "r3", "r4"]
    assert row_columns(matrix, 4) == ["B", "C"]


def test_from_boolean_matrix():
    matrix = from_boolean_matrix(["A B C D", "0 1 0 1", "1 0 1 0", "1 0 0 1", "0 1 1 0"])

    assert column_names(matrix) == ["A", "B", "C", "D"]
    assert row_names(matrix) == ["R1", "R2", "R3", "R4"]
    assert row_columns(matrix, 1) == ["B", "D"]


def test_boolean_matrix_treats_positive_values_as_used():
    matrix = from_boolean_matrix(["A B C", "x: 2 0 7"])
    assert row_names(matrix) == ["x"]
    assert row_columns(matrix, 1) == ["A", "C"]


def test_secondary_columns_after_separator():
    matrix = with_constraint_lines(["A B | C D", "r1: A C", "r2: B D"])
    assert [c.label for c in matrix.primary_columns()] == ["A", "B"]
    assert [c.label for c in matrix.secondary_columns()] == ["C", "D"]


def test_boolean_matrix_covers_secondary_columns():
    matrix = from_boolean_matrix(["A | X", "1 1", "1 0"])
    assert row_columns(matrix, 1) == ["A", "X"]
    assert row_columns(matrix, 2) == ["A"]


def test_blank_lines_are_ignored():
    matrix = with_constraint_lines(["", "A B", "", "A", "B", "  "])
    assert row_names(matrix) == ["R1", "R2"]


def test_helpers():
    assert parse_column_names("A B") == (["A", "B"], [])
    assert parse_column_names("A | B C") == (["A"], ["B", "C"])
    assert row_name(3, "B C") == "R3"
    assert row_name(3, " name : B C") == "name"
    assert row_values("name: B  C ") == ["B", "C"]
    assert row_values("B C") == ["B", "C"]


def test_row_length_mismatch():
    with pytest.raises(ConfigurationError, match="expected to have size 3"):
        from_boolean_matrix(["A B C", "1 0"])


def test_non_numeric_cell():
    with pytest.raises(ConfigurationError, match="not an integer"):
        from_boolean_matrix(["A B", "1 y"])


def test_negative_cell():
    with pytest.raises(ConfigurationError):
        from_boolean_matrix(["A B", "1 -1"])


def test_unknown_column():
    with pytest.raises(ConfigurationError, match="Column E does not exist"):
        with_constraint_lines(["A B", "A E"])


def test_header_only_is_rejected():
    with pytest.raises(ConfigurationError):
        with_constraint_lines(["A B"])
    with pytest.raises(ConfigurationError):
        from_boolean_matrix([])
