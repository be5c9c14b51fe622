import pytest

from dlx import ConfigurationError, ContractViolation, Direction, Matrix
from matrix_builder import from_boolean_matrix

KNUTH = [
    "A B C D E F G",
    "0 0 1 0 1 1 0",
    "1 0 0 1 0 0 1",
    "0 1 1 0 0 1 0",
    "1 0 0 1 0 0 0",
    "0 1 0 0 0 0 1",
    "0 0 0 1 1 0 1",
]


@pytest.fixture
def matrix():
    return from_boolean_matrix(KNUTH)


def labels(nodes):
    return [node.label for node in nodes]


def assert_rings_consistent(matrix):
    roots = [matrix.primary_root, matrix.secondary_root]
    live_columns = roots + matrix.uncovered_columns()
    for column in live_columns:
        assert column.right.left is column
        assert column.left.right is column
        for node in [column] + matrix.nodes_after(column, Direction.DOWN):
            assert node.down.up is node
            assert node.up.down is node
    # Row rings are never rewired horizontally.
    for node in matrix.nodes:
        if node not in roots and node.column_header is not node:
            assert node.right.left is node
            assert node.left.right is node


def test_knuth_matrix_shape(matrix):
    assert labels(matrix.uncovered_columns()) == list("ABCDEFG")
    assert labels(matrix.uncovered_rows()) == ["R1", "R2", "R3", "R4", "R5", "R6"]
    assert len(matrix.uncovered_nodes()) == 16


def test_column_count_matches_rows(matrix):
    assert [c.column_count for c in matrix.uncovered_columns()] == [2, 2, 2, 3, 2, 2, 3]


def test_rings_are_closed_after_construction(matrix):
    for node in matrix.nodes:
        assert node.right.left is node
        assert node.left.right is node
        assert node.down.up is node
        assert node.up.down is node


def test_node_identity_is_arena_index(matrix):
    assert [node.id for node in matrix.nodes] == list(range(len(matrix.nodes)))
    first, second = matrix.nodes[0], matrix.nodes[1]
    assert first != second
    assert len({node for node in matrix.nodes}) == len(matrix.nodes)


def test_headers_and_body_nodes(matrix):
    column = matrix.column("A")
    assert column.is_header()
    assert column.column_header is column
    row = matrix.uncovered_rows()[0]
    assert row.is_header()
    assert row.row_header is row
    for node in matrix.uncovered_nodes():
        assert not node.is_header()
        assert node.label is None


def test_nodes_after_excludes_start(matrix):
    row = matrix.uncovered_rows()[1]
    after = matrix.nodes_after(row, Direction.RIGHT)
    assert row not in after
    assert [n.column_header.label for n in after] == ["A", "D", "G"]
    column = matrix.column("D")
    assert [n.row_header.label for n in matrix.nodes_after(column, Direction.DOWN)] == ["R2", "R4", "R6"]
    assert [n.row_header.label for n in matrix.nodes_after(column, Direction.UP)] == ["R6", "R4", "R2"]


def test_cover_column(matrix):
    all_columns = matrix.uncovered_columns()
    all_rows = matrix.uncovered_rows()
    column = all_columns[0]

    matrix.cover_column(column)

    assert column not in matrix.uncovered_columns()
    assert [c.column_count for c in all_columns] == [2, 2, 2, 1, 2, 2, 2]
    row_headers = [node.row_header for node in matrix.uncovered_nodes()]
    assert all_rows[1] not in row_headers
    assert all_rows[3] not in row_headers
    assert labels(matrix.uncovered_rows()) == ["R1", "R3", "R5", "R6"]
    assert matrix.is_covered(column)
    assert_rings_consistent(matrix)


def test_cover_then_uncover_restores_everything(matrix):
    all_columns = matrix.uncovered_columns()
    all_rows = matrix.uncovered_rows()
    all_nodes = matrix.uncovered_nodes()

    for column in all_columns:
        matrix.cover_column(column)
        matrix.uncover_column(column)

        assert matrix.uncovered_columns() == all_columns
        assert matrix.uncovered_rows() == all_rows
        assert matrix.uncovered_nodes() == all_nodes
        assert [c.column_count for c in all_columns] == [2, 2, 2, 3, 2, 2, 3]


def test_nested_covers_unwind_in_reverse_order(matrix):
    all_nodes = matrix.uncovered_nodes()
    a, d, g = matrix.column("A"), matrix.column("D"), matrix.column("G")

    matrix.cover_column(a)
    matrix.cover_column(d)
    matrix.cover_column(g)
    matrix.uncover_column(g)
    matrix.uncover_column(d)
    matrix.uncover_column(a)

    assert matrix.uncovered_nodes() == all_nodes
    for node in matrix.nodes:
        assert node.right.left is node
        assert node.down.up is node


def test_cover_twice_is_a_contract_violation(matrix):
    column = matrix.column("B")
    matrix.cover_column(column)
    with pytest.raises(ContractViolation, match="already covered"):
        matrix.cover_column(column)


def test_uncover_uncovered_is_a_contract_violation(matrix):
    with pytest.raises(ContractViolation, match="not covered"):
        matrix.uncover_column(matrix.column("B"))


def test_cover_non_column_is_a_contract_violation(matrix):
    with pytest.raises(ContractViolation):
        matrix.cover_column(matrix.uncovered_nodes()[0])
    with pytest.raises(ContractViolation):
        matrix.cover_column(matrix.uncovered_rows()[0])
    with pytest.raises(ContractViolation):
        matrix.cover_column(matrix.primary_root)


def test_duplicate_column_names_are_rejected():
    with pytest.raises(ConfigurationError):
        Matrix(["A", "B", "A"])
    with pytest.raises(ConfigurationError):
        Matrix(["A", "B"], ["B", "C"])


def test_unknown_column_is_rejected_without_side_effects():
    matrix = Matrix(["A", "B"])
    node_count = len(matrix.nodes)
    with pytest.raises(ConfigurationError, match="Column Z does not exist"):
        matrix.add_row("r1", ["A", "Z"])
    assert len(matrix.nodes) == node_count
    assert matrix.uncovered_rows() == []
    assert matrix.column("A").column_count == 0


def test_same_column_twice_in_a_row_is_rejected():
    matrix = Matrix(["A", "B"])
    with pytest.raises(ConfigurationError):
        matrix.add_row("r1", ["A", "A"])


def test_add_row_keeps_insertion_order():
    matrix = Matrix(["A", "B", "C"])
    matrix.add_row("first", ["C", "A"])
    matrix.add_row("second", ["A"])
    row = matrix.uncovered_rows()[0]
    assert [n.column_header.label for n in matrix.nodes_after(row, Direction.RIGHT)] == ["C", "A"]
    column = matrix.column("A")
    assert [n.row_header.label for n in matrix.nodes_after(column, Direction.DOWN)] == ["first", "second"]


def test_secondary_columns_do_not_gate_emptiness():
    matrix = Matrix(["A", "B"], ["C", "D"])
    assert not matrix.is_empty()
    assert labels(matrix.secondary_columns()) == ["C", "D"]
    assert labels(matrix.uncovered_columns()) == ["A", "B", "C", "D"]

    matrix.cover_column(matrix.column("A"))
    matrix.cover_column(matrix.column("B"))

    assert matrix.is_empty()
    assert labels(matrix.secondary_columns()) == ["C", "D"]
    assert matrix.uncovered_rows() == []


def test_only_secondary_columns_is_empty():
    assert Matrix([], ["C", "D"]).is_empty()


def test_secondary_columns_cover_like_primary():
    matrix = Matrix(["A"], ["X"])
    matrix.add_row("r1", ["A", "X"])
    matrix.add_row("r2", ["X"])
    x = matrix.column("X")
    matrix.cover_column(x)
    assert labels(matrix.uncovered_columns()) == ["A"]
    assert matrix.column("A").column_count == 0
    matrix.uncover_column(x)
    assert matrix.column("A").column_count == 1
    assert x.column_count == 2


def test_str_renders_uncovered_part(matrix):
    text = str(matrix)
    lines = text.splitlines()
    assert lines[0] == "-- A B C D E F G"
    assert lines[1] == "R1 0 0 1 0 1 1 0"
    matrix.cover_column(matrix.column("A"))
    lines = str(matrix).splitlines()
    assert lines[0] == "-- B C D E F G"
    assert [line.split()[0] for line in lines[1:]] == ["R1", "R3", "R5", "R6"]
