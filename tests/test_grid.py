import numpy as np
import pytest
from nwalign import Alphabet, ScoreMatrix, AlignmentGrid, Direction, TracebackError, GridSizeWarning


@pytest.fixture
def grid():
    m = ScoreMatrix.build(4, match=1, mismatch=0, gap=-1)
    return AlignmentGrid.build(Alphabet.DNA.encode(b'AC'), Alphabet.DNA.encode(b'A'), m)


class TestGridConstruction:
    def test_table(self, grid):
        np.testing.assert_array_equal(grid.table, [[0, -1], [-1, 1], [-2, 0]])
        assert grid.shape == (3, 2)
        assert grid.score == 0

    def test_borders_accumulate_gap_costs(self):
        m = ScoreMatrix([[1, 0, -2], [0, 1, -3], [-5, -7, 0]])
        grid = AlignmentGrid.build([0, 1, 1], [1, 0], m)
        np.testing.assert_array_equal(grid.table[0], [0, -7, -12])
        np.testing.assert_array_equal(grid.table[:, 0], [0, -2, -5, -8])

    def test_interior_is_best_candidate(self):
        rng = np.random.default_rng(7)
        m = ScoreMatrix(rng.integers(-3, 4, size=(5, 5)))
        ref, qry = rng.integers(0, 4, size=9), rng.integers(0, 4, size=6)
        grid = AlignmentGrid.build(ref, qry, m)
        for i in range(1, 10):
            for j in range(1, 7):
                assert grid[i, j] == max(grid[i - 1, j - 1] + m[ref[i - 1], qry[j - 1]],
                                         grid[i - 1, j] + m[ref[i - 1], 4],
                                         grid[i, j - 1] + m[4, qry[j - 1]])

    def test_read_only(self, grid):
        with pytest.raises(ValueError):
            grid.table[1, 1] = 5
        assert not grid.reference.flags.writeable

    def test_size_warning(self, monkeypatch):
        monkeypatch.setattr(AlignmentGrid, 'WARN_CELLS', 4)
        with pytest.warns(GridSizeWarning):
            AlignmentGrid.build([0, 1], [0, 1], ScoreMatrix.build(2))


class TestPointer:
    def test_borders(self, grid):
        assert grid.pointer(0, 0) == Direction.NONE
        assert grid.pointer(0, 1) == Direction.LEFT
        assert grid.pointer(2, 0) == Direction.UP

    def test_interior(self, grid):
        assert grid.pointer(1, 1) == Direction.DIAG
        assert grid.pointer(2, 1) == Direction.UP

    def test_out_of_range(self, grid):
        with pytest.raises(IndexError):
            grid.pointer(3, 0)


class TestTraceback:
    def test_inconsistent_grid(self, grid):
        table = grid.table.copy()
        table[2, 1] = 99
        tampered = AlignmentGrid(table, grid.reference, grid.query, grid.matrix)
        assert tampered.pointer(2, 1) == Direction.NONE
        with pytest.raises(TracebackError) as info:
            tampered.traceback()
        assert (info.value.row, info.value.column) == (2, 1)

    def test_traceback_error_is_runtime_error(self, grid):
        table = grid.table.copy()
        table[1, 1] = -50
        table[2, 1] = -51
        with pytest.raises(RuntimeError):
            AlignmentGrid(table, grid.reference, grid.query, grid.matrix).traceback()

    def test_traceback_is_repeatable(self, grid):
        assert grid.traceback() == grid.traceback()
