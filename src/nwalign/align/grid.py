"""
Needleman-Wunsch dynamic programming grid and segment traceback.

The grid is filled in a single forward pass and read back in a single backward pass. Both passes are numba kernels
when numba is installed and run as plain Python otherwise. Traceback does not store direction pointers: at each cell
it recomputes the three candidate scores and takes the first one (diagonal, up, left) that reproduces the stored
value, so a grid that disagrees with its matrix is detected rather than silently followed.
"""
from enum import IntEnum
from typing import Union
from warnings import warn

import numpy as np

from nwalign import NwalignWarning
from nwalign.align.matrix import AlignmentError, ScoreMatrix
from nwalign.align.result import AlignmentResult
from nwalign.lib.resources import jit


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class TracebackError(AlignmentError, RuntimeError):
    """
    Raised when no move reproduces the score stored in a grid cell.

    This indicates a grid and matrix that disagree (e.g. a hand-edited table) and is never expected from a grid built
    by ``AlignmentGrid.build``.
    """
    def __init__(self, row: int, column: int):
        super().__init__(f'No traceback path at row {row}, column {column}')
        self.row = row
        self.column = column


class GridSizeWarning(NwalignWarning):
    """Issued when a grid is large enough that memory use may be a problem."""


# Constants ------------------------------------------------------------------------------------------------------------
_NONE = 0
_DIAG = 1
_UP = 2
_LEFT = 3


class Direction(IntEnum):
    """Move taken from a grid cell towards the origin."""
    NONE = _NONE
    DIAG = _DIAG
    UP = _UP
    LEFT = _LEFT


# Classes --------------------------------------------------------------------------------------------------------------
class AlignmentGrid:
    """
    The (r + 1) x (c + 1) score table for a reference of length r (rows) and a query of length c (columns).

    Cell ``(i, j)`` holds the best score for aligning the first *i* reference symbols with the first *j* query
    symbols. The table is read-only once built.

    Examples:
        >>> grid = AlignmentGrid.build(Alphabet.DNA.encode(b'AC'), Alphabet.DNA.encode(b'A'), matrix)
        >>> grid.score
        0
    """
    WARN_CELLS = 50_000_000
    __slots__ = ('_table', '_reference', '_query', '_matrix')

    def __init__(self, table: np.ndarray, reference: np.ndarray, query: np.ndarray, matrix: ScoreMatrix):
        self._table = table
        self._reference = reference
        self._query = query
        self._matrix = matrix

    @classmethod
    def build(cls, reference: np.ndarray, query: np.ndarray, matrix: ScoreMatrix,
              stacklevel: int = 2) -> 'AlignmentGrid':
        """
        Fills the grid for two index sequences.

        Indices must already be validated against the matrix; unrecognised symbols are rejected upstream.

        Args:
            reference: Reference indices (grid rows).
            query: Query indices (grid columns).
            matrix: A validated ScoreMatrix.
            stacklevel: Stack level of the ``GridSizeWarning``, for wrappers that want it attributed to their caller.

        Returns:
            The filled, read-only grid.
        """
        reference = np.array(reference, dtype=np.int64)
        query = np.array(query, dtype=np.int64)
        n_cells = (len(reference) + 1) * (len(query) + 1)
        if n_cells > cls.WARN_CELLS:
            warn(f'Allocating a {len(reference) + 1} x {len(query) + 1} alignment grid '
                 f'({n_cells * 8 / 1e6:.0f} MB)', GridSizeWarning, stacklevel=stacklevel)
        table = np.zeros((len(reference) + 1, len(query) + 1), dtype=np.int64)
        _fill_kernel(reference, query, matrix._data, table)
        table.flags.writeable = False
        reference.flags.writeable = False
        query.flags.writeable = False
        return cls(table, reference, query, matrix)

    def __repr__(self): return f"AlignmentGrid{self._table.shape}"
    def __getitem__(self, item) -> Union[int, np.ndarray]:
        value = self._table[item]
        return int(value) if np.ndim(value) == 0 else value
    @property
    def shape(self) -> tuple[int, int]: return self._table.shape
    @property
    def table(self) -> np.ndarray: return self._table
    @property
    def reference(self) -> np.ndarray: return self._reference
    @property
    def query(self) -> np.ndarray: return self._query
    @property
    def matrix(self) -> ScoreMatrix: return self._matrix
    @property
    def score(self) -> int:
        """The optimal global alignment score, G[r][c]."""
        return int(self._table[-1, -1])

    def pointer(self, i: int, j: int) -> Direction:
        """
        Returns the move traceback takes from cell ``(i, j)``.

        Row 0 always points left and column 0 always points up. ``Direction.NONE`` is returned for the origin and for
        cells no candidate reproduces.
        """
        rows, cols = self._table.shape
        if not (0 <= i < rows and 0 <= j < cols): raise IndexError(f'Cell ({i}, {j}) outside grid {self.shape}')
        if i == 0 and j == 0: return Direction.NONE
        if i == 0: return Direction.LEFT
        if j == 0: return Direction.UP
        return Direction(_step_kernel(self._table, self._reference, self._query, self._matrix._data, i, j))

    def traceback(self) -> AlignmentResult:
        """
        Walks the grid from the final cell to the origin and assembles the alignment segments.

        Returns:
            The segments in ascending coordinate order.

        Raises:
            TracebackError: If a cell cannot be reached from any predecessor.
        """
        out = np.empty((len(self._reference) + len(self._query) + 2, 5), dtype=np.int64)
        n, i, j = _traceback_kernel(self._table, self._reference, self._query, self._matrix._data, out)
        if n < 0: raise TracebackError(int(i), int(j))
        return AlignmentResult.from_array(out[:n])


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _fill_kernel(ref, qry, matrix, table):
    """Forward pass. Ties keep the earlier candidate: diagonal, then up, then left."""
    r = len(ref)
    c = len(qry)
    gap = matrix.shape[0] - 1

    table[0, 0] = 0
    for j in range(1, c + 1):
        table[0, j] = table[0, j - 1] + matrix[gap, qry[j - 1]]
    for i in range(1, r + 1):
        table[i, 0] = table[i - 1, 0] + matrix[ref[i - 1], gap]

    for i in range(1, r + 1):
        ri = ref[i - 1]
        up_cost = matrix[ri, gap]
        for j in range(1, c + 1):
            qj = qry[j - 1]
            best = table[i - 1, j - 1] + matrix[ri, qj]
            up = table[i - 1, j] + up_cost
            if up > best: best = up
            left = table[i, j - 1] + matrix[gap, qj]
            if left > best: best = left
            table[i, j] = best


@jit(nopython=True, cache=True, nogil=True)
def _step_kernel(table, ref, qry, matrix, i, j):
    """Returns the first candidate move that reproduces ``table[i, j]``, or ``_NONE``."""
    gap = matrix.shape[0] - 1
    ri = ref[i - 1]
    qj = qry[j - 1]
    v = table[i, j]
    if v == table[i - 1, j - 1] + matrix[ri, qj]: return _DIAG
    if v == table[i - 1, j] + matrix[ri, gap]: return _UP
    if v == table[i, j - 1] + matrix[gap, qj]: return _LEFT
    return _NONE


@jit(nopython=True, cache=True, nogil=True)
def _emit(out, n, r_start, r_end, q_start, q_end, score):
    out[n, 0] = r_start
    out[n, 1] = r_end
    out[n, 2] = q_start
    out[n, 3] = q_end
    out[n, 4] = score
    return n + 1


@jit(nopython=True, cache=True, nogil=True)
def _traceback_kernel(table, ref, qry, matrix, out):
    """
    Backward pass from ``(r, c)`` writing segments into *out* as rows of (r_start, r_end, q_start, q_end, score).

    Returns ``(n, i, j)`` where *n* is the number of segments written (ascending order), or ``(-1, i, j)`` with the
    offending cell if no move reproduces its score.
    """
    i = len(ref)
    j = len(qry)
    max_i = i
    max_j = j
    score = 0
    last = _NONE
    n = 0

    while i > 0 and j > 0:
        move = _step_kernel(table, ref, qry, matrix, i, j)
        if move == _NONE: return -1, i, j
        if move != last:
            if i != max_i or j != max_j: n = _emit(out, n, i, max_i, j, max_j, score)
            max_i = i
            max_j = j
            score = 0
        if move == _DIAG:
            score += table[i, j] - table[i - 1, j - 1]
            i -= 1
            j -= 1
        elif move == _UP:
            score += table[i, j] - table[i - 1, j]
            i -= 1
        else:
            score += table[i, j] - table[i, j - 1]
            j -= 1
        last = move

    if i != max_i or j != max_j: n = _emit(out, n, i, max_i, j, max_j, score)
    # Unvisited prefix: a pure gap run along row 0 or column 0
    if i != j: n = _emit(out, n, 0, i, 0, j, table[i, j])

    # Segments were produced back-to-front
    for a in range(n // 2):
        b = n - 1 - a
        for k in range(5):
            tmp = out[a, k]
            out[a, k] = out[b, k]
            out[b, k] = tmp
    return n, i, j
