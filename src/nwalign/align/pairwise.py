"""Global (Needleman-Wunsch) pairwise alignment entry points."""
from typing import Union, Callable, Optional

import numpy as np

from nwalign.core.alphabet import Alphabet
from nwalign.align.matrix import AlignmentError, ScoreMatrix
from nwalign.align.grid import AlignmentGrid
from nwalign.align.result import AlignmentResult


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class UnrecognizedSymbolError(AlignmentError, ValueError):
    """
    Raised when a sequence holds a symbol the alphabet (or matrix) does not know.

    The whole alignment is rejected; no grid is built.
    """
    def __init__(self, side: str, position: int, symbol=None):
        what = f' {symbol!r}' if symbol is not None else ''
        super().__init__(f'Unrecognized symbol{what} at {side} position {position}')
        self.side = side
        self.position = position
        self.symbol = symbol


# Classes --------------------------------------------------------------------------------------------------------------
class GlobalAligner:
    """
    Aligns whole sequences end to end against a fixed score matrix.

    The matrix is validated against the alphabet when the aligner is created; both are immutable, so one aligner can
    be shared between threads.

    Examples:
        >>> aligner = GlobalAligner(ScoreMatrix.build(4, match=1, mismatch=0, gap=-1), Alphabet.DNA)
        >>> aligner.align(b'AC', b'A').cigar()
        b'1M1D'
    """
    __slots__ = ('_matrix', '_alphabet')

    def __init__(self, matrix: Union[ScoreMatrix, np.ndarray, list], alphabet: Alphabet = None):
        """
        Args:
            matrix: A ScoreMatrix, or anything ScoreMatrix accepts.
            alphabet: Alphabet used to index text sequences. If omitted, only index arrays can be aligned and the
                alphabet size is taken from the matrix.

        Raises:
            MatrixNotSquareError: If the matrix does not fit the alphabet.
        """
        if not isinstance(matrix, ScoreMatrix): matrix = ScoreMatrix(matrix)
        self._matrix = matrix.validate(len(alphabet) if alphabet is not None else matrix.size - 1)
        self._alphabet = alphabet

    def __repr__(self): return f"GlobalAligner({self._matrix!r}, {self._alphabet!r})"
    @property
    def matrix(self) -> ScoreMatrix: return self._matrix
    @property
    def alphabet(self) -> Optional[Alphabet]: return self._alphabet

    def align(self, reference, query, diagnostics: Callable[[AlignmentGrid], None] = None) -> AlignmentResult:
        """
        Computes the optimal global alignment of *query* against *reference*.

        Args:
            reference: Text (``str``/``bytes``) or an array of symbol indices. Indexes the grid rows.
            query: Text or an array of symbol indices. Indexes the grid columns.
            diagnostics: Optional callable given the filled grid before traceback, e.g. ``nwalign.debug.printer()``.

        Returns:
            The alignment segments in ascending coordinate order.

        Raises:
            UnrecognizedSymbolError: If either sequence holds a symbol outside the alphabet.
            TracebackError: If the grid and matrix disagree (an internal fault).
        """
        return self._align(reference, query, diagnostics, stacklevel=4)

    def score(self, reference, query) -> int:
        """Returns only the optimal score, skipping traceback."""
        return AlignmentGrid.build(self._index(reference, 'reference'), self._index(query, 'query'),
                                   self._matrix, stacklevel=3).score

    def _align(self, reference, query, diagnostics, stacklevel: int) -> AlignmentResult:
        grid = AlignmentGrid.build(self._index(reference, 'reference'), self._index(query, 'query'), self._matrix,
                                   stacklevel=stacklevel)
        if diagnostics is not None: diagnostics(grid)
        return grid.traceback()

    def _index(self, seq, side: str) -> np.ndarray:
        if isinstance(seq, (str, bytes, bytearray, memoryview)):
            if self._alphabet is None: raise AlignmentError(f'An alphabet is required to align text {side} sequences')
            indices = self._alphabet.encode(seq)
        else:
            indices = np.asarray(seq)
            if indices.size == 0: indices = indices.astype(np.int64)
            if indices.ndim != 1 or not np.issubdtype(indices.dtype, np.integer):
                raise AlignmentError(f'The {side} sequence must be a 1D array of integer indices')
        if len(bad := np.flatnonzero((indices < 0) | (indices >= self._matrix.gap))):
            pos = int(bad[0])
            raise UnrecognizedSymbolError(side, pos, _symbol_at(seq, pos))
        return indices


# Functions ------------------------------------------------------------------------------------------------------------
def align(reference, query, matrix: Union[ScoreMatrix, np.ndarray, list], alphabet: Alphabet = None,
          diagnostics: Callable[[AlignmentGrid], None] = None) -> AlignmentResult:
    """
    Globally aligns two sequences.

    The matrix is validated on every call, before any grid is allocated. See ``GlobalAligner.align``.

    Examples:
        >>> result = align('ACGT', 'ACGT', ScoreMatrix.build(4, match=1, mismatch=0, gap=0), Alphabet.DNA)
        >>> [tuple(s) for s in result]
        [([0, 4), [0, 4), 4)]
    """
    return GlobalAligner(matrix, alphabet)._align(reference, query, diagnostics, stacklevel=4)


def _symbol_at(seq, pos: int):
    if isinstance(seq, str): return seq[pos]
    if isinstance(seq, (bytes, bytearray, memoryview)): return bytes(seq[pos:pos + 1])
    return int(np.asarray(seq)[pos])
