"""Substitution matrices with a reserved gap row and column."""
from typing import Union, Iterable, Mapping

import numpy as np

from nwalign.core.alphabet import Alphabet


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class AlignmentError(Exception):
    """Base class for errors raised by the alignment engine."""


class MatrixNotSquareError(AlignmentError, ValueError):
    """Raised when a score matrix is not (k + 1) x (k + 1) for an alphabet of k symbols."""


# Classes --------------------------------------------------------------------------------------------------------------
class ScoreMatrix:
    """
    Represents a substitution matrix for global alignment.

    The matrix is square with one row and column per alphabet symbol plus a final row/column holding the gap
    costs: ``M[a][gap]`` is the cost of aligning reference symbol ``a`` against nothing, ``M[gap][b]`` the cost of
    aligning query symbol ``b`` against nothing. Scores are integers, higher is better.

    Attributes:
        _data (np.ndarray): The raw, read-only matrix data.

    Examples:
        >>> m = ScoreMatrix.build(4, match=1, mismatch=0, gap=-1)
        >>> m.shape
        (5, 5)
    """
    _DTYPE = np.int64
    __slots__ = ('_data',)

    def __init__(self, data: Union[np.ndarray, Iterable[Iterable[int]]]):
        """
        Args:
            data: A square 2D array or a sequence of equal-length rows.

        Raises:
            MatrixNotSquareError: If the rows are ragged or their length differs from the row count.
            ValueError: If the entries are not integers.
        """
        if not isinstance(data, np.ndarray):
            rows = [list(row) for row in data]
            if any(len(row) != len(rows) for row in rows):
                raise MatrixNotSquareError(f'Score matrix rows must all have {len(rows)} entries')
            data = np.array(rows).reshape(len(rows), len(rows))
        if data.ndim != 2 or data.shape[0] != data.shape[1] or data.shape[0] == 0:
            raise MatrixNotSquareError(f'Score matrix must be square and non-empty, got shape {data.shape}')
        if not np.issubdtype(data.dtype, np.integer):
            if not np.issubdtype(data.dtype, np.number) or not np.all(np.mod(data, 1) == 0):
                raise ValueError('Score matrix entries must be integers')
        self._data = np.array(data, dtype=self._DTYPE)
        self._data.flags.writeable = False

    def __getitem__(self, item): return self._data[item]
    def __array__(self, dtype=None, copy=None): return self._data.astype(dtype, copy=False) if dtype else self._data
    def __repr__(self): return f"ScoreMatrix{self._data.shape}"
    def __eq__(self, other): return isinstance(other, ScoreMatrix) and np.array_equal(self._data, other._data)
    def __hash__(self): return hash(self._data.tobytes())
    @property
    def shape(self): return self._data.shape
    @property
    def size(self) -> int:
        """Number of rows (alphabet size plus one for the gap)."""
        return self._data.shape[0]
    @property
    def gap(self) -> int:
        """Index of the reserved gap row and column."""
        return self._data.shape[0] - 1

    def validate(self, k: int) -> 'ScoreMatrix':
        """
        Checks the matrix against an alphabet of *k* symbols.

        Raises:
            MatrixNotSquareError: If the matrix is not (k + 1) x (k + 1).
        """
        if self.size != k + 1:
            raise MatrixNotSquareError(
                f'Score matrix of shape {self.shape} does not fit an alphabet of {k} symbols plus gap')
        return self

    @classmethod
    def build(cls, n: int, match: int = 1, mismatch: int = -1, gap: int = -1) -> 'ScoreMatrix':
        """Builds a simple match/mismatch matrix for *n* symbols with a uniform gap cost."""
        M = np.full((n + 1, n + 1), mismatch, dtype=cls._DTYPE)
        np.fill_diagonal(M, match)
        M[n, :] = gap
        M[:, n] = gap
        return cls(M)

    @classmethod
    def from_dict(cls, alphabet: Alphabet, scores: Mapping[tuple, int], gap: int = -1,
                  default: int = None) -> 'ScoreMatrix':
        """
        Builds a matrix from symbol-pair scores.

        A pair missing from *scores* falls back to its mirror, then to *default*.

        Args:
            alphabet: The alphabet fixing the row order.
            scores: Mapping of ``(reference_symbol, query_symbol)`` to score.
            gap: Uniform gap cost.
            default: Score for pairs absent from *scores*.

        Raises:
            KeyError: If a pair has no score and no default is given.
        """
        n = len(alphabet)
        M = np.full((n + 1, n + 1), gap, dtype=cls._DTYPE)
        lookup = {(_as_symbol(a), _as_symbol(b)): s for (a, b), s in scores.items()}
        symbols = list(alphabet)
        for i, a in enumerate(symbols):
            for j, b in enumerate(symbols):
                if (score := lookup.get((a, b), lookup.get((b, a), default))) is None:
                    raise KeyError(f'No score for pair ({a!r}, {b!r})')
                M[i, j] = score
        return cls(M)

    @classmethod
    def blosum62(cls, gap: int = -4) -> 'ScoreMatrix':
        """Returns the BLOSUM62 matrix in ``Alphabet.AMINO`` order with a uniform gap cost appended."""
        data = np.array([
            4, 0, -2, -1, -2, 0, -2, -1, -1, -1, -1, -2, -1, -1, -1, 1, 0, 0, -3, -2,
            0, 9, -3, -4, -2, -3, -3, -1, -3, -1, -1, -3, -3, -3, -3, -1, -1, -1, -2, -2,
            -2, -3, 6, 2, -3, -1, -1, -3, -1, -4, -3, 1, -1, 0, -2, 0, -1, -3, -4, -3,
            -1, -4, 2, 5, -3, -2, 0, -3, 1, -3, -2, 0, -1, 2, 0, 0, -1, -2, -3, -2,
            -2, -2, -3, -3, 6, -3, -1, 0, -3, 0, 0, -3, -4, -3, -3, -2, -2, -1, 1, 3,
            0, -3, -1, -2, -3, 6, -2, -4, -2, -4, -3, 0, -2, -2, -2, 0, -2, -3, -2, -3,
            -2, -3, -1, 0, -1, -2, 8, -3, -1, -3, -2, 1, -2, 0, 0, -1, -2, -3, -2, 2,
            -1, -1, -3, -3, 0, -4, -3, 4, -3, 2, 1, -3, -3, -3, -3, -2, -1, 3, -3, -1,
            -1, -3, -1, 1, -3, -2, -1, -3, 5, -2, -3, 2, 0, -3, -3, 1, 0, -3, -1, 2,
            -1, -1, -4, -3, 0, -4, -3, 2, -2, 4, 2, -3, -3, -2, -2, -2, -1, 1, -2, -1,
            -1, -1, -3, -2, 0, -3, -2, 1, -3, 2, 5, -2, -2, 0, -1, -1, -1, 1, -1, -1,
            -2, -3, 1, 0, -3, 0, 1, -3, 2, -3, -2, 6, -2, -4, -4, -1, 0, -3, -1, -3,
            -1, -3, -1, -1, -4, -2, -2, -3, 0, -3, -2, -2, 7, -1, -2, -1, -1, -2, -4, -3,
            -1, -3, 0, 2, -3, -2, 0, -3, -3, -2, 0, -4, -1, 5, 1, 0, -1, -2, -2, -1,
            -1, -3, -2, 0, -3, -2, 0, -3, -3, -2, -1, -4, -2, 1, 5, -1, -1, -3, -3, -2,
            1, -1, 0, 0, -2, 0, -1, -2, 1, -2, -1, -1, -1, 0, -1, 4, 1, -2, -3, -2,
            0, -1, -1, -1, -2, -2, -2, -1, 0, -1, -1, 0, -1, -1, -1, 1, 5, 0, -2, -2,
            0, -1, -3, -2, -1, -3, -3, 3, -3, 1, 1, -3, -2, -2, -3, -2, 0, 4, -3, -1,
            -3, -2, -4, -3, 1, -2, -2, -3, -1, -2, -1, -1, -4, -2, -3, -3, -2, -3, 11, 2,
            -2, -2, -3, -2, 3, -3, 2, -1, 2, -1, -1, -3, -3, -1, -2, -2, -2, -1, 2, 7
        ], dtype=cls._DTYPE).reshape(20, 20)
        M = np.full((21, 21), gap, dtype=cls._DTYPE)
        M[:20, :20] = data
        return cls(M)


# Functions ------------------------------------------------------------------------------------------------------------
def _as_symbol(symbol: Union[str, bytes]) -> str:
    if isinstance(symbol, bytes): return symbol.decode(Alphabet.ENCODING)
    return symbol
