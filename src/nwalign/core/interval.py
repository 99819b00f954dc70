"""Half-open coordinate intervals used to describe alignment segments."""
import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class IntervalError(ValueError):
    """Raised when interval coordinates are inconsistent."""


# Classes --------------------------------------------------------------------------------------------------------------
class Interval:
    """
    Immutable half-open interval. Safe for hashing and use in sets/dicts.

    Attributes:
        start: The start position (0-based, inclusive).
        end: The end position (0-based, exclusive).
    """
    __slots__ = ('_start', '_end')

    def __init__(self, start: int, end: int):
        """
        Initializes an Interval.

        Args:
            start: Start position.
            end: End position.

        Raises:
            IntervalError: If end is before start.
        """
        self._start: int = int(start)
        self._end: int = int(end)
        if self._end < self._start: raise IntervalError(f'Interval end {end} is before start {start}')

    @property
    def start(self): return self._start
    @property
    def end(self): return self._end
    def __hash__(self): return hash((self._start, self._end))
    def __repr__(self): return f"[{self._start}, {self._end})"
    def __len__(self): return self._end - self._start
    def __iter__(self): return iter((self._start, self._end))

    def __array__(self, dtype=None, copy=None):
        """Allows the Interval to be treated as a numpy array (e.g. np.array(interval))."""
        return np.array([self._start, self._end], dtype=dtype or np.int64)

    def __eq__(self, other):
        if isinstance(other, tuple) and len(other) == 2: return (self._start, self._end) == other
        if not isinstance(other, Interval): return False
        return self._start == other._start and self._end == other._end

    @property
    def is_empty(self) -> bool:
        """Whether the interval spans no positions."""
        return self._end == self._start

