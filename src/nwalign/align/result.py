"""
Module for alignment segments and the ordered result returned by the aligner.
"""
from collections.abc import Sequence
from enum import IntEnum
from typing import Iterable, Union

import numpy as np

from nwalign.core.interval import Interval


# Classes --------------------------------------------------------------------------------------------------------------
class SegmentOp(IntEnum):
    """Kind of alignment move a segment represents, numbered like the matching CIGAR operations."""
    MATCH = 0
    INSERTION = 1
    DELETION = 2

    @property
    def symbol(self) -> bytes: return b'MID'[self:self + 1]


class Segment:
    """
    A maximal run of one alignment move, or the unaligned leading block.

    Attributes:
        reference (Interval): Span on the reference sequence.
        query (Interval): Span on the query sequence.
        score (int): Score contributed by the segment.
    """
    __slots__ = ('_reference', '_query', '_score')

    def __init__(self, reference: Interval, query: Interval, score: int):
        self._reference = reference
        self._query = query
        self._score = int(score)

    @property
    def reference(self) -> Interval: return self._reference
    @property
    def query(self) -> Interval: return self._query
    @property
    def score(self) -> int: return self._score

    @property
    def op(self) -> SegmentOp:
        """MATCH when both sides advance, DELETION for reference-only, INSERTION for query-only."""
        if self._query.is_empty: return SegmentOp.DELETION
        if self._reference.is_empty: return SegmentOp.INSERTION
        return SegmentOp.MATCH

    def __len__(self):
        """Number of alignment columns spanned."""
        return max(len(self._reference), len(self._query))

    def __iter__(self): return iter((self._reference, self._query, self._score))
    def __hash__(self): return hash((self._reference, self._query, self._score))

    def __eq__(self, other):
        if not isinstance(other, Segment): return False
        return (self._reference == other._reference and
                self._query == other._query and
                self._score == other._score)

    def __repr__(self):
        return f"Segment(reference={self._reference!r}, query={self._query!r}, score={self._score})"


class AlignmentResult(Sequence):
    """
    Forward-ordered segments of a global alignment.

    Segments are contiguous and together cover the whole of both sequences, so the result can be rendered or turned
    into a CIGAR string without the original grid.

    Examples:
        >>> result = align(b'AC', b'A', matrix, Alphabet.DNA)
        >>> result.cigar()
        b'1M1D'
    """
    __slots__ = ('_segments',)

    def __init__(self, segments: Iterable[Segment] = ()):
        self._segments = tuple(segments)

    @classmethod
    def from_array(cls, data: np.ndarray) -> 'AlignmentResult':
        """Builds a result from rows of (r_start, r_end, q_start, q_end, score)."""
        return cls(Segment(Interval(rs, re), Interval(qs, qe), s) for rs, re, qs, qe, s in data.tolist())

    def __len__(self): return len(self._segments)
    def __iter__(self): return iter(self._segments)
    def __repr__(self): return f"<AlignmentResult: {len(self)} segments, score={self.score}>"

    def __getitem__(self, item):
        if isinstance(item, slice): return AlignmentResult(self._segments[item])
        return self._segments[item]

    def __eq__(self, other):
        if isinstance(other, AlignmentResult): return self._segments == other._segments
        return NotImplemented

    def __hash__(self): return hash(self._segments)

    @property
    def score(self) -> int:
        """Total alignment score (the sum of segment scores)."""
        return sum(s.score for s in self._segments)

    @property
    def reference_span(self) -> Interval:
        """Reference coordinates covered by the alignment."""
        if not self._segments: return Interval(0, 0)
        return Interval(self._segments[0].reference.start, self._segments[-1].reference.end)

    @property
    def query_span(self) -> Interval:
        """Query coordinates covered by the alignment."""
        if not self._segments: return Interval(0, 0)
        return Interval(self._segments[0].query.start, self._segments[-1].query.end)

    def to_array(self) -> np.ndarray:
        """Returns an (n, 5) int64 array of (r_start, r_end, q_start, q_end, score) rows."""
        out = np.empty((len(self._segments), 5), dtype=np.int64)
        for n, s in enumerate(self._segments):
            out[n] = (s.reference.start, s.reference.end, s.query.start, s.query.end, s.score)
        return out

    def cigar(self) -> bytes:
        """
        Returns the alignment as a CIGAR string, with the reference as the target.

        Adjacent segments of the same kind are merged.
        """
        runs: list[list] = []
        for s in self._segments:
            if runs and runs[-1][0] == s.op: runs[-1][1] += len(s)
            else: runs.append([s.op, len(s)])
        return b"".join(b"%d" % n + op.symbol for op, n in runs)

    def format(self, reference: Union[bytes, str], query: Union[bytes, str], gap: bytes = b'-') -> tuple[bytes, bytes]:
        """
        Renders the aligned rows of the two sequences.

        Args:
            reference: The reference text that was aligned.
            query: The query text that was aligned.
            gap: Byte used to pad the side that does not advance.

        Returns:
            A tuple of equal-length (reference_row, query_row) byte strings.
        """
        if isinstance(reference, str): reference = reference.encode('ascii', 'replace')
        if isinstance(query, str): query = query.encode('ascii', 'replace')
        ref_row, qry_row = [], []
        for s in self._segments:
            width = len(s)
            ref_row.append(reference[s.reference.start:s.reference.end].ljust(width, gap))
            qry_row.append(query[s.query.start:s.query.end].ljust(width, gap))
        return b"".join(ref_row), b"".join(qry_row)
