"""
Needleman-Wunsch global pairwise alignment reported as scored segments.

Examples:
    >>> from nwalign import Alphabet, ScoreMatrix, align
    >>> align('AC', 'A', ScoreMatrix.build(4, match=1, mismatch=0, gap=-1), Alphabet.DNA).cigar()
    b'1M1D'
"""


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class NwalignWarning(Warning): pass


# Public API -----------------------------------------------------------------------------------------------------------
from nwalign.core.alphabet import Alphabet, AlphabetError
from nwalign.core.interval import Interval, IntervalError
from nwalign.align import (
    AlignmentError, MatrixNotSquareError, UnrecognizedSymbolError, TracebackError, GridSizeWarning,
    ScoreMatrix, AlignmentGrid, Direction, AlignmentResult, Segment, SegmentOp, GlobalAligner, align
)
