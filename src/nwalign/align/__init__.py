"""
Global pairwise alignment: score matrices, the dynamic programming grid, traceback and results.
"""
from nwalign.align.matrix import AlignmentError, MatrixNotSquareError, ScoreMatrix
from nwalign.align.result import AlignmentResult, Segment, SegmentOp
from nwalign.align.grid import AlignmentGrid, Direction, GridSizeWarning, TracebackError
from nwalign.align.pairwise import GlobalAligner, UnrecognizedSymbolError, align

__all__ = [
    'AlignmentError', 'MatrixNotSquareError', 'UnrecognizedSymbolError', 'TracebackError', 'GridSizeWarning',
    'ScoreMatrix', 'AlignmentGrid', 'Direction', 'AlignmentResult', 'Segment', 'SegmentOp', 'GlobalAligner', 'align',
]
