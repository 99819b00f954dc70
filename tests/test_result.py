import numpy as np
import pytest
from nwalign import AlignmentResult, Interval, IntervalError, Segment, SegmentOp


def seg(rs, re, qs, qe, score):
    return Segment(Interval(rs, re), Interval(qs, qe), score)


@pytest.fixture
def result():
    return AlignmentResult([seg(0, 0, 0, 2, -2), seg(0, 3, 2, 5, 3), seg(3, 4, 5, 5, -1)])


class TestInterval:
    def test_basics(self):
        i = Interval(2, 5)
        assert len(i) == 3
        assert tuple(i) == (2, 5)
        assert i == (2, 5)
        assert not i.is_empty
        assert Interval(3, 3).is_empty

    def test_inverted(self):
        with pytest.raises(IntervalError):
            Interval(5, 2)

    def test_hashable(self):
        assert len({Interval(0, 1), Interval(0, 1)}) == 1
        np.testing.assert_array_equal(np.array(Interval(1, 4)), [1, 4])


class TestSegment:
    def test_ops(self):
        assert seg(0, 3, 0, 3, 3).op == SegmentOp.MATCH
        assert seg(0, 2, 0, 0, -2).op == SegmentOp.DELETION
        assert seg(0, 0, 0, 2, -2).op == SegmentOp.INSERTION

    def test_length(self):
        assert len(seg(0, 3, 4, 7, 3)) == 3
        assert len(seg(5, 5, 0, 2, -2)) == 2

    def test_unpack(self):
        reference, query, score = seg(0, 1, 2, 3, 4)
        assert (reference, query, score) == (Interval(0, 1), Interval(2, 3), 4)

    def test_equality(self):
        assert seg(0, 1, 0, 1, 1) == seg(0, 1, 0, 1, 1)
        assert seg(0, 1, 0, 1, 1) != seg(0, 1, 0, 1, 2)
        assert len({seg(0, 1, 0, 1, 1), seg(0, 1, 0, 1, 1)}) == 1


class TestAlignmentResult:
    def test_sequence_protocol(self, result):
        assert len(result) == 3
        assert result[1] == seg(0, 3, 2, 5, 3)
        assert isinstance(result[1:], AlignmentResult)
        assert len(result[1:]) == 2
        assert seg(3, 4, 5, 5, -1) in result

    def test_score(self, result):
        assert result.score == 0

    def test_spans(self, result):
        assert result.reference_span == Interval(0, 4)
        assert result.query_span == Interval(0, 5)
        assert AlignmentResult().reference_span == Interval(0, 0)

    def test_cigar(self, result):
        assert result.cigar() == b'2I3M1D'
        assert AlignmentResult().cigar() == b''

    def test_cigar_merges_runs(self):
        assert AlignmentResult([seg(0, 1, 0, 0, -1), seg(1, 2, 0, 0, -1)]).cigar() == b'2D'

    def test_format(self, result):
        assert result.format('ACGT', 'TTACG') == (b'--ACGT', b'TTACG-')
        assert result.format(b'ACGT', b'TTACG', gap=b'.') == (b'..ACGT', b'TTACG.')

    def test_array_roundtrip(self, result):
        data = result.to_array()
        assert data.shape == (3, 5)
        np.testing.assert_array_equal(data[1], [0, 3, 2, 5, 3])
        assert AlignmentResult.from_array(data) == result

    def test_empty_array(self):
        assert AlignmentResult().to_array().shape == (0, 5)
