import numpy as np
import pytest
from nwalign import Alphabet, ScoreMatrix, MatrixNotSquareError


class TestScoreMatrixInit:
    def test_from_rows(self):
        m = ScoreMatrix([[1, 0, -1], [0, 1, -1], [-1, -1, 0]])
        assert m.shape == (3, 3)
        assert m.size == 3
        assert m.gap == 2
        assert m[0, 2] == -1

    def test_ragged_rows(self):
        with pytest.raises(MatrixNotSquareError):
            ScoreMatrix([[1, 0, -1], [0, 1], [-1, -1, 0]])

    def test_rows_longer_than_count(self):
        with pytest.raises(MatrixNotSquareError):
            ScoreMatrix([[0, 0, 0, 0]] * 3)

    def test_non_square_array(self):
        with pytest.raises(MatrixNotSquareError):
            ScoreMatrix(np.zeros((3, 4), dtype=int))

    def test_empty(self):
        with pytest.raises(MatrixNotSquareError):
            ScoreMatrix([])

    def test_not_integer(self):
        with pytest.raises(ValueError, match="integers"):
            ScoreMatrix([[0.5, 0], [0, 0]])

    def test_integral_floats_accepted(self):
        assert ScoreMatrix(np.array([[1.0, -1.0], [-1.0, 0.0]]))[0, 0] == 1

    def test_read_only_copy(self):
        data = np.array([[1, -1], [-1, 0]])
        m = ScoreMatrix(data)
        data[0, 0] = 9
        assert m[0, 0] == 1
        with pytest.raises(ValueError):
            np.asarray(m)[0, 0] = 5

    def test_equality(self):
        assert ScoreMatrix.build(4) == ScoreMatrix.build(4)
        assert ScoreMatrix.build(4) != ScoreMatrix.build(4, match=2)
        assert len({ScoreMatrix.build(4), ScoreMatrix.build(4)}) == 1


class TestScoreMatrixValidate:
    def test_fits_alphabet(self):
        m = ScoreMatrix.build(4)
        assert m.validate(len(Alphabet.DNA)) is m

    def test_wrong_size(self):
        with pytest.raises(MatrixNotSquareError, match="20 symbols"):
            ScoreMatrix.build(4).validate(len(Alphabet.AMINO))


class TestScoreMatrixFactories:
    def test_build(self):
        m = ScoreMatrix.build(2, match=3, mismatch=-2, gap=-5)
        np.testing.assert_array_equal(np.asarray(m), [[3, -2, -5], [-2, 3, -5], [-5, -5, -5]])

    def test_from_dict(self):
        alpha = Alphabet(b'AB')
        m = ScoreMatrix.from_dict(alpha, {('A', 'A'): 2, (b'A', b'B'): -1, ('B', 'B'): 3}, gap=-4)
        np.testing.assert_array_equal(np.asarray(m), [[2, -1, -4], [-1, 3, -4], [-4, -4, -4]])

    def test_from_dict_default(self):
        m = ScoreMatrix.from_dict(Alphabet(b'AB'), {('A', 'A'): 2}, default=0)
        assert m[1, 1] == 0
        assert m[0, 0] == 2

    def test_from_dict_missing_pair(self):
        with pytest.raises(KeyError):
            ScoreMatrix.from_dict(Alphabet(b'AB'), {('A', 'A'): 2})

    def test_blosum62(self):
        m = ScoreMatrix.blosum62()
        amino = Alphabet.AMINO
        assert m.shape == (21, 21)
        m.validate(len(amino))
        data = np.asarray(m)
        np.testing.assert_array_equal(data, data.T)
        assert m[amino.index('W'), amino.index('W')] == 11
        assert m[amino.index('C'), amino.index('C')] == 9
        assert m[20, 0] == m[0, 20] == -4
