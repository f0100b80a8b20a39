import pytest

from cfdkit.matrix import DenseMatrix, Matrix, SparseMatrix


def _sample():
    return DenseMatrix(2, 3, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_zero_initialised():
    m = DenseMatrix(2, 2)
    assert m.vals() == [0.0] * 4


def test_value_reads_row_major():
    m = _sample()
    assert m.value(0, 2) == 3.0
    assert m.value(1, 0) == 4.0


def test_set_value_roundtrip():
    m = DenseMatrix(3, 3)
    m.set_value(1, 2, 7.5)
    assert m.value(1, 2) == 7.5
    assert sum(m.vals()) == 7.5


def test_wrong_value_count_raises():
    with pytest.raises(ValueError):
        DenseMatrix(2, 2, [1.0, 2.0, 3.0])


def test_out_of_range_index_raises():
    with pytest.raises(IndexError):
        _sample().value(2, 0)
    with pytest.raises(IndexError):
        _sample().set_value(0, -1, 1.0)


def test_transpose_swaps_indices():
    m = _sample()
    t = m.transpose()
    assert t.n_rows() == m.n_cols()
    assert t.n_cols() == m.n_rows()
    for i in range(m.n_rows()):
        for j in range(m.n_cols()):
            assert t.value(j, i) == m.value(i, j)


def test_double_transpose_is_identity():
    m = _sample()
    assert m.transpose().transpose().vals() == m.vals()


def test_mult_mat_shape_mismatch_raises():
    with pytest.raises(ValueError):
        _sample().mult_mat(_sample())


def test_mult_mat_with_transpose_is_symmetric():
    m = _sample()
    p = m.mult_mat(m.transpose())
    assert p.n_rows() == 2 and p.n_cols() == 2
    assert p.value(0, 1) == p.value(1, 0)


@pytest.mark.parametrize(
    "n, values",
    [
        (1, [4.0]),
        (2, [2.0, 1.0, 1.0, 3.0]),
        (3, [2.0, 0.0, 1.0, 1.0, 3.0, 0.0, 0.0, 1.0, 4.0]),
    ],
)
def test_inverse_times_matrix_is_identity(n, values):
    m = DenseMatrix(n, n, values)
    p = m.mult_mat(m.inverse())
    for i in range(n):
        for j in range(n):
            assert p.value(i, j) == pytest.approx(1.0 if i == j else 0.0, abs=1e-12)


def test_inverse_of_singular_raises():
    with pytest.raises(ValueError):
        DenseMatrix(2, 2, [1.0, 2.0, 2.0, 4.0]).inverse()


def test_inverse_of_non_square_raises():
    with pytest.raises(ValueError):
        _sample().inverse()


def test_mult_vec_matches_rows():
    m = _sample()
    u = [1.0, -1.0, 2.0]
    full = m.mult_vec(u)
    assert len(full) == m.n_rows()
    for i, v in enumerate(full):
        assert v == pytest.approx(m.mult_vec_row(i, u))


def test_mult_vec_length_mismatch_raises():
    with pytest.raises(ValueError):
        _sample().mult_vec([1.0, 2.0])


def test_diagonal_reads_values():
    m = DenseMatrix(3, 3, [1.0, 0.0, 0.0, 0.0, 5.0, 0.0, 0.0, 0.0, 9.0])
    assert m.diagonal() == [1.0, 5.0, 9.0]


def test_interfaces_are_abstract():
    with pytest.raises(TypeError):
        Matrix()
    with pytest.raises(TypeError):
        SparseMatrix()