import pytest

from cfdkit.lodmat import LodMatrix


def test_lod_matrix_source_case():
    m = LodMatrix(4)
    assert m.n_rows() == 4
    assert m.n_nonzeros() == 0

    m.add_value(0, 1, 0.12)
    assert m.n_nonzeros() == 1
    assert m.value(0, 1) == 0.12

    m.add_value(0, 1, 0.1)
    assert m.n_nonzeros() == 1
    assert m.value(0, 1) == 0.22

    m.add_value(1, 1, -0.5)
    assert m.n_nonzeros() == 2
    assert m.value(1, 1) == -0.5

    m.remove_row(0)
    assert m.n_nonzeros() == 1
    assert m.value(0, 1) == 0
    assert m.value(1, 1) == -0.5


def _source_like():
    # [1, *, *]
    # [*, 3, 1]
    # [1, *, 3]
    m = LodMatrix(3)
    m.set_value(0, 0, 1)
    m.set_value(1, 2, 1)
    m.set_value(1, 1, 3)
    m.set_value(2, 2, 3)
    m.set_value(2, 0, 1)
    return m


def test_to_csr_orders_columns():
    csr = _source_like().to_csr()
    assert csr.addr() == [0, 1, 3, 5]
    assert csr.cols() == [0, 1, 2, 0, 2]
    assert csr.vals() == [1.0, 3.0, 1.0, 1.0, 3.0]


def test_to_csr_preserves_values():
    lod = _source_like()
    csr = lod.to_csr()
    for i in range(3):
        for j in range(3):
            assert csr.value(i, j) == lod.value(i, j)
            assert csr.is_in_stencil(i, j) == lod.is_in_stencil(i, j)


def test_mult_vec_reproduces_source_rhs():
    m = _source_like()
    x = [1.0, 1.0 / 3.0, 0.0]
    assert m.mult_vec(x) == pytest.approx([1.0, 1.0, 1.0])
    assert m.mult_vec_row(2, x) == pytest.approx(1.0)
    assert m.to_csr().mult_vec(x) == pytest.approx(m.mult_vec(x))


def test_set_value_keeps_zero_in_stencil():
    m = LodMatrix(2)
    m.set_value(0, 1, 0.0)
    assert m.is_in_stencil(0, 1)
    assert m.n_nonzeros() == 1


def test_remove_value():
    m = _source_like()
    m.remove_value(1, 2)
    m.remove_value(1, 0)
    assert not m.is_in_stencil(1, 2)
    assert m.n_nonzeros() == 4


def test_set_unit_row():
    m = _source_like()
    m.set_unit_row(1)
    assert m.row(1) == {1: 1.0}
    assert m.n_nonzeros() == 4


def test_row_is_sorted_copy():
    m = _source_like()
    r = m.row(2)
    assert list(r) == [0, 2]
    r[1] = 5.0
    assert not m.is_in_stencil(2, 1)


def test_row_out_of_range_raises():
    m = LodMatrix(2)
    with pytest.raises(IndexError):
        m.add_value(2, 0, 1.0)
    with pytest.raises(IndexError):
        m.value(-1, 0)


def test_diagonal():
    assert _source_like().diagonal() == [1, 3, 3]