import numpy as np
import pytest

from stable_navstokes.core.grid import allocate_field, as_grid
from stable_navstokes.physics import add_source


def test_source_reaches_every_padded_cell():
    n = 3
    x, s = allocate_field(n), allocate_field(n)
    s.fill(2.0)

    result = add_source(n, x, s, 0.5)

    assert result is x
    grid = as_grid(x, n)
    assert grid.shape == (5, 5)
    np.testing.assert_array_equal(grid, np.ones((5, 5), dtype=np.float32))
    assert grid[0, 0] == grid[0, -1] == grid[-1, 0] == grid[-1, -1] == 1.0


def test_source_accumulates_and_leaves_rates_alone():
    n = 2
    x, s = allocate_field(n), allocate_field(n)
    x.fill(3.0)
    as_grid(s, n)[1, 2] = 4.0

    add_source(n, x, s, 0.25)

    expected = np.full((4, 4), 3.0, dtype=np.float32)
    expected[1, 2] = 4.0
    np.testing.assert_array_equal(as_grid(x, n), expected)
    assert as_grid(s, n)[1, 2] == 4.0


def test_zero_dt_is_a_no_op():
    n = 2
    x, s = allocate_field(n), allocate_field(n)
    s.fill(7.0)
    add_source(n, x, s, 0.0)
    assert not x.any()


def test_rejects_bad_arguments():
    n = 2
    x = allocate_field(n)
    with pytest.raises(ValueError, match="distinct"):
        add_source(n, x, x, 0.1)
    with pytest.raises(ValueError, match="non-negative"):
        add_source(n, x, allocate_field(n), -0.1)
    with pytest.raises(ValueError, match="cells"):
        add_source(n, x, allocate_field(3), 0.1)
