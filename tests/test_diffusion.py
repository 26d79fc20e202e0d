import numpy as np
import pytest

from stable_navstokes.core.boundary import Boundary, enforce_boundary
from stable_navstokes.core.grid import allocate_field, as_grid, interior_sum
from stable_navstokes.physics import diffuse
from stable_navstokes.physics.diffusion import diffusion_coefficients


def test_coefficients():
    a, c = diffusion_coefficients(8, 0.02, 0.1)
    assert a == pytest.approx(0.128)
    assert c == pytest.approx(1.512)


def test_pure_diffusion_conserves_mass(rng):
    n = 8
    current, previous = allocate_field(n), allocate_field(n)
    grid = as_grid(previous, n)
    grid[1:-1, 1:-1] = rng.uniform(0.0, 1.0, size=(n, n))
    enforce_boundary(n, Boundary.NONE, grid)
    mass = interior_sum(previous, n)
    initial = grid[1:-1, 1:-1].copy()

    for _ in range(5):
        diffuse(n, Boundary.NONE, current, previous, 0.02, 0.1)
        current, previous = previous, current
        assert interior_sum(previous, n) == pytest.approx(mass, rel=1e-5)

    # the field has actually been smoothed
    assert np.std(as_grid(previous, n)[1:-1, 1:-1]) < np.std(initial)


def test_diffusion_smooths_a_spike():
    n = 8
    x, x0 = allocate_field(n), allocate_field(n)
    as_grid(x0, n)[4, 4] = 1.0

    out = diffuse(n, Boundary.NONE, x, x0, 0.02, 0.1)

    assert 0.0 < out[4, 4] < 1.0
    assert out[3, 4] > 0.0
    assert out[4, 5] > 0.0
    assert interior_sum(x, n) == pytest.approx(1.0, rel=1e-5)


@pytest.mark.parametrize("kind", list(Boundary))
def test_zero_diffusion_copies_the_interior(kind, rng):
    n = 5
    x, x0 = allocate_field(n), allocate_field(n)
    as_grid(x, n)[:] = rng.uniform(-1, 1, size=(n + 2, n + 2))
    source = as_grid(x0, n)
    source[:] = rng.uniform(-1, 1, size=(n + 2, n + 2))

    out = diffuse(n, kind, x, x0, 0.0, 0.1)

    np.testing.assert_array_equal(out[1:-1, 1:-1], source[1:-1, 1:-1])
    expected = out.copy()
    enforce_boundary(n, kind, expected)
    np.testing.assert_array_equal(out, expected)


def test_rejects_negative_coefficient():
    n = 4
    with pytest.raises(ValueError, match="diff must be non-negative"):
        diffuse(n, Boundary.NONE, allocate_field(n), allocate_field(n), -0.1, 0.1)
