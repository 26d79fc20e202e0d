import numpy as np
import pytest

from stable_navstokes.core.boundary import Boundary, enforce_boundary
from stable_navstokes.core.grid import allocate_field, as_grid
from stable_navstokes.numerics.advection import advect, backtrace


def _fields(n, count):
    fields = [allocate_field(n) for _ in range(count)]
    return fields, [as_grid(f, n) for f in fields]


def test_uniform_field_is_preserved(rng):
    n = 8
    (d, d0, vx, vy), (dg, d0g, vxg, vyg) = _fields(n, 4)
    d0g[:] = 3.0
    vxg[:] = rng.uniform(-2, 2, size=vxg.shape)
    vyg[:] = rng.uniform(-2, 2, size=vyg.shape)

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.1)

    np.testing.assert_allclose(dg, 3.0, rtol=1e-6)


def test_zero_velocity_copies_interior(rng):
    n = 6
    (d, d0, vx, vy), (dg, d0g, _, _) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.5)

    np.testing.assert_array_equal(dg[1:-1, 1:-1], d0g[1:-1, 1:-1])


def test_whole_cell_shift_along_x(rng):
    # dt * n * vx == 1 moves every sample exactly one cell
    n = 8
    (d, d0, vx, vy), (dg, d0g, vxg, _) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)
    vxg[:] = 1.0

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.125)

    np.testing.assert_allclose(dg[2:-1, 1:-1], d0g[1:-2, 1:-1], rtol=1e-6)


def test_whole_cell_shift_along_y(rng):
    n = 8
    (d, d0, vx, vy), (dg, d0g, _, vyg) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)
    vyg[:] = -1.0

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.125)

    np.testing.assert_allclose(dg[1:-1, 1:-2], d0g[1:-1, 2:-1], rtol=1e-6)


def test_half_cell_shift_interpolates_bilinearly(rng):
    n = 4
    (d, d0, vx, vy), (dg, d0g, vxg, vyg) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)
    vxg[:] = 0.5
    vyg[:] = 0.5

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.25)

    # source point (i - 0.5, j - 0.5): equal weights on four neighbours
    i, j = 3, 2
    expected = 0.25 * (d0g[2, 1] + d0g[2, 2] + d0g[3, 1] + d0g[3, 2])
    assert dg[i, j] == pytest.approx(expected, rel=1e-5)


def test_backtrace_is_clamped_to_sampling_region():
    n = 4
    vx = np.full((n + 2, n + 2), 1000.0, dtype=np.float32)
    vy = np.full((n + 2, n + 2), -1000.0, dtype=np.float32)
    positions = backtrace(n, vx, vy, 0.1)
    assert positions.shape == (2, n, n)
    np.testing.assert_array_equal(positions[0], 0.5)
    np.testing.assert_array_equal(positions[1], n + 0.5)


def test_clamped_samples_average_wall_and_edge_cells(rng):
    n = 5
    (d, d0, vx, vy), (dg, d0g, vxg, _) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)
    vxg[:] = 1000.0

    advect(n, Boundary.NONE, d, d0, vx, vy, 0.1)

    expected = 0.5 * (d0g[0, 1:-1] + d0g[1, 1:-1])
    for i in range(1, n + 1):
        np.testing.assert_allclose(dg[i, 1:-1], expected, rtol=1e-5, atol=1e-6)


def test_boundary_kind_is_applied(rng):
    n = 4
    (d, d0, vx, vy), (dg, d0g, vxg, vyg) = _fields(n, 4)
    d0g[:] = rng.standard_normal(d0g.shape)
    vxg[:] = rng.uniform(-1, 1, size=vxg.shape)

    advect(n, Boundary.MIRROR_X, d, d0, vx, vy, 0.1)

    np.testing.assert_array_equal(dg[0, 1:-1], -dg[1, 1:-1])
    np.testing.assert_array_equal(dg[-1, 1:-1], -dg[-2, 1:-1])


def test_velocity_may_alias_source_field():
    n = 4
    (d, d0, vy), _ = _fields(n, 3)
    advect(n, Boundary.MIRROR_X, d, d0, d0, vy, 0.1)


def test_rejects_output_aliasing_inputs():
    n = 4
    (d, d0, vx, vy), _ = _fields(n, 4)
    with pytest.raises(ValueError, match="distinct"):
        advect(n, Boundary.NONE, d0, d0, vx, vy, 0.1)
    with pytest.raises(ValueError, match="distinct"):
        advect(n, Boundary.NONE, vx, d0, vx, vy, 0.1)


def test_rejects_negative_dt():
    n = 4
    (d, d0, vx, vy), _ = _fields(n, 4)
    with pytest.raises(ValueError, match="dt"):
        advect(n, Boundary.NONE, d, d0, vx, vy, -0.1)
