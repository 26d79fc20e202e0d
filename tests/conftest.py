import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from stable_navstokes.core.grid import allocate_field, as_grid


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def field_factory():
    """Zeroed flat buffers plus their 2D views."""
    def make(n):
        field = allocate_field(n)
        return field, as_grid(field, n)
    return make
