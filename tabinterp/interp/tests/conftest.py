import numpy as np
import pytest


@pytest.fixture
def nonuniform_table(request):
    n = getattr(request, "param", 25)
    rng = np.random.default_rng(2020)
    x = np.cumsum(0.05 + rng.random(n))
    y = np.cos(x) * np.exp(0.1 * x)
    return x, y


@pytest.fixture
def cubic_samples():
    return [(0.0, 0.0), (1.0, 1.0), (2.0, 8.0), (3.0, 27.0)]
