import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from asciiflow.physics.context import StepContext


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def ctx(rng):
    return StepContext(width=400.0, height=300.0, rng=rng)
