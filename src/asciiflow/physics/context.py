"""
Per-tick context handed to force models and boundary policies.
"""

from dataclasses import dataclass

import numpy as np


@dataclass
class StepContext:
    """
    Shared, engine-owned state for one tick.

    Attributes:
        width (float): Surface width
        height (float): Surface height
        rng (np.random.Generator): Random source for sampling and impulses
        time_ms (float): Wall-clock timestamp of the current tick in milliseconds
        dt (float): Logical timestep
    """
    width: float
    height: float
    rng: np.random.Generator
    time_ms: float = 0.0
    dt: float = 1.0

    @property
    def extent(self):
        """Surface extent clamped to non-negative values."""
        return max(self.width, 0.0), max(self.height, 0.0)
