"""
Vortex field for weather mode.

A small fixed set of drifting vortices that bounce off the surface edges and
swirl nearby particles.
"""

from dataclasses import dataclass

from .boundary import bounce_coordinate


@dataclass
class Vortex:
    """
    A drifting vortex.

    Attributes:
        x, y (float): Center position
        vx, vy (float): Drift velocity per tick
        strength (float): Peak tangential force at the center
        rotation (int): +1 or -1, fixed for the run
    """
    x: float
    y: float
    vx: float
    vy: float
    strength: float
    rotation: int


class VortexField:
    """Owns the vortices of one weather-mode run."""

    def __init__(self, vortices=None):
        self.vortices = list(vortices or [])

    def __len__(self):
        return len(self.vortices)

    def __iter__(self):
        return iter(self.vortices)

    @classmethod
    def create(cls, cfg, width, height, rng):
        """
        Create ``cfg.num_vortices`` vortices at random positions.

        Drift components are uniform in ``±vortex_move_speed / 2``, strength
        is within ±20% of ``cfg.vortex_strength`` and the rotation sign is a
        coin flip.

        Args:
            cfg (WeatherConfig): Weather configuration
            width, height (float): Surface extent
            rng (np.random.Generator): Random source
        """
        width = max(width, 0.0)
        height = max(height, 0.0)
        vortices = []
        for _ in range(cfg.num_vortices):
            vortices.append(Vortex(
                x=rng.random() * width,
                y=rng.random() * height,
                vx=(rng.random() - 0.5) * cfg.vortex_move_speed,
                vy=(rng.random() - 0.5) * cfg.vortex_move_speed,
                strength=cfg.vortex_strength * (0.8 + rng.random() * 0.4),
                rotation=1 if rng.random() < 0.5 else -1,
            ))
        return cls(vortices)

    def advance(self, width, height):
        """Move every vortex by its velocity and bounce it off the edges."""
        for v in self.vortices:
            v.x += v.vx
            v.y += v.vy
            v.x, v.vx, _ = bounce_coordinate(v.x, v.vx, width)
            v.y, v.vy, _ = bounce_coordinate(v.y, v.vy, height)
