"""
Simulation modes and their immutable per-mode configuration.

Defaults are read from ``asciiflow.config``. Override single values with
keyword arguments or ``dataclasses.replace``.
"""

from dataclasses import dataclass
from enum import Enum

from .. import config


class Mode(str, Enum):
    """Selectable physics model."""

    FLUID = 'fluid'
    GRAVITY = 'gravity'
    CHAOS = 'chaos'
    WEATHER = 'weather'
    SWARM = 'swarm'

    @classmethod
    def parse(cls, value):
        """Accept a Mode or a case-insensitive mode name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ', '.join(m.value for m in cls)
            raise ValueError(f"Unknown simulation mode {value!r} (expected one of: {names})") from None


BOUNDARY_MODES = ('wrap', 'bounce')


def _require_positive(name, value):
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


def _require_non_negative(name, value):
    if not value >= 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")


@dataclass(frozen=True)
class FluidConfig:
    max_velocity: float = config.FLUID_MAX_VELOCITY
    friction: float = config.FLUID_FRICTION
    interaction_radius: float = config.FLUID_INTERACTION_RADIUS
    neighbors_to_check: int = config.FLUID_NEIGHBORS_TO_CHECK
    attraction_strength: float = config.FLUID_ATTRACTION_STRENGTH
    repulsion_strength: float = config.FLUID_REPULSION_STRENGTH
    similarity_threshold: int = config.FLUID_SIMILARITY_THRESHOLD
    repulsion_scale: float = config.FLUID_REPULSION_SCALE
    boundary_mode: str = config.FLUID_BOUNDARY_MODE

    def __post_init__(self):
        _require_positive('max_velocity', self.max_velocity)
        _require_non_negative('interaction_radius', self.interaction_radius)
        _require_non_negative('neighbors_to_check', self.neighbors_to_check)
        _require_positive('repulsion_scale', self.repulsion_scale)
        if self.boundary_mode not in BOUNDARY_MODES:
            raise ValueError(f"boundary_mode must be one of {BOUNDARY_MODES}, got {self.boundary_mode!r}")


@dataclass(frozen=True)
class GravityConfig:
    gravity: float = config.GRAVITY
    bounce_damping: float = config.GRAVITY_BOUNCE_DAMPING
    ground_friction: float = config.GRAVITY_GROUND_FRICTION
    air_resistance: float = config.GRAVITY_AIR_RESISTANCE
    floor_offset: float = config.GRAVITY_FLOOR_OFFSET
    rest_threshold: float = config.GRAVITY_REST_THRESHOLD
    escape_margin: float = config.GRAVITY_ESCAPE_MARGIN
    respawn_y: float = config.GRAVITY_RESPAWN_Y
    respawn_speed: float = config.GRAVITY_RESPAWN_SPEED
    max_velocity: float = config.GRAVITY_MAX_VELOCITY

    def __post_init__(self):
        _require_positive('max_velocity', self.max_velocity)
        _require_non_negative('rest_threshold', self.rest_threshold)
        _require_non_negative('escape_margin', self.escape_margin)


@dataclass(frozen=True)
class ChaosConfig:
    random_force_strength: float = config.CHAOS_RANDOM_FORCE_STRENGTH
    center_attraction: float = config.CHAOS_CENTER_ATTRACTION
    center_distance_scale: float = config.CHAOS_CENTER_DISTANCE_SCALE
    wall_bounce_energy: float = config.CHAOS_WALL_BOUNCE_ENERGY
    wall_impulse: float = config.CHAOS_WALL_IMPULSE
    friction: float = config.CHAOS_FRICTION
    max_velocity: float = config.CHAOS_MAX_VELOCITY
    turbulence_frequency: float = config.CHAOS_TURBULENCE_FREQUENCY

    def __post_init__(self):
        _require_positive('max_velocity', self.max_velocity)
        _require_positive('center_distance_scale', self.center_distance_scale)
        if not 0.0 <= self.turbulence_frequency <= 1.0:
            raise ValueError(f"turbulence_frequency must be in [0, 1], got {self.turbulence_frequency!r}")


@dataclass(frozen=True)
class WeatherConfig:
    num_vortices: int = config.WEATHER_NUM_VORTICES
    vortex_strength: float = config.WEATHER_VORTEX_STRENGTH
    vortex_radius: float = config.WEATHER_VORTEX_RADIUS
    vortex_move_speed: float = config.WEATHER_VORTEX_MOVE_SPEED
    min_vortex_distance: float = config.WEATHER_MIN_VORTEX_DISTANCE
    wind_strength: float = config.WEATHER_WIND_STRENGTH
    wind_period_ms: float = config.WEATHER_WIND_PERIOD_MS
    friction: float = config.WEATHER_FRICTION
    max_velocity: float = config.WEATHER_MAX_VELOCITY

    def __post_init__(self):
        _require_positive('max_velocity', self.max_velocity)
        _require_non_negative('num_vortices', self.num_vortices)
        _require_positive('vortex_radius', self.vortex_radius)
        _require_positive('wind_period_ms', self.wind_period_ms)


@dataclass(frozen=True)
class SwarmConfig:
    separation_radius: float = config.SWARM_SEPARATION_RADIUS
    alignment_radius: float = config.SWARM_ALIGNMENT_RADIUS
    cohesion_radius: float = config.SWARM_COHESION_RADIUS
    separation_strength: float = config.SWARM_SEPARATION_STRENGTH
    alignment_strength: float = config.SWARM_ALIGNMENT_STRENGTH
    cohesion_strength: float = config.SWARM_COHESION_STRENGTH
    random_noise: float = config.SWARM_RANDOM_NOISE
    friction: float = config.SWARM_FRICTION
    max_velocity: float = config.SWARM_MAX_VELOCITY
    neighbors_to_check: int = config.SWARM_NEIGHBORS_TO_CHECK

    def __post_init__(self):
        _require_positive('max_velocity', self.max_velocity)
        _require_non_negative('neighbors_to_check', self.neighbors_to_check)
        if not self.separation_radius <= self.alignment_radius <= self.cohesion_radius:
            raise ValueError("swarm radii must be nested: separation <= alignment <= cohesion")


DEFAULT_CONFIGS = {
    Mode.FLUID: FluidConfig,
    Mode.GRAVITY: GravityConfig,
    Mode.CHAOS: ChaosConfig,
    Mode.WEATHER: WeatherConfig,
    Mode.SWARM: SwarmConfig,
}


def default_config(mode):
    """Default configuration value for ``mode``."""
    return DEFAULT_CONFIGS[Mode.parse(mode)]()
