"""
Force models for the five simulation modes.

Each model owns its immutable configuration and exposes the same contract:

- ``begin_tick(particles, ctx)`` runs once per tick before any particle,
- ``step(particles, i, ctx)`` adds the mode's velocity change (friction
  included) to particle ``i``,
- ``max_velocity`` is the speed limit the integrator clamps to,
- ``boundary`` is the policy applied after the position update.
"""

import math

from .boundary import ChaosBounceBoundary, GravityFloorBoundary, WrapBoundary, make_boundary
from .modes import DEFAULT_CONFIGS, ChaosConfig, FluidConfig, GravityConfig, Mode, SwarmConfig, WeatherConfig
from .vortex import VortexField

TWO_PI = math.pi * 2


def sample_neighbors(rng, n, count, self_index):
    """
    Yield ``count`` uniformly sampled particle indices, with replacement.

    A sample equal to ``self_index`` is skipped without drawing a
    substitute, so fewer than ``count`` neighbors may be yielded.
    """
    for _ in range(count):
        j = int(rng.integers(0, n))
        if j == self_index:
            continue
        yield j


class ForceModel:
    """Base class of the per-mode force models."""

    mode = None

    def __init__(self, cfg):
        self.cfg = cfg
        self.boundary = WrapBoundary()

    @property
    def max_velocity(self):
        return self.cfg.max_velocity

    def begin_tick(self, particles, ctx):
        pass

    def step(self, particles, i, ctx):
        raise NotImplementedError


class FluidForce(ForceModel):
    """Similar characters attract, different characters repel."""

    mode = Mode.FLUID

    def __init__(self, cfg=None):
        super().__init__(cfg or FluidConfig())
        self.boundary = make_boundary(self.cfg.boundary_mode)

    def step(self, particles, i, ctx):
        cfg = self.cfg
        positions = particles.positions
        codes = particles.codes
        px, py = float(positions[i, 0]), float(positions[i, 1])
        vx, vy = float(particles.velocities[i, 0]), float(particles.velocities[i, 1])
        code = int(codes[i])
        mass = float(particles.mass[i])

        for j in sample_neighbors(ctx.rng, len(particles), cfg.neighbors_to_check, i):
            dx = float(positions[j, 0]) - px
            dy = float(positions[j, 1]) - py
            dist = math.sqrt(dx * dx + dy * dy)
            if dist <= 0 or dist >= cfg.interaction_radius:
                continue

            abs_diff = abs(int(codes[j]) - code)
            if abs_diff < cfg.similarity_threshold:
                force = cfg.attraction_strength
            else:
                force = -cfg.repulsion_strength * (abs_diff / cfg.repulsion_scale)

            # Inversely proportional to distance, heavier particles accelerate less
            strength = (force / (dist + 1)) / mass
            vx += (dx / dist) * strength
            vy += (dy / dist) * strength

        particles.velocities[i, 0] = vx * cfg.friction
        particles.velocities[i, 1] = vy * cfg.friction


class GravityForce(ForceModel):
    """Mass-scaled falling with air resistance and a bouncy floor."""

    mode = Mode.GRAVITY

    def __init__(self, cfg=None):
        super().__init__(cfg or GravityConfig())
        self.boundary = GravityFloorBoundary(self.cfg)

    def step(self, particles, i, ctx):
        cfg = self.cfg
        vel = particles.velocities[i]
        vel[1] += cfg.gravity * float(particles.mass[i])
        vel[0] *= cfg.air_resistance
        vel[1] *= cfg.air_resistance


class ChaosForce(ForceModel):
    """Random turbulence, a weak pull to the center and energetic walls."""

    mode = Mode.CHAOS

    def __init__(self, cfg=None):
        super().__init__(cfg or ChaosConfig())
        self.boundary = ChaosBounceBoundary(self.cfg)

    def step(self, particles, i, ctx):
        cfg = self.cfg
        rng = ctx.rng
        vx, vy = float(particles.velocities[i, 0]), float(particles.velocities[i, 1])

        if rng.random() < cfg.turbulence_frequency:
            angle = rng.random() * TWO_PI
            force = cfg.random_force_strength * (0.5 + rng.random() * 0.5)
            vx += math.cos(angle) * force
            vy += math.sin(angle) * force

        dcx = ctx.width / 2 - float(particles.positions[i, 0])
        dcy = ctx.height / 2 - float(particles.positions[i, 1])
        center_dist = math.sqrt(dcx * dcx + dcy * dcy)
        if center_dist > 0:
            center_force = cfg.center_attraction * (center_dist / cfg.center_distance_scale)
            vx += (dcx / center_dist) * center_force
            vy += (dcy / center_dist) * center_force

        particles.velocities[i, 0] = vx * cfg.friction
        particles.velocities[i, 1] = vy * cfg.friction


class WeatherForce(ForceModel):
    """Drifting vortices plus a slowly rotating global wind."""

    mode = Mode.WEATHER

    def __init__(self, cfg=None, field=None):
        super().__init__(cfg or WeatherConfig())
        self.field = field if field is not None else VortexField()

    def begin_tick(self, particles, ctx):
        self.field.advance(ctx.width, ctx.height)

    def wind(self, time_ms):
        """Global wind vector at ``time_ms``."""
        angle = (time_ms / self.cfg.wind_period_ms) * TWO_PI
        return math.cos(angle) * self.cfg.wind_strength, math.sin(angle) * self.cfg.wind_strength

    def step(self, particles, i, ctx):
        cfg = self.cfg
        px, py = float(particles.positions[i, 0]), float(particles.positions[i, 1])
        vx, vy = float(particles.velocities[i, 0]), float(particles.velocities[i, 1])

        for vortex in self.field:
            dx = px - vortex.x
            dy = py - vortex.y
            dist = math.sqrt(dx * dx + dy * dy)
            if cfg.min_vortex_distance < dist < cfg.vortex_radius:
                tangent = math.atan2(dy, dx) + (math.pi / 2) * vortex.rotation
                # Linear falloff to zero at the radius
                magnitude = vortex.strength * (1 - dist / cfg.vortex_radius)
                vx += math.cos(tangent) * magnitude
                vy += math.sin(tangent) * magnitude

        wx, wy = self.wind(ctx.time_ms)
        particles.velocities[i, 0] = (vx + wx) * cfg.friction
        particles.velocities[i, 1] = (vy + wy) * cfg.friction


class SwarmForce(ForceModel):
    """Boids flocking over a random neighbor sample."""

    mode = Mode.SWARM

    def __init__(self, cfg=None):
        super().__init__(cfg or SwarmConfig())

    def step(self, particles, i, ctx):
        cfg = self.cfg
        positions = particles.positions
        velocities = particles.velocities
        px, py = float(positions[i, 0]), float(positions[i, 1])
        vx, vy = float(velocities[i, 0]), float(velocities[i, 1])

        sep_x = sep_y = 0.0
        align_x = align_y = 0.0
        coh_x = coh_y = 0.0
        sep_count = align_count = coh_count = 0

        # Radii are nested; one neighbor may feed several terms
        for j in sample_neighbors(ctx.rng, len(particles), cfg.neighbors_to_check, i):
            dx = float(positions[j, 0]) - px
            dy = float(positions[j, 1]) - py
            dist = math.sqrt(dx * dx + dy * dy)

            if 0 < dist < cfg.separation_radius:
                sep_x -= dx / dist
                sep_y -= dy / dist
                sep_count += 1

            if dist < cfg.alignment_radius:
                align_x += float(velocities[j, 0])
                align_y += float(velocities[j, 1])
                align_count += 1

            if dist < cfg.cohesion_radius:
                coh_x += dx
                coh_y += dy
                coh_count += 1

        if sep_count > 0:
            vx += (sep_x / sep_count) * cfg.separation_strength
            vy += (sep_y / sep_count) * cfg.separation_strength

        if align_count > 0:
            vx += (align_x / align_count - vx) * cfg.alignment_strength
            vy += (align_y / align_count - vy) * cfg.alignment_strength

        if coh_count > 0:
            vx += (coh_x / coh_count) * cfg.cohesion_strength
            vy += (coh_y / coh_count) * cfg.cohesion_strength

        noise_angle = ctx.rng.random() * TWO_PI
        vx += math.cos(noise_angle) * cfg.random_noise
        vy += math.sin(noise_angle) * cfg.random_noise

        velocities[i, 0] = vx * cfg.friction
        velocities[i, 1] = vy * cfg.friction


FORCE_MODELS = {
    Mode.FLUID: FluidForce,
    Mode.GRAVITY: GravityForce,
    Mode.CHAOS: ChaosForce,
    Mode.WEATHER: WeatherForce,
    Mode.SWARM: SwarmForce,
}


def create_force_model(mode, cfg=None, field=None):
    """
    Build the force model for ``mode``.

    Args:
        mode (Mode or str): Simulation mode
        cfg (optional): Mode configuration, defaults to the mode's defaults
        field (VortexField, optional): Vortices for weather mode

    Returns:
        ForceModel: The selected model
    """
    mode = Mode.parse(mode)
    expected = DEFAULT_CONFIGS[mode]
    if cfg is not None and not isinstance(cfg, expected):
        raise TypeError(f"{mode.value} mode needs a {expected.__name__}, got {type(cfg).__name__}")
    if mode is Mode.WEATHER:
        return WeatherForce(cfg, field)
    return FORCE_MODELS[mode](cfg)
