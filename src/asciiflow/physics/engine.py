"""
Simulation engine and frame clock.

The engine owns the particle set, the active force model and (in weather
mode) the vortex field. Ticks are driven by an injected ``request_tick``
capability so any scheduler can run it: the matplotlib animation timer, or
a test harness that steps frames synchronously.
"""

import logging
import time
from typing import NamedTuple

import numpy as np

from .. import config
from ..core.particles import create_particles
from .context import StepContext
from .forces import create_force_model
from .integrator import euler_step
from .modes import Mode, default_config
from .vortex import VortexField

logger = logging.getLogger(__name__)

# Float tolerance when comparing accumulated millisecond timestamps
_TIME_EPSILON_MS = 1e-6


class RenderState(NamedTuple):
    """What the render sink needs to draw one particle."""
    x: float
    y: float
    character: str
    hue: float
    alpha: float


class FrameClock:
    """
    Throttles ticks to a target rate from wall-clock deltas.

    The remainder of each elapsed interval is carried over so the tick rate
    does not drift below the target.
    """

    def __init__(self, fps=config.FPS_TARGET, start_ms=None):
        if not fps > 0:
            raise ValueError(f"fps must be positive, got {fps!r}")
        self.fps = fps
        self.frame_duration = 1000.0 / fps
        self.last_ms = self.now() if start_ms is None else float(start_ms)

    @staticmethod
    def now():
        """Monotonic timestamp in milliseconds."""
        return time.perf_counter() * 1000.0

    def ready(self, now_ms):
        """
        Whether a tick is due at ``now_ms``; consumes the interval if so.

        Args:
            now_ms (float): Current timestamp in milliseconds

        Returns:
            bool: True when at least one frame duration has elapsed
        """
        delta = now_ms - self.last_ms
        if delta + _TIME_EPSILON_MS >= self.frame_duration:
            remainder = delta % self.frame_duration
            if self.frame_duration - remainder < _TIME_EPSILON_MS:
                remainder = 0.0
            self.last_ms = now_ms - remainder
            return True
        return False


class SimulationEngine:
    """
    Multi-mode particle physics over one text.

    Every tick runs, for each particle in order: the force model's velocity
    update, the integrator (clamp then Euler step) and the boundary policy.
    The mode is fixed for the engine's lifetime; dispose the engine and build
    a new one to change mode or text.
    """

    def __init__(self, text, mode=Mode.FLUID, width=config.DEFAULT_WIDTH, height=config.DEFAULT_HEIGHT,
                 *, mode_config=None, rng=None, seed=None, request_tick=None, cancel_tick=None,
                 clock=None, on_frame=None, on_particle_count=None):
        """
        Args:
            text (str): Already sanitized text; one particle per visible character
            mode (Mode or str): Simulation mode
            width, height (float): Surface extent
            mode_config: Mode configuration (e.g. FluidConfig), defaults per mode
            rng (np.random.Generator, optional): Random source
            seed (int, optional): Seed for a new random source when ``rng`` is None
            request_tick (callable, optional): ``request_tick(callback) -> handle``;
                the scheduler later calls ``callback(now_ms)``
            cancel_tick (callable, optional): ``cancel_tick(handle)``
            clock (FrameClock, optional): Tick throttle
            on_frame (callable, optional): Called with the engine after each tick
            on_particle_count (callable, optional): Called once with the particle count
        """
        self.mode = Mode.parse(mode)
        self.config = mode_config if mode_config is not None else default_config(self.mode)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.ctx = StepContext(width=float(width), height=float(height), rng=self.rng,
                               dt=config.TIMESTEP)
        self.clock = clock if clock is not None else FrameClock()

        self._request_tick = request_tick
        self._cancel_tick = cancel_tick
        self._on_frame = on_frame
        self._pending = None
        self._disposed = False
        self.tick_count = 0

        self.particles = create_particles(text, self.ctx.width, self.ctx.height, self.rng)
        self.force = create_force_model(self.mode, self.config)
        self.vortex_field = None
        if self.mode is Mode.WEATHER:
            self.vortex_field = VortexField.create(self.config, self.ctx.width, self.ctx.height, self.rng)
            self.force.field = self.vortex_field

        logger.info("Engine created: mode=%s particles=%d surface=%gx%g",
                    self.mode.value, len(self.particles), self.ctx.width, self.ctx.height)
        if on_particle_count is not None:
            on_particle_count(len(self.particles))

    @property
    def disposed(self):
        return self._disposed

    @property
    def particle_count(self):
        return 0 if self.particles is None else len(self.particles)

    @property
    def width(self):
        return self.ctx.width

    @property
    def height(self):
        return self.ctx.height

    def tick(self, time_ms=None):
        """
        Advance the simulation by one fixed timestep, in place.

        Args:
            time_ms (float, optional): Wall-clock timestamp of this tick in
                milliseconds (drives the weather wind); defaults to now
        """
        if self._disposed:
            return
        ctx = self.ctx
        ctx.time_ms = FrameClock.now() if time_ms is None else float(time_ms)

        particles = self.particles
        force = self.force
        boundary = force.boundary
        max_velocity = force.max_velocity

        force.begin_tick(particles, ctx)
        for i in range(len(particles)):
            force.step(particles, i, ctx)
            euler_step(particles, i, max_velocity, ctx.dt)
            boundary.apply(particles, i, ctx)
        self.tick_count += 1

    def start(self):
        """Request the first frame callback from the scheduler."""
        if self._request_tick is None:
            raise RuntimeError("SimulationEngine.start() needs a request_tick capability")
        if self._disposed:
            raise RuntimeError("Cannot start a disposed engine")
        if self._pending is None:
            self._schedule()

    def _schedule(self):
        self._pending = self._request_tick(self._frame)

    def _frame(self, now_ms=None):
        """Scheduler callback: tick when the clock allows, then reschedule."""
        self._pending = None
        if self._disposed:
            return
        if now_ms is None:
            now_ms = FrameClock.now()
        if self.clock.ready(now_ms):
            self.tick(now_ms)
            if self._on_frame is not None:
                self._on_frame(self)
        if not self._disposed:
            self._schedule()

    def dispose(self):
        """Stop scheduling and drop particle and vortex state."""
        if self._disposed:
            return
        self._disposed = True
        if self._pending is not None and self._cancel_tick is not None:
            self._cancel_tick(self._pending)
        self._pending = None
        self.particles = None
        self.vortex_field = None
        self.force = None
        logger.debug("Engine disposed after %d ticks", self.tick_count)

    def resize(self, width, height):
        """Change the surface extent used by future boundary corrections."""
        self.ctx.width = float(width)
        self.ctx.height = float(height)
        logger.debug("Surface resized to %gx%g", self.ctx.width, self.ctx.height)

    def render_states(self):
        """
        Per-particle drawing state for the render sink.

        Returns:
            list[RenderState]: Position, glyph, hue and alpha of every particle
        """
        if self.particles is None:
            return []
        p = self.particles
        alpha = p.alpha
        return [
            RenderState(float(p.positions[i, 0]), float(p.positions[i, 1]),
                        p.characters[i], float(p.hue[i]), float(alpha[i]))
            for i in range(len(p))
        ]

    def mean_squared_speed(self):
        """Mean of vx^2 + vy^2 over all particles (0 when empty)."""
        if self.particles is None or len(self.particles) == 0:
            return 0.0
        return float(np.mean(np.sum(self.particles.velocities ** 2, axis=1)))
