"""
asciiflow: text-driven particle simulation.

Every visible character of a text becomes a particle whose character code
decides its mass, color and starting velocity. A selectable physics mode
(fluid, gravity, chaos, weather, swarm) animates the population.
"""

__version__ = "0.1.0"

from .core.particles import ParticleSet, create_particles
from .core.text import DEFAULT_TEXT, get_default_text, sanitize_text
from .physics.engine import FrameClock, RenderState, SimulationEngine
from .physics.modes import Mode

__all__ = [
    'DEFAULT_TEXT',
    'FrameClock',
    'Mode',
    'ParticleSet',
    'RenderState',
    'SimulationEngine',
    'create_particles',
    'get_default_text',
    'sanitize_text',
]
