"""
Configuration module for ASCII Fluid Lab.

This module contains global constants and default parameters used throughout
the simulation. Per-mode physics constants are read once by the config
dataclasses in ``asciiflow.physics.modes``; change them there (or pass
overrides) rather than mutating these values at runtime.
"""

# Text source
MAX_CHARS = 3000  # Maximum number of characters turned into particles

# Animation parameters
FPS_TARGET = 60  # Physics ticks per second
ANIMATION_INTERVAL = 8  # milliseconds between host timer callbacks (polled faster than FPS_TARGET)
TIMESTEP = 1.0  # Fixed logical dt, never scaled by wall-clock time

# Default surface extent (pixels) when no window size is given
DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 700

# Window title
WINDOW_TITLE = "ASCII Fluid Lab"

# Rendering
FONT_SIZE = 11
FONT_FAMILY = "monospace"
BACKGROUND_COLOR = "#0f172a"  # Dark slate
GLYPH_SATURATION = 0.70
GLYPH_LIGHTNESS = 0.65
BASE_ALPHA = 0.7  # alpha = BASE_ALPHA + norm * NORM_ALPHA
NORM_ALPHA = 0.3

# Particle trail fade (older segments more transparent)
TAIL_LENGTH = 6  # number of position history points
TRAIL_TAIL_MIN_FACTOR = 0.05  # 0..1, alpha factor for the oldest segment
TRAIL_TAIL_EXP = 2.0  # >1 for stronger decay near the tail
TRAIL_ALPHA = 0.35  # alpha of the newest trail segment
TRAIL_LINEWIDTH = 1.0

# Character code normalisation (printable ASCII)
CODE_MIN = 32
CODE_MAX = 126

# Fluid mode (default)
FLUID_MAX_VELOCITY = 3.0
FLUID_FRICTION = 0.98
FLUID_INTERACTION_RADIUS = 100.0
FLUID_NEIGHBORS_TO_CHECK = 5
FLUID_ATTRACTION_STRENGTH = 0.01
FLUID_REPULSION_STRENGTH = 0.02
FLUID_SIMILARITY_THRESHOLD = 10  # code difference below which characters attract
FLUID_REPULSION_SCALE = 50.0  # code difference giving unit repulsion
FLUID_BOUNDARY_MODE = 'wrap'  # options: 'wrap', 'bounce'

# Gravity mode
GRAVITY = 0.3
GRAVITY_BOUNCE_DAMPING = 0.7
GRAVITY_GROUND_FRICTION = 0.99
GRAVITY_AIR_RESISTANCE = 0.995
GRAVITY_FLOOR_OFFSET = 10.0
GRAVITY_REST_THRESHOLD = 0.5  # vertical speed snapped to zero after a floor bounce
GRAVITY_ESCAPE_MARGIN = 50.0  # particles above -margin re-enter from the top
GRAVITY_RESPAWN_Y = -10.0
GRAVITY_RESPAWN_SPEED = 2.0  # horizontal speed range of re-entering particles
# Terminal speed GRAVITY / (1 - AIR_RESISTANCE); the clamp never alters a fall
GRAVITY_MAX_VELOCITY = 60.0

# Chaos mode
CHAOS_RANDOM_FORCE_STRENGTH = 0.15
CHAOS_CENTER_ATTRACTION = 0.005
CHAOS_CENTER_DISTANCE_SCALE = 100.0
CHAOS_WALL_BOUNCE_ENERGY = 1.05
CHAOS_WALL_IMPULSE = 0.3
CHAOS_FRICTION = 0.996
CHAOS_MAX_VELOCITY = 5.0
CHAOS_TURBULENCE_FREQUENCY = 0.3  # per-tick impulse probability

# Weather mode
WEATHER_NUM_VORTICES = 3
WEATHER_VORTEX_STRENGTH = 0.08
WEATHER_VORTEX_RADIUS = 150.0
WEATHER_VORTEX_MOVE_SPEED = 0.5
WEATHER_MIN_VORTEX_DISTANCE = 1.0
WEATHER_WIND_STRENGTH = 0.02
WEATHER_WIND_PERIOD_MS = 5000.0
WEATHER_FRICTION = 0.99
WEATHER_MAX_VELOCITY = 4.0

# Swarm mode
SWARM_SEPARATION_RADIUS = 30.0
SWARM_ALIGNMENT_RADIUS = 60.0
SWARM_COHESION_RADIUS = 80.0
SWARM_SEPARATION_STRENGTH = 0.05
SWARM_ALIGNMENT_STRENGTH = 0.03
SWARM_COHESION_STRENGTH = 0.01
SWARM_RANDOM_NOISE = 0.05
SWARM_FRICTION = 0.995
SWARM_MAX_VELOCITY = 3.5
SWARM_NEIGHBORS_TO_CHECK = 8
