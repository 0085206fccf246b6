"""
Boundary policies applied after each particle's position update.

Wrap and Bounce are the generic policies; GravityFloorBoundary and
ChaosBounceBoundary are the mode-specific variants.
"""


def wrap_coordinate(value, extent):
    """
    Re-enter a coordinate from the opposite edge.

    Returns a value in ``[0, extent)``; a non-positive extent collapses to 0.
    """
    if extent <= 0:
        return 0.0
    if value < 0:
        value += extent
    elif value >= extent:
        value -= extent
    if value < 0 or value >= extent:
        # overshoot of more than one extent
        value = value % extent
        if value >= extent:
            value = 0.0
    return value


def bounce_coordinate(value, velocity, extent):
    """
    Reflect a coordinate that left ``[0, extent]``.

    Returns:
        tuple: (clamped value, possibly inverted velocity, whether it bounced)
    """
    upper = max(extent, 0.0)
    if value < 0 or value > upper:
        return min(max(value, 0.0), upper), -velocity, True
    return value, velocity, False


class WrapBoundary:
    """Wrap-around on both axes."""

    name = 'wrap'

    def apply(self, particles, i, ctx):
        pos = particles.positions[i]
        pos[0] = wrap_coordinate(float(pos[0]), ctx.width)
        pos[1] = wrap_coordinate(float(pos[1]), ctx.height)


class BounceBoundary:
    """Elastic bounce on both axes."""

    name = 'bounce'

    def apply(self, particles, i, ctx):
        pos = particles.positions[i]
        vel = particles.velocities[i]
        pos[0], vel[0], _ = bounce_coordinate(float(pos[0]), float(vel[0]), ctx.width)
        pos[1], vel[1], _ = bounce_coordinate(float(pos[1]), float(vel[1]), ctx.height)


class GravityFloorBoundary:
    """
    Damped floor bounce with a rest snap, horizontal wrap, and re-entry from
    the top for particles that escaped upward.
    """

    name = 'gravity-floor'

    def __init__(self, cfg):
        self.cfg = cfg

    def apply(self, particles, i, ctx):
        cfg = self.cfg
        pos = particles.positions[i]
        vel = particles.velocities[i]
        x, y = float(pos[0]), float(pos[1])
        vx, vy = float(vel[0]), float(vel[1])

        ground_y = ctx.height - cfg.floor_offset
        if y >= ground_y:
            y = ground_y
            vy *= -cfg.bounce_damping
            vx *= cfg.ground_friction
            if abs(vy) < cfg.rest_threshold:
                vy = 0.0

        x = wrap_coordinate(x, ctx.width)

        if y < -cfg.escape_margin:
            y = cfg.respawn_y
            width, _ = ctx.extent
            x = ctx.rng.random() * width
            vx = (ctx.rng.random() - 0.5) * cfg.respawn_speed
            vy = 0.0

        pos[0], pos[1] = x, y
        vel[0], vel[1] = vx, vy


class ChaosBounceBoundary:
    """
    Bounce that amplifies the reflected velocity and kicks the orthogonal
    axis, so the system keeps gaining energy at the walls.
    """

    name = 'chaos-bounce'

    def __init__(self, cfg):
        self.cfg = cfg

    def apply(self, particles, i, ctx):
        cfg = self.cfg
        pos = particles.positions[i]
        vel = particles.velocities[i]

        x, vx, hit = bounce_coordinate(float(pos[0]), float(vel[0]), ctx.width)
        if hit:
            vel[0] = vx * cfg.wall_bounce_energy
            pos[0] = x
            vel[1] += (ctx.rng.random() - 0.5) * cfg.wall_impulse

        y, vy, hit = bounce_coordinate(float(pos[1]), float(vel[1]), ctx.height)
        if hit:
            vel[1] = vy * cfg.wall_bounce_energy
            pos[1] = y
            vel[0] += (ctx.rng.random() - 0.5) * cfg.wall_impulse


def make_boundary(name):
    """Generic boundary policy by name ('wrap' or 'bounce')."""
    if name == 'wrap':
        return WrapBoundary()
    if name == 'bounce':
        return BounceBoundary()
    raise ValueError(f"Unknown boundary mode {name!r}")
