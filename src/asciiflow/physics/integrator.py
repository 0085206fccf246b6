"""
Velocity clamping and explicit Euler integration shared by all modes.
"""

import math

from .. import config


def clamp_velocity(vx, vy, max_velocity):
    """
    Rescale (vx, vy) to ``max_velocity`` if its magnitude exceeds it.

    Args:
        vx, vy (float): Velocity components
        max_velocity (float): Speed limit for the active mode

    Returns:
        tuple: Clamped (vx, vy)
    """
    speed_sq = vx * vx + vy * vy
    if speed_sq > max_velocity * max_velocity:
        speed = math.sqrt(speed_sq)
        return vx / speed * max_velocity, vy / speed * max_velocity
    return vx, vy


def euler_step(particles, i, max_velocity, dt=config.TIMESTEP):
    """
    Clamp the velocity of particle ``i`` and advance its position.

    Args:
        particles (ParticleSet): Particle storage, updated in place
        i (int): Particle index
        max_velocity (float): Speed limit for the active mode
        dt (float): Logical timestep
    """
    vel = particles.velocities[i]
    pos = particles.positions[i]
    vx, vy = clamp_velocity(float(vel[0]), float(vel[1]), max_velocity)
    vel[0] = vx
    vel[1] = vy
    # Euler integration: new_pos = pos + velocity * dt
    pos[0] += vx * dt
    pos[1] += vy * dt
