"""
Particle data module for ASCII Fluid Lab.

Turns a text into a column-oriented particle set: one particle per visible
character, with mass, hue and starting velocity derived from its code.
"""

import numpy as np

from .. import config


class ParticleSet:
    """
    Column-oriented particle storage.

    Positions and velocities are mutated in place by the engine. ``codes``,
    ``norm``, ``mass`` and ``hue`` are fixed at creation and read-only.

    Attributes:
        characters (list[str]): Source glyph of each particle
        codes (np.ndarray): Integer character codes, shape (N,)
        positions (np.ndarray): Surface coordinates, shape (N, 2)
        velocities (np.ndarray): Velocities per tick, shape (N, 2)
        norm (np.ndarray): Code mapped from [32, 126] into [0, 1], shape (N,)
        mass (np.ndarray): 0.5 + (1 - norm) * 0.5, shape (N,)
        hue (np.ndarray): norm * 360, shape (N,)
    """

    def __init__(self, characters, positions, velocities):
        n = len(characters)
        self.characters = list(characters)
        self.codes = np.array([ord(ch) for ch in self.characters], dtype=np.int64)
        self.positions = np.asarray(positions, dtype=float).reshape(n, 2)
        self.velocities = np.asarray(velocities, dtype=float).reshape(n, 2)
        self.norm = normalize_codes(self.codes)
        self.mass = 0.5 + (1.0 - self.norm) * 0.5
        self.hue = self.norm * 360.0

        for arr in (self.codes, self.norm, self.mass, self.hue):
            arr.flags.writeable = False

    def __len__(self):
        return len(self.characters)

    @property
    def alpha(self):
        """Render opacity per particle, heavier (lower code) glyphs fainter."""
        return config.BASE_ALPHA + self.norm * config.NORM_ALPHA


def normalize_codes(codes):
    """
    Map character codes linearly from the printable range into [0, 1].

    Args:
        codes (np.ndarray): Integer character codes

    Returns:
        np.ndarray: Normalized codes clamped to [0, 1]
    """
    span = float(config.CODE_MAX - config.CODE_MIN)
    norm = (np.asarray(codes, dtype=float) - config.CODE_MIN) / span
    return np.clip(norm, 0.0, 1.0)


def visible_characters(text):
    """Characters of ``text`` that are not whitespace, in order."""
    return [ch for ch in text if ch.strip()]


def create_particles(text, width, height, rng=None):
    """
    Create one particle per non-whitespace character of ``text``.

    Positions are uniform over the surface. Initial speed is ``norm * 2`` at
    angle ``norm * 2*pi``, so higher codes start faster. A non-positive
    surface extent places every particle at the origin.

    Args:
        text (str): Already sanitized text
        width (float): Surface width
        height (float): Surface height
        rng (np.random.Generator, optional): Random source

    Returns:
        ParticleSet: The new particles
    """
    if rng is None:
        rng = np.random.default_rng()

    chars = visible_characters(text)
    n = len(chars)

    positions = np.zeros((n, 2))
    if width > 0 and height > 0:
        positions[:, 0] = rng.uniform(0.0, width, size=n)
        positions[:, 1] = rng.uniform(0.0, height, size=n)

    norm = normalize_codes([ord(ch) for ch in chars])
    angle = norm * np.pi * 2
    speed = norm * 2
    velocities = np.column_stack((np.cos(angle) * speed, np.sin(angle) * speed))

    return ParticleSet(chars, positions, velocities)
