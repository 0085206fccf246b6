"""
Matplotlib render sink for the particle simulation.

Draws every particle's glyph at its position in its hue, with a short fading
trail built from the last few positions (a single LineCollection for all
particles). Trails come from these position histories rather than from
painting a translucent background fill over the previous frame, so the axes
are fully redrawn each frame and the background stays opaque.
"""

import numpy as np
from matplotlib.collections import LineCollection

from .. import config
from .color_system import background_rgba, particle_colors, trail_alpha_factors


class TextRenderer:
    """Draws render states onto a matplotlib Axes in screen orientation."""

    def __init__(self, ax, width, height, tail_length=config.TAIL_LENGTH,
                 font_size=config.FONT_SIZE, font_family=config.FONT_FAMILY):
        """
        Args:
            ax: Matplotlib axes to draw into
            width, height (float): Surface extent in pixels
            tail_length (int): Number of trail segments per particle
            font_size (float): Glyph size in points
            font_family (str): Glyph font family
        """
        self.ax = ax
        self.tail_length = max(1, int(tail_length))
        self.font_size = font_size
        self.font_family = font_family

        self.texts = []
        self.colors = np.zeros((0, 4))
        self.histories = np.zeros((0, self.tail_length + 1, 2))
        self.alpha_factors = trail_alpha_factors(self.tail_length)

        self.linecoll = LineCollection([], linewidths=config.TRAIL_LINEWIDTH, zorder=2)
        ax.add_collection(self.linecoll)

        ax.set_facecolor(background_rgba())
        ax.set_axis_off()
        self.set_extent(width, height)

    def set_extent(self, width, height):
        """Match the axes to the surface; y grows downward like a canvas."""
        self.width = float(width)
        self.height = float(height)
        self.ax.set_xlim(0, max(self.width, 1.0))
        self.ax.set_ylim(max(self.height, 1.0), 0)

    def bind(self, states):
        """Replace all glyph artists with one per render state."""
        for text in self.texts:
            text.remove()
        self.texts = []

        n = len(states)
        hues = [s.hue for s in states]
        alphas = [s.alpha for s in states]
        self.colors = particle_colors(hues, alphas)

        for state, color in zip(states, self.colors):
            self.texts.append(self.ax.text(
                state.x, state.y, state.character,
                color=tuple(color), fontsize=self.font_size, family=self.font_family,
                ha='center', va='center', zorder=3,
            ))

        positions = np.array([[s.x, s.y] for s in states], dtype=float).reshape(n, 2)
        self.histories = np.repeat(positions[:, None, :], self.tail_length + 1, axis=1)

    def draw(self, states):
        """
        Update glyphs and trails for a new frame.

        Args:
            states (list[RenderState]): Per-particle drawing state

        Returns:
            list: Artists changed this frame
        """
        if len(states) != len(self.texts):
            self.bind(states)

        his = self.histories
        n = len(states)
        positions = np.array([[s.x, s.y] for s in states], dtype=float).reshape(n, 2)

        # Shift history
        his[:, :-1, :] = his[:, 1:, :]
        his[:, -1, :] = positions

        for text, (x, y) in zip(self.texts, positions):
            text.set_position((x, y))

        self._update_trails()
        return [self.linecoll] + self.texts

    def _update_trails(self):
        his = self.histories
        n = len(his)
        tail = self.tail_length
        segments = np.stack((his[:, :-1, :], his[:, 1:, :]), axis=2).reshape(n * tail, 2, 2)

        rgba = np.repeat(self.colors, tail, axis=0)
        rgba[:, 3] *= config.TRAIL_ALPHA * np.tile(self.alpha_factors, n)

        # Hide segments that span a wrap-around or re-entry jump
        jump = np.abs(segments[:, 1, :] - segments[:, 0, :])
        wrapped = (jump[:, 0] > self.width / 2) | (jump[:, 1] > self.height / 2)
        rgba[wrapped, 3] = 0.0

        self.linecoll.set_segments(segments)
        self.linecoll.set_colors(rgba)

    def clear(self):
        """Remove all glyphs and trails (engine reset)."""
        self.bind([])
        self.linecoll.set_segments([])
