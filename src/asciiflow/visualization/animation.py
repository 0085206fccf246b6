"""
Host-timer scheduler for interactive runs.

A matplotlib FuncAnimation fires at a fixed interval and runs whichever
frame callbacks were requested since the last firing, in the manner of
``requestAnimationFrame``.
"""

from matplotlib.animation import FuncAnimation

from .. import config
from ..physics.engine import FrameClock


class AnimationScheduler:
    """
    ``request_tick`` provider backed by a FuncAnimation timer.

    Args:
        fig: Matplotlib figure that owns the timer
        interval (int): Milliseconds between timer firings
        artists (callable, optional): Returns the artists changed this frame
    """

    def __init__(self, fig, interval=config.ANIMATION_INTERVAL, artists=None):
        self._pending = {}
        self._next_handle = 0
        self._artists = artists
        self.anim = FuncAnimation(fig, self._on_timer, interval=interval,
                                  blit=False, cache_frame_data=False)

    def request_tick(self, callback):
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_tick(self, handle):
        self._pending.pop(handle, None)

    def _on_timer(self, frame):
        now_ms = FrameClock.now()
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback(now_ms)
        return self._artists() if self._artists is not None else []
