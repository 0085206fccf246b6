"""
Synchronous ``request_tick`` provider.

``SteppingScheduler`` runs frame callbacks only when ``step()`` is called,
advancing a synthetic clock. It drives headless runs and tests; the
interactive window uses ``visualization.animation.AnimationScheduler``.
"""

from .. import config


class SteppingScheduler:
    """
    Holds requested callbacks until the caller steps a frame.

    Args:
        start_ms (float): Initial synthetic timestamp in milliseconds
        frame_ms (float): Time advanced by each ``step()`` by default
    """

    def __init__(self, start_ms=0.0, frame_ms=1000.0 / config.FPS_TARGET):
        self.now_ms = float(start_ms)
        self.frame_ms = float(frame_ms)
        self._pending = {}
        self._next_handle = 0

    @property
    def pending(self):
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_tick(self, callback):
        self._next_handle += 1
        self._pending[self._next_handle] = callback
        return self._next_handle

    def cancel_tick(self, handle):
        self._pending.pop(handle, None)

    def step(self, elapsed_ms=None):
        """
        Advance the clock and run the callbacks requested before this call.

        Args:
            elapsed_ms (float, optional): Time to advance, defaults to ``frame_ms``

        Returns:
            int: Number of callbacks run
        """
        self.now_ms += self.frame_ms if elapsed_ms is None else float(elapsed_ms)
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback(self.now_ms)
        return len(callbacks)

    def run(self, frames, elapsed_ms=None):
        """Step ``frames`` times; stops early when nothing is scheduled."""
        steps = 0
        for _ in range(frames):
            if not self._pending:
                break
            self.step(elapsed_ms)
            steps += 1
        return steps
