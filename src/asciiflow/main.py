"""
Command line entry point for ASCII Fluid Lab.

Runs the simulation interactively in a matplotlib window, or headless for a
fixed number of frames (optionally saving the last frame as an image).
"""

import argparse
import logging
import sys

from . import config
from .core.text import DEFAULT_TEXT, sanitize_text
from .logging_config import setup_logging
from .physics.engine import FrameClock, SimulationEngine
from .physics.modes import Mode
from .physics.scheduling import SteppingScheduler
from .visualization.color_system import background_rgba

logger = logging.getLogger(__name__)

MODE_KEYS = {str(i + 1): mode for i, mode in enumerate(Mode)}
RESTART_KEY = 'r'


def parse_arguments(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='ASCII Fluid Lab - text-driven particle simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  asciiflow                                   # Default text, fluid mode
  asciiflow --mode gravity                    # Characters fall and bounce
  asciiflow --text-file notes.txt --seed 7    # Your own text, reproducible
  asciiflow --mode chaos --headless --frames 600 --save last.png

Keys (interactive): 1-5 switch mode, r restarts with the same mode.
        """
    )

    parser.add_argument(
        '--mode', '-m',
        type=str,
        default=Mode.FLUID.value,
        choices=[m.value for m in Mode],
        help='Physics mode (default: fluid)'
    )

    text_group = parser.add_mutually_exclusive_group()
    text_group.add_argument(
        '--text', '-t',
        type=str,
        default=None,
        help='Text to animate (default: built-in demo text)'
    )
    text_group.add_argument(
        '--text-file', '-f',
        type=str,
        default=None,
        help='Read the text to animate from a UTF-8 file'
    )

    parser.add_argument('--max-chars', type=int, default=config.MAX_CHARS,
                        help=f'Truncation limit for the text (default: {config.MAX_CHARS})')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible runs')
    parser.add_argument('--width', type=int, default=config.DEFAULT_WIDTH, help='Surface width in pixels')
    parser.add_argument('--height', type=int, default=config.DEFAULT_HEIGHT, help='Surface height in pixels')
    parser.add_argument('--fps', type=float, default=config.FPS_TARGET, help='Target physics ticks per second')

    parser.add_argument('--headless', action='store_true', help='Run without a window')
    parser.add_argument('--frames', type=int, default=600, help='Frames to run in headless mode (default: 600)')
    parser.add_argument('--save', type=str, default=None, help='Headless: save the last frame to this image file')

    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='Logging level')
    parser.add_argument('--log-file', type=str, default=None, help='Also write logs to this file')

    return parser.parse_args(argv)


def load_text(args):
    """
    Resolve the text to animate from the arguments.

    Returns:
        str or None: Sanitized text, or None when it cannot be used
    """
    if args.text_file:
        try:
            with open(args.text_file, 'r', encoding='utf-8') as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Cannot read text file %s: %s", args.text_file, exc)
            return None
    elif args.text is not None:
        raw = args.text
    else:
        raw = DEFAULT_TEXT

    text = sanitize_text(raw, args.max_chars)
    if not text:
        logger.error("No text content to animate")
        return None
    return text


def run_headless(text, args):
    """Step the engine synchronously for ``args.frames`` frames."""
    scheduler = SteppingScheduler(frame_ms=1000.0 / args.fps)
    engine = SimulationEngine(
        text, args.mode, args.width, args.height,
        seed=args.seed,
        clock=FrameClock(args.fps, start_ms=scheduler.now_ms),
        request_tick=scheduler.request_tick,
        cancel_tick=scheduler.cancel_tick,
    )
    engine.start()
    scheduler.run(args.frames)

    logger.info("Ran %d ticks in %s mode: %d particles, mean squared speed %.4f",
                engine.tick_count, engine.mode.value, engine.particle_count, engine.mean_squared_speed())

    if args.save:
        save_frame(engine, args.save)

    engine.dispose()
    return 0


def save_frame(engine, path):
    """Render the engine's current state to an image file."""
    from matplotlib.figure import Figure
    from .visualization.renderer import TextRenderer

    dpi = 100
    fig = Figure(figsize=(max(engine.width, 1) / dpi, max(engine.height, 1) / dpi), dpi=dpi,
                 facecolor=background_rgba())
    ax = fig.add_axes([0, 0, 1, 1])
    renderer = TextRenderer(ax, engine.width, engine.height)
    renderer.draw(engine.render_states())
    fig.savefig(path, dpi=dpi, facecolor=background_rgba())
    logger.info("Saved frame to %s", path)


class InteractiveSession:
    """
    Window, renderer, timer and the current engine.

    Mode switches and restarts dispose the running engine before building a
    new one, so a stale timer callback can never touch the new state.
    """

    def __init__(self, text, args):
        import matplotlib.pyplot as plt
        from .visualization.animation import AnimationScheduler
        from .visualization.renderer import TextRenderer

        self.text = text
        self.args = args
        self.width = args.width
        self.height = args.height

        dpi = 100
        self.fig = plt.figure(figsize=(self.width / dpi, self.height / dpi), dpi=dpi,
                              facecolor=background_rgba())
        self.fig.canvas.manager.set_window_title(config.WINDOW_TITLE)
        self.ax = self.fig.add_axes([0, 0, 1, 1])
        self.renderer = TextRenderer(self.ax, self.width, self.height)
        self.scheduler = AnimationScheduler(self.fig, artists=self._artists)
        self.engine = None

        self.fig.canvas.mpl_connect('key_press_event', self.on_key)
        self.fig.canvas.mpl_connect('resize_event', self.on_resize)
        self.restart(args.mode)

    def _artists(self):
        return [self.renderer.linecoll] + self.renderer.texts

    def restart(self, mode=None):
        """Dispose the running engine and start a new one."""
        if self.engine is not None:
            mode = mode or self.engine.mode
            self.engine.dispose()
        self.renderer.clear()
        self.engine = SimulationEngine(
            self.text, mode, self.width, self.height,
            seed=self.args.seed,
            clock=FrameClock(self.args.fps),
            request_tick=self.scheduler.request_tick,
            cancel_tick=self.scheduler.cancel_tick,
            on_frame=self.on_frame,
        )
        self.renderer.bind(self.engine.render_states())
        self.engine.start()

    def on_frame(self, engine):
        self.renderer.draw(engine.render_states())

    def on_key(self, event):
        if event.key in MODE_KEYS:
            logger.info("Switching to %s mode", MODE_KEYS[event.key].value)
            self.restart(MODE_KEYS[event.key])
        elif event.key == RESTART_KEY:
            self.restart()

    def on_resize(self, event):
        if event.width <= 0 or event.height <= 0:
            return
        self.width, self.height = event.width, event.height
        self.engine.resize(self.width, self.height)
        self.renderer.set_extent(self.width, self.height)

    def show(self):
        import matplotlib.pyplot as plt
        plt.show()
        if self.engine is not None:
            self.engine.dispose()


def main(argv=None):
    """Main function orchestrating the simulation run."""
    args = parse_arguments(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    if args.fps <= 0:
        logger.error("--fps must be positive")
        return 2

    text = load_text(args)
    if text is None:
        return 1

    if args.headless:
        return run_headless(text, args)

    session = InteractiveSession(text, args)
    session.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
