import logging
from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from asciiflow.core.text import DEFAULT_TEXT, get_default_text
from asciiflow.logging_config import setup_logging
from asciiflow.main import InteractiveSession, load_text, main, parse_arguments
from asciiflow.physics.modes import Mode


def test_default_arguments():
    args = parse_arguments([])
    assert args.mode == 'fluid'
    assert args.text is None and args.text_file is None
    assert args.max_chars == 3000
    assert args.frames == 600
    assert not args.headless


def test_text_and_file_are_exclusive():
    with pytest.raises(SystemExit):
        parse_arguments(['--text', 'a', '--text-file', 'b.txt'])


def test_load_text_sources(tmp_path):
    assert load_text(parse_arguments([])) == get_default_text()
    assert load_text(parse_arguments(['--text', 'abcdef', '--max-chars', '3'])) == 'abc'

    path = tmp_path / 'input.txt'
    path.write_text("a\r\nb\n\n\n\nc", encoding='utf-8')
    assert load_text(parse_arguments(['--text-file', str(path)])) == "a\nb\n\nc"


def test_max_chars_limits_default_text():
    text = load_text(parse_arguments(['--max-chars', '100']))
    assert text == DEFAULT_TEXT[:100]
    assert len(text) == 100


def test_max_chars_zero_leaves_nothing_to_animate():
    assert load_text(parse_arguments(['--max-chars', '0'])) is None


def test_setup_logging_reports_level_and_file(tmp_path):
    log_file = tmp_path / 'run.log'
    setup_logging(logging.DEBUG, str(log_file))
    logger = logging.getLogger("asciiflow")
    try:
        assert len(logger.handlers) == 2
        logging.getLogger("asciiflow.main").info("frame saved")
    finally:
        for handler in logger.handlers:
            handler.close()
        setup_logging(logging.WARNING)
    content = log_file.read_text(encoding='utf-8')
    assert f"Logging initialized: level=DEBUG, log file={log_file}" in content
    assert "asciiflow.main - INFO - frame saved" in content


def test_headless_run(caplog):
    with caplog.at_level(logging.INFO, logger="asciiflow"):
        code = main(['--headless', '--frames', '5', '--seed', '1', '--fps', '50',
                     '--text', 'hello world', '--mode', 'swarm'])
    assert code == 0
    assert "Ran 5 ticks in swarm mode: 10 particles" in caplog.text


def test_headless_save(tmp_path):
    out = tmp_path / 'frame.png'
    code = main(['--headless', '--frames', '3', '--seed', '2', '--width', '200', '--height', '120',
                 '--mode', 'weather', '--save', str(out), '--log-level', 'WARNING'])
    assert code == 0
    assert out.exists() and out.stat().st_size > 0


def test_missing_text_file(tmp_path):
    assert main(['--headless', '--text-file', str(tmp_path / 'nope.txt'), '--log-level', 'ERROR']) == 1


def test_blank_text():
    assert main(['--headless', '--text', ' \n\t ', '--log-level', 'ERROR']) == 1


def test_bad_fps():
    assert main(['--headless', '--fps', '0', '--log-level', 'ERROR']) == 2


def test_interactive_session_keys_and_resize():
    args = parse_arguments(['--text', 'abc def', '--seed', '3', '--width', '300', '--height', '200'])
    session = InteractiveSession('abc def', args)
    try:
        first = session.engine
        assert first.mode is Mode.FLUID
        assert len(session.renderer.texts) == 6

        session.on_key(SimpleNamespace(key='2'))
        assert first.disposed
        assert session.engine.mode is Mode.GRAVITY

        second = session.engine
        session.on_key(SimpleNamespace(key='r'))
        assert second.disposed
        assert session.engine.mode is Mode.GRAVITY

        session.on_key(SimpleNamespace(key='x'))
        assert not session.engine.disposed

        session.on_resize(SimpleNamespace(width=150, height=90))
        assert (session.engine.width, session.engine.height) == (150.0, 90.0)
        assert session.renderer.ax.get_ylim() == (90.0, 0.0)

        artists = session.scheduler._on_timer(0)
        assert session.renderer.linecoll in artists
        assert session.scheduler._pending
    finally:
        session.engine.dispose()
        plt.close(session.fig)
