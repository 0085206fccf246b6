"""
Text preparation for the particle simulation.

Provides the default demo text and the sanitizing/truncation step every text
goes through before it is turned into particles.
"""

import re

from .. import config


DEFAULT_TEXT = """The quick brown fox jumps over the lazy dog. Pack my box with five dozen liquor jugs. How vexingly quick daft zebras jump! The five boxing wizards jump quickly. Sphinx of black quartz, judge my vow.

In the beginning was the Word, and the Word was with rhythm, and the Word was rhythm. Every letter carries weight, every character has mass. A dances lightly, Z stomps heavily. Punctuation marks pause and punctuate the flow.

Numbers too have their place: 1234567890. Mathematical symbols add flavor: + - * / = < >. Brackets embrace: () [] {}. Special characters spice things up: ! @ # $ % ^ & * ~

The simulation transforms text into motion. Characters become particles. ASCII values become forces. Similar letters attract, different letters repel. Watch them dance and swirl in perpetual motion.

This is a canvas of moving type, a fluid of glyphs, a symphony of symbols. Every refresh creates new patterns, new emergent behaviors. The alphabet becomes alive, dancing to the rhythm of computational physics.

Welcome to the ASCII Fluid Lab, where text transcends its static nature and flows like water, swirls like smoke, and dances like fire. Type is no longer bound to the page - it floats, it flows, it finds its own path through the digital ether."""

_EXCESS_NEWLINES = re.compile(r'\n{3,}')


def sanitize_text(text, max_chars=None):
    """
    Normalize line endings, collapse long blank runs and limit the length.

    Args:
        text (str): Raw text
        max_chars (int, optional): Truncation limit, defaults to config.MAX_CHARS

    Returns:
        str: Cleaned text of at most ``max_chars`` characters
    """
    if max_chars is None:
        max_chars = config.MAX_CHARS
    cleaned = text.replace('\r\n', '\n')
    cleaned = _EXCESS_NEWLINES.sub('\n\n', cleaned).strip()
    return cleaned[:max(0, max_chars)]


def get_default_text():
    """Return the default demo text, pre-sanitized."""
    return sanitize_text(DEFAULT_TEXT)
