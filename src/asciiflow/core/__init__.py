"""
Core data modules for ASCII Fluid Lab.

This module contains text preparation and the particle data structure built
from it.
"""

__all__ = ['text', 'particles']
