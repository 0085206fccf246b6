"""
Visualization components for ASCII Fluid Lab.

This module contains all rendering, coloring and display timer functionality.
"""

__all__ = ['animation', 'color_system', 'renderer']
