"""
Physics simulation components for ASCII Fluid Lab.

This module contains the force models, integrator, boundary policies and the
engine that ties them together.
"""

__all__ = ['boundary', 'context', 'engine', 'forces', 'integrator', 'modes', 'scheduling', 'vortex']
