"""Particle life: typed particles under asymmetric pairwise attraction rules."""

__version__ = "0.1.0"
