"""Chaotic attractor generators and recurrence-based nonlinear signal analysis."""

__version__ = "0.1.0"
__all__ = ["attractors", "rpde", "rqa"]