"""Central numerical tolerances and small geometry constants.

This module centralizes tiny numeric thresholds used across the codebase so
they can be tuned consistently and referenced without scattering literals.
"""
from __future__ import annotations

# Geometry tolerances
EPS_AREA: float = 1e-12           # minimum positive (absolute) triangle area
EPS_COLINEAR: float = 1e-15       # near-colinearity threshold for normals / orientation
EPS_LENGTH: float = 1e-20         # guards divisions by edge lengths in angle formulas

# Weight model
MAX_ANGLE_DEG: float = 180.0      # upper bound of any finite angle component
FOLD_ANGLE_DEG: float = 90.0      # normal deviation at which a triangle counts as folded
DEGENERATE_SENTINEL: float = -1.0  # legacy calculator marker for a degenerate component

__all__ = [
    'EPS_AREA',
    'EPS_COLINEAR',
    'EPS_LENGTH',
    'MAX_ANGLE_DEG',
    'FOLD_ANGLE_DEG',
    'DEGENERATE_SENTINEL',
]
