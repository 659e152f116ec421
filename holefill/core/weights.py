"""Weight model for island-aware hole filling.

A candidate triangulation is ranked by a pair ``(angle, area)`` compared
lexicographically: the worst angle measure first, the total area as the
tie-break. Two independent sub-triangulations combine with ``+`` into
``(max(angle), sum(area))``.

Per-triangle measures come from a weight calculator, any callable
``calculator(points, i, m, k)``. It returns a tagged result
(:class:`TriangleMeasure` or :class:`DegenerateTriangle`) or, for legacy
calculators, a plain ``(angle, area)`` pair where ``-1`` marks a degenerate
component. :func:`measure_to_weight` converts both forms so the optimizer
never sees the ``-1`` convention.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

import numpy as np

from .constants import DEGENERATE_SENTINEL, EPS_AREA, FOLD_ANGLE_DEG, MAX_ANGLE_DEG
from .geometry import angle_between, triangle_angles, triangle_area, triangle_normal

__all__ = [
    'Weight', 'INVALID_WEIGHT', 'ZERO_WEIGHT', 'combine',
    'TriangleMeasure', 'DegenerateTriangle', 'measure_to_weight',
    'WeightCalculator', 'PlanarAngleAreaCalculator', 'DihedralAreaCalculator',
]


@dataclass(frozen=True, order=True)
class Weight:
    angle: float
    area: float

    @property
    def is_valid(self) -> bool:
        return math.isfinite(self.angle) and math.isfinite(self.area)

    def __add__(self, other: 'Weight') -> 'Weight':
        if not isinstance(other, Weight):
            return NotImplemented
        return Weight(max(self.angle, other.angle), self.area + other.area)


INVALID_WEIGHT = Weight(math.inf, math.inf)
ZERO_WEIGHT = Weight(0.0, 0.0)


def combine(w1: Weight, w2: Weight) -> Weight:
    """Weight of two independent sub-triangulations taken together."""
    return w1 + w2


@dataclass(frozen=True)
class TriangleMeasure:
    angle: float
    area: float


@dataclass(frozen=True)
class DegenerateTriangle:
    reason: str = 'degenerate'


MeasureResult = Union[TriangleMeasure, DegenerateTriangle, Sequence[float]]
WeightCalculator = Callable[[Any, int, int, int], MeasureResult]


def _legacy_component(value: float) -> float:
    value = float(value)
    if value == DEGENERATE_SENTINEL:
        return math.inf
    return value


def measure_to_weight(result: MeasureResult) -> Weight:
    """Convert a calculator result into a :class:`Weight`.

    ``DegenerateTriangle`` maps to ``INVALID_WEIGHT``; in a legacy pair each
    ``-1`` component independently becomes ``+inf``. A finite angle outside
    ``[0, MAX_ANGLE_DEG]`` is a calculator bug and raises ``ValueError``.
    """
    if isinstance(result, DegenerateTriangle):
        return INVALID_WEIGHT
    if isinstance(result, Weight):
        return result
    if isinstance(result, TriangleMeasure):
        w = Weight(float(result.angle), float(result.area))
    else:
        angle, area = result
        w = Weight(_legacy_component(angle), _legacy_component(area))
    if math.isfinite(w.angle) and not 0.0 <= w.angle <= MAX_ANGLE_DEG:
        raise ValueError(f"calculator angle {w.angle} outside [0, {MAX_ANGLE_DEG}] degrees")
    return w


class PlanarAngleAreaCalculator:
    """Largest interior angle and area of a 2D triangle.

    ``orientation`` is the sign of the hole boundary's signed area. Every
    triangle the optimizer proposes is ordered like the boundary, so a
    triangle whose area signed by ``orientation`` is not above ``EPS_AREA``
    is inverted or flat and reported as degenerate.
    """

    def __init__(self, orientation: float = 1.0, min_area: float = EPS_AREA):
        self.orientation = 1.0 if orientation >= 0 else -1.0
        self.min_area = float(min_area)

    def __call__(self, points, i: int, m: int, k: int) -> MeasureResult:
        p0 = points[i]; p1 = points[m]; p2 = points[k]
        area = self.orientation * triangle_area(p0, p1, p2)
        if area <= self.min_area:
            return DegenerateTriangle('inverted' if area < 0 else 'flat')
        return TriangleMeasure(max(triangle_angles(p0, p1, p2)), area)

    def __repr__(self):
        return f'PlanarAngleAreaCalculator(orientation={self.orientation:+.0f})'


class DihedralAreaCalculator:
    """Normal deviation and area of a 3D triangle.

    The angle is measured between the triangle normal and ``reference_normal``
    (typically the Newell normal of the hole boundary). Triangles at or past
    ``FOLD_ANGLE_DEG`` face away from the hole and count as degenerate.
    """

    def __init__(self, reference_normal, min_area: float = EPS_AREA):
        n = np.asarray(reference_normal, dtype=np.float64)
        norm = float(np.linalg.norm(n))
        if n.shape != (3,) or norm == 0.0:
            raise ValueError(f"reference_normal must be a non-zero 3-vector, got {reference_normal!r}")
        self.reference_normal = n / norm
        self.min_area = float(min_area)

    def __call__(self, points, i: int, m: int, k: int) -> MeasureResult:
        normal, area = triangle_normal(points[i], points[m], points[k])
        if area <= self.min_area:
            return DegenerateTriangle('flat')
        deviation = angle_between(normal, self.reference_normal)
        if deviation >= FOLD_ANGLE_DEG:
            return DegenerateTriangle('folded')
        return TriangleMeasure(deviation, area)

    def __repr__(self):
        return f'DihedralAreaCalculator(reference_normal={self.reference_normal.tolist()})'
