"""Hole filling driver and mesh materializer.

``fill_hole_with_islands`` validates an index-based hole description, picks a
default weight calculator from the point dimension, runs the island
triangulator and reports the outcome as a :class:`HoleFillResult`.
``build_mesh`` turns the resulting triangle soup into a checked
:class:`TriangleMesh`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .config import IslandFillConfig
from .conformity import check_mesh_conformity, edge_counts, triangle_areas
from .constants import EPS_AREA
from .domain import Domain
from .geometry import newell_normal, polygon_signed_area
from .island_triangulation import IslandTriangulator, SearchBudgetExceeded, Triangle
from .logging_utils import configure_logging, get_logger
from .stats import SearchStats
from .weights import (INVALID_WEIGHT, DihedralAreaCalculator, PlanarAngleAreaCalculator,
                      Weight)

__all__ = [
    'TriangleMesh', 'build_mesh', 'HoleFillResult', 'expected_triangle_count',
    'default_weight_calculator', 'fill_hole_with_islands', 'fill_hole_from_polylines',
]

logger = get_logger('holefill.hole_filling')


@dataclass
class TriangleMesh:
    points: np.ndarray
    triangles: np.ndarray

    @property
    def n_triangles(self) -> int:
        return int(self.triangles.shape[0])

    def edges(self) -> np.ndarray:
        return edge_counts(self.triangles)[0]

    def boundary_edges(self) -> np.ndarray:
        """Edges used by exactly one triangle."""
        uniq, counts = edge_counts(self.triangles)
        return uniq[counts == 1]

    def area(self) -> float:
        return float(np.sum(np.abs(triangle_areas(self.points, self.triangles))))


def build_mesh(points, triangles, check: bool = True) -> TriangleMesh:
    """Materialize a triangle soup over ``points`` as a :class:`TriangleMesh`.

    Raises ValueError when ``check`` is set and the soup is not conforming.
    """
    pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
    tris = np.ascontiguousarray(np.asarray(list(triangles), dtype=np.int32).reshape(-1, 3))
    if check:
        ok, msgs = check_mesh_conformity(pts, tris)
        if not ok:
            raise ValueError("triangle soup is not a conforming mesh: " + "; ".join(msgs))
    return TriangleMesh(pts, tris)


@dataclass
class HoleFillResult:
    success: bool
    weight: Weight
    triangles: List[Triangle]
    stats: SearchStats = field(default_factory=SearchStats)
    message: str = ''
    points: Optional[np.ndarray] = None
    boundary: Tuple[int, ...] = ()
    islands: Tuple[Tuple[int, ...], ...] = ()

    def to_mesh(self, points=None) -> TriangleMesh:
        if not self.success:
            raise ValueError(f"cannot build a mesh from a failed hole filling: {self.message}")
        pts = self.points if points is None else points
        if pts is None:
            raise ValueError("no points available to build the mesh")
        return build_mesh(pts, self.triangles)


def expected_triangle_count(n_boundary: int, island_sizes: Iterable[int] = ()) -> int:
    """Triangles in any triangulation of a polygon with the given holes (Euler)."""
    sizes = list(island_sizes)
    return n_boundary + sum(sizes) + 2 * len(sizes) - 2


def default_weight_calculator(points, boundary: Sequence[int]):
    """Orientation-aware calculator for 2D points, normal-based one for 3D points."""
    pts = np.asarray(points, dtype=np.float64)
    ring = pts[list(boundary)]
    if pts.shape[1] == 2:
        area = polygon_signed_area(ring)
        if abs(area) <= EPS_AREA:
            raise ValueError("hole boundary encloses no area")
        return PlanarAngleAreaCalculator(orientation=np.sign(area))
    normal = newell_normal(ring)
    if not np.any(normal):
        raise ValueError("hole boundary has no well-defined normal")
    return DihedralAreaCalculator(normal)


def _open_cycle(ids: Sequence[int], what: str) -> Tuple[int, ...]:
    cycle = tuple(int(v) for v in ids)
    if len(cycle) > 1 and cycle[0] == cycle[-1]:
        cycle = cycle[:-1]
    if len(set(cycle)) != len(cycle):
        raise ValueError(f"{what} {list(cycle)} repeats a vertex")
    return cycle


def _validate_hole(n_points: int, boundary, islands) -> Tuple[Tuple[int, ...], Tuple[Tuple[int, ...], ...]]:
    b = _open_cycle(boundary, 'boundary')
    if len(b) < 3:
        raise ValueError(f"boundary needs at least 3 distinct vertices, got {list(b)}")
    hs = tuple(_open_cycle(h, 'island') for h in islands)
    used = set(b)
    for h in hs:
        if len(h) < 2:
            raise ValueError(f"island needs at least 2 vertices, got {list(h)}")
        if used & set(h):
            raise ValueError(f"island {list(h)} shares vertices {sorted(used & set(h))} with the boundary or another island")
        used |= set(h)
    if min(used) < 0 or max(used) >= n_points:
        raise ValueError(f"vertex indices must lie in [0, {n_points}), got range [{min(used)}, {max(used)}]")
    return b, hs


def fill_hole_with_islands(points, boundary: Sequence[int], islands: Sequence[Sequence[int]] = (),
                           weight_calculator=None, config: Optional[IslandFillConfig] = None,
                           tracer=None) -> HoleFillResult:
    """Triangulate the hole bounded by ``boundary`` around the given islands.

    Parameters
    ----------
    points : (N, 2) or (N, 3) array-like
    boundary : sequence of int
        Closed vertex cycle of the hole (a trailing copy of the first vertex
        is ignored). The access edge is ``(boundary[0], boundary[-1])``.
    islands : sequence of sequences of int
        Closed interior polylines to weave into the triangulation.
    weight_calculator : callable, optional
        Defaults to :func:`default_weight_calculator`.

    Returns
    -------
    HoleFillResult
        ``success`` is False when no legal triangulation exists or the
        search budget ran out; the caller should not retry.
    """
    cfg = (config or IslandFillConfig()).validate()
    if cfg.log_level is not None:
        configure_logging(cfg.log_level)
    pts = np.asarray(points, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] not in (2, 3):
        raise ValueError(f"points must have shape (N, 2) or (N, 3), got {pts.shape}")
    b, hs = _validate_hole(len(pts), boundary, islands)
    calc = weight_calculator if weight_calculator is not None else default_weight_calculator(pts, b)
    logger.debug("filling hole: boundary=%d vertices islands=%s calculator=%r",
                 len(b), [len(h) for h in hs], calc)

    triangulator = IslandTriangulator(pts, hs, calc, cfg, tracer=tracer)
    try:
        res = triangulator.triangulate(Domain(b, hs))
    except SearchBudgetExceeded as e:
        logger.warning("hole filling aborted: %s", e)
        return HoleFillResult(False, INVALID_WEIGHT, [], triangulator.stats, str(e), pts, b, hs)
    if not res.success:
        msg = "no valid triangulation connects the boundary and its islands"
        logger.warning("hole filling failed: %s", msg)
        return HoleFillResult(False, res.weight, [], res.stats, msg, pts, b, hs)
    expected = expected_triangle_count(len(b), [len(h) for h in hs])
    if len(res.triangles) != expected:
        logger.warning("hole filling produced %d triangles, expected %d", len(res.triangles), expected)
    return HoleFillResult(True, res.weight, res.triangles, res.stats, 'ok', pts, b, hs)


def fill_hole_from_polylines(boundary_points, island_points: Sequence = (), **kwargs) -> HoleFillResult:
    """Coordinate-based front end: stacks the polylines into one point array.

    Boundary vertices get indices ``0..n-1``, then each island in order.
    The result keeps the stacked points for :meth:`HoleFillResult.to_mesh`.
    """
    def _open(poly):
        arr = np.asarray(poly, dtype=np.float64)
        if arr.shape[0] > 1 and np.array_equal(arr[0], arr[-1]):
            arr = arr[:-1]
        return arr

    rings = [_open(boundary_points)] + [_open(h) for h in island_points]
    dims = {r.shape[1] for r in rings if r.ndim == 2}
    if len(dims) != 1 or any(r.ndim != 2 for r in rings):
        raise ValueError("boundary and islands must be (n, 2) or (n, 3) polylines of one dimension")
    pts = np.vstack(rings)
    ids, start = [], 0
    for r in rings:
        ids.append(list(range(start, start + r.shape[0])))
        start += r.shape[0]
    return fill_hole_with_islands(pts, ids[0], ids[1:], **kwargs)
