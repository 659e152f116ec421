"""Optimal triangulation of a hole boundary with interior islands.

The search follows the classic weight-minimal polygon triangulation
recursion, extended so that islands (closed interior polylines) are woven
into the triangulation instead of skipped. For a domain with access edge
``(i, k)`` every candidate closes the access edge with a triangle
``(i, x, k)``:

- case 1, ``x`` is an island vertex: the island is merged into the boundary
  through ``x`` (both traversal orientations are tried);
- case 2, ``x`` is an interior boundary vertex: the boundary is split at
  ``x`` and every left/right assignment of the remaining islands is tried.

Weights are ``(angle, area)`` pairs compared lexicographically; a branch
that cannot be completed carries ``INVALID_WEIGHT`` instead of raising.

Example
-------
    tri = IslandTriangulator(points, islands, PlanarAngleAreaCalculator())
    result = tri.triangulate(Domain(boundary, islands))
"""
from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import IslandFillConfig
from .domain import (Domain, check_partition, enumerate_partitions,
                     merge_island_at, split_boundary_at)
from .logging_utils import get_logger
from .stats import SearchStats, format_stats_table
from .weights import INVALID_WEIGHT, ZERO_WEIGHT, Weight, measure_to_weight

__all__ = [
    'IslandTriangulator', 'TriangulationResult', 'SearchBudgetExceeded',
    'dedupe_triangles', 'Triangle',
]

logger = get_logger('holefill.island_triangulation')

Triangle = Tuple[int, int, int]
Tracer = Callable[[str, dict], None]


class SearchBudgetExceeded(RuntimeError):
    """Raised when a search exceeds ``max_calls`` or ``time_limit``."""


@dataclass
class TriangulationResult:
    weight: Weight
    triangles: List[Triangle]
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def success(self) -> bool:
        return self.weight.is_valid


def dedupe_triangles(triangles: Sequence[Triangle]) -> Tuple[List[Triangle], int]:
    """Drop triangles repeating an earlier one as a vertex set; keeps order."""
    seen = set()
    out: List[Triangle] = []
    for t in triangles:
        key = tuple(sorted(t))
        if key in seen:
            continue
        seen.add(key)
        out.append(tuple(t))
    return out, len(triangles) - len(out)


class IslandTriangulator:
    """Recursive optimizer over case-1 merges and case-2 splits.

    Parameters
    ----------
    points : indexable
        Shared, read-only vertex positions; only handed to the calculator.
    islands : sequence of sequences of int
        The ORIGINAL island polylines. Triangles with all three vertices on
        one of them are invalid regardless of later merges.
    weight_calculator : callable
        ``calculator(points, i, m, k)``, see :mod:`holefill.core.weights`.
    config : IslandFillConfig, optional
    tracer : callable, optional
        ``tracer(event, payload)`` observer for merge/split/partition events.
    """

    def __init__(self, points, islands: Sequence[Sequence[int]], weight_calculator,
                 config: Optional[IslandFillConfig] = None, tracer: Optional[Tracer] = None):
        self.points = points
        self.weight_calculator = weight_calculator
        self.config = (config or IslandFillConfig()).validate()
        self.tracer = tracer
        self.stats = SearchStats()
        self._membership: Dict[int, frozenset] = {}
        for h, island in enumerate(islands):
            for v in island:
                self._membership[int(v)] = self._membership.get(int(v), frozenset()) | {h}
        self._memo: Dict[tuple, Tuple[Weight, Tuple[Triangle, ...]]] = {}
        self._weights: Dict[Triangle, Weight] = {}
        self._deadline: Optional[float] = None
        self._active = False

    # ---------------- public API ----------------

    def reset(self) -> None:
        self._memo.clear()
        self._weights.clear()
        self.stats.reset()

    def triangle_weight(self, i: int, m: int, k: int) -> Weight:
        key = (i, m, k)
        w = self._weights.get(key)
        if w is None:
            if self._on_one_island(i, m, k):
                w = INVALID_WEIGHT
            else:
                w = measure_to_weight(self.weight_calculator(self.points, i, m, k))
                self.stats.weights_computed += 1
            self._weights[key] = w
        return w

    def solve(self, domain: Domain, access_edge: Optional[Tuple[int, int]] = None) -> Tuple[Weight, List[Triangle]]:
        """Best weight and triangles for ``domain`` (memo and stats are kept)."""
        if access_edge is not None and tuple(access_edge) != domain.access_edge:
            raise ValueError(f"access edge {tuple(access_edge)} does not match domain ends {domain.access_edge}")
        if self._active:
            weight, tris = self._solve(domain)
            return weight, list(tris)
        self._active = True
        old_limit = sys.getrecursionlimit()
        if old_limit < self.config.recursion_limit:
            sys.setrecursionlimit(self.config.recursion_limit)
        if self.config.time_limit is not None:
            self._deadline = time.perf_counter() + self.config.time_limit
        try:
            weight, tris = self._solve(domain)
        finally:
            self._active = False
            self._deadline = None
            sys.setrecursionlimit(old_limit)
        return weight, list(tris)

    def triangulate(self, domain: Domain) -> TriangulationResult:
        """Fresh search on ``domain``; de-duplicates and logs a summary."""
        self.reset()
        t0 = time.perf_counter()
        try:
            weight, tris = self.solve(domain)
        finally:
            self.stats.time_total = time.perf_counter() - t0
        if self.config.dedupe_triangles:
            tris, removed = dedupe_triangles(tris)
            if removed:
                self.stats.duplicates_removed = removed
                logger.warning("removed %d duplicate triangle(s) from the reconstruction", removed)
        if weight.is_valid:
            logger.info("island triangulation: weight=(%.4f, %.6g) triangles=%d calls=%d memo_hits=%d time_ms=%.2f",
                        weight.angle, weight.area, len(tris), self.stats.calls, self.stats.memo_hits,
                        1000.0 * self.stats.time_total)
        else:
            logger.info("island triangulation: no valid triangulation (calls=%d time_ms=%.2f)",
                        self.stats.calls, 1000.0 * self.stats.time_total)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("search stats:\n%s", format_stats_table(self.stats.to_dict()))
        return TriangulationResult(weight, tris, self.stats)

    # ---------------- recursion ----------------

    def _solve(self, domain: Domain) -> Tuple[Weight, Tuple[Triangle, ...]]:
        self.stats.calls += 1
        self._check_budget()
        i, k = domain.access_edge
        if i == k:
            return INVALID_WEIGHT, ()
        if domain.is_empty():
            # islands handed to an empty domain would be lost
            return (INVALID_WEIGHT if domain.has_islands() else ZERO_WEIGHT), ()
        if len(domain) == 3 and not domain.has_islands():
            m = domain.boundary_ids[1]
            self.stats.base_triangles += 1
            return self.triangle_weight(i, m, k), ((i, m, k),)
        if self.config.memoize:
            hit = self._memo.get(domain.key)
            if hit is not None:
                self.stats.memo_hits += 1
                return hit
        result = self._search(domain, i, k)
        if self.config.memoize:
            self._memo[domain.key] = result
        return result

    def _search(self, domain: Domain, i: int, k: int) -> Tuple[Weight, Tuple[Triangle, ...]]:
        best: Weight = INVALID_WEIGHT
        best_tris: Tuple[Triangle, ...] = ()

        # case 1: bridge (i, v, k) to an island vertex v and merge the island
        for h, island in enumerate(domain.islands):
            for v in island:
                t_w = self._closing_weight(i, v, k, best)
                if t_w is None:
                    continue
                forward, backward = merge_island_at(domain, h, v)
                self.stats.case1_merges += 1
                self._trace('merge', boundary=domain.boundary_ids, island=domain.islands[h], bridge=v)
                w_f, tris_f = self._solve(forward)
                w_b, tris_b = self._solve(backward)
                sub_w, sub_tris = (w_b, tris_b) if w_b < w_f else (w_f, tris_f)
                w = sub_w + t_w
                if w.is_valid and w < best:
                    best, best_tris = w, sub_tris + ((i, v, k),)
                    self._improved(domain, best, 'merge', v)

        # case 2: split the boundary at an interior vertex p
        n = len(domain)
        if n == 3 and domain.has_islands():
            # both halves would be empty and the islands lost
            self._trace('dead_end', boundary=domain.boundary_ids, islands=domain.islands)
            return best, best_tris
        partitions = None
        if domain.has_islands():
            partitions = enumerate_partitions(domain.islands)
            for left_ids, right_ids in partitions:
                check_partition(left_ids, right_ids, len(domain.islands))
        for pos in range(1, n - 1):
            p = domain.boundary_ids[pos]
            t_w = self._closing_weight(i, p, k, best)
            if t_w is None:
                continue
            left, right = split_boundary_at(domain, pos)
            self.stats.case2_splits += 1
            self._trace('split', boundary=domain.boundary_ids, pivot=p, position=pos)
            if partitions is None:
                candidates = iter(((left, right),))
            else:
                candidates = self._distribute(domain, left, right, partitions)
            for d_left, d_right in candidates:
                if self.config.prune_by_bound and t_w.angle > best.angle:
                    self.stats.pruned_bound += 1
                    break
                w_left, tris_left = self._solve(d_left)
                if self.config.prune_invalid and not w_left.is_valid:
                    continue
                w_right, tris_right = self._solve(d_right)
                w = w_left + w_right + t_w
                if w.is_valid and w < best:
                    best, best_tris = w, tris_left + tris_right + ((i, p, k),)
                    self._improved(domain, best, 'split', p)
        return best, best_tris

    def _distribute(self, domain: Domain, left: Domain, right: Domain, partitions) -> Iterator[Tuple[Domain, Domain]]:
        for left_ids, right_ids in partitions:
            d_left = left.add_islands(domain, left_ids)
            d_right = right.add_islands(domain, right_ids)
            if (d_left.is_empty() and d_left.has_islands()) or (d_right.is_empty() and d_right.has_islands()):
                self.stats.partitions_skipped += 1
                continue
            self.stats.partitions_evaluated += 1
            self._trace('partition', boundary=domain.boundary_ids,
                        left=d_left.islands, right=d_right.islands)
            yield d_left, d_right

    def _closing_weight(self, i: int, x: int, k: int, best: Weight) -> Optional[Weight]:
        t_w = self.triangle_weight(i, x, k)
        if self.config.prune_invalid and not t_w.is_valid:
            self.stats.pruned_invalid += 1
            return None
        if self.config.prune_by_bound and t_w.angle > best.angle:
            self.stats.pruned_bound += 1
            return None
        return t_w

    # ---------------- helpers ----------------

    def _on_one_island(self, i: int, m: int, k: int) -> bool:
        a = self._membership.get(i); b = self._membership.get(m); c = self._membership.get(k)
        if not a or not b or not c:
            return False
        if self.config.island_exclusion == 'any_island':
            return True
        return bool(a & b & c)

    def _check_budget(self) -> None:
        if self.config.max_calls is not None and self.stats.calls > self.config.max_calls:
            raise SearchBudgetExceeded(f"search exceeded max_calls={self.config.max_calls}")
        if self._deadline is not None and time.perf_counter() > self._deadline:
            raise SearchBudgetExceeded(f"search exceeded time_limit={self.config.time_limit}s")

    def _trace(self, event: str, **payload) -> None:
        if self.tracer is not None:
            self.tracer(event, payload)
        if self.config.trace and logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s %s", event, payload)

    def _improved(self, domain: Domain, best: Weight, how: str, vertex: int) -> None:
        self.stats.improvements += 1
        self._trace('improve', boundary=domain.boundary_ids, weight=(best.angle, best.area), via=how, vertex=vertex)
