"""Domains, island partitions and the two splitting rules.

A :class:`Domain` is the boundary polyline of a sub-problem (vertex indices,
first and last element form the access edge) plus the island polylines not
yet merged into it. Domains are immutable; the splitting functions return
new domains.

- ``split_boundary_at`` (case 2) cuts the boundary at an interior position.
- ``merge_island_at`` (case 1) splices an island into the boundary through a
  bridge vertex, once per traversal orientation.
"""
from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Sequence, Tuple

__all__ = [
    'Domain', 'enumerate_partitions', 'check_partition',
    'rotate_island', 'split_boundary_at', 'merge_island_at',
]

Ids = Tuple[int, ...]
Partition = Tuple[Ids, Ids]


@dataclass(frozen=True)
class Domain:
    boundary_ids: Ids
    islands: Tuple[Ids, ...] = ()

    def __post_init__(self):
        boundary = tuple(int(v) for v in self.boundary_ids)
        if len(boundary) < 2:
            raise ValueError(f"domain boundary needs at least 2 vertices, got {list(boundary)}")
        islands = tuple(tuple(int(v) for v in h) for h in self.islands)
        for h in islands:
            if not h:
                raise ValueError("empty island polyline")
            if len(h) > 1 and h[0] == h[-1]:
                raise ValueError(f"island {list(h)} repeats its first vertex; pass it without the closing copy")
        object.__setattr__(self, 'boundary_ids', boundary)
        object.__setattr__(self, 'islands', islands)

    def __len__(self):
        return len(self.boundary_ids)

    @property
    def access_edge(self) -> Tuple[int, int]:
        return self.boundary_ids[0], self.boundary_ids[-1]

    @property
    def key(self):
        return self.boundary_ids, self.islands

    def is_empty(self) -> bool:
        return len(self.boundary_ids) == 2

    def has_islands(self) -> bool:
        return bool(self.islands)

    def clear_islands(self) -> 'Domain':
        return Domain(self.boundary_ids)

    def with_islands(self, islands: Iterable[Sequence[int]]) -> 'Domain':
        return Domain(self.boundary_ids, tuple(tuple(h) for h in islands))

    def add_hole(self, ids: Sequence[int]) -> 'Domain':
        return Domain(self.boundary_ids, self.islands + (tuple(ids),))

    def add_islands(self, source: 'Domain', island_ids: Iterable[int]) -> 'Domain':
        """Return a copy carrying ``source.islands[j]`` for each ``j`` in ``island_ids``."""
        if self.islands:
            raise ValueError("add_islands on a domain that already has islands")
        picked = []
        for j in island_ids:
            if not 0 <= j < len(source.islands):
                raise ValueError(f"island index {j} out of range for {len(source.islands)} islands")
            picked.append(source.islands[j])
        return Domain(self.boundary_ids, tuple(picked))


def enumerate_partitions(islands: Sequence) -> List[Partition]:
    """All ways to send each island to the left or the right sub-domain.

    Returns ``2**m`` ``(left, right)`` pairs of island indices for ``m``
    islands, ordered by the size of the left subset and then
    lexicographically. With no islands the single pair ``((), ())``.
    """
    all_ids = tuple(range(len(islands)))
    partitions: List[Partition] = []
    for s in range(len(all_ids) + 1):
        for left in combinations(all_ids, s):
            chosen = set(left)
            right = tuple(j for j in all_ids if j not in chosen)
            partitions.append((left, right))
    return partitions


def check_partition(left: Sequence[int], right: Sequence[int], n_islands: int) -> None:
    l = set(left); r = set(right)
    if len(l) != len(left) or len(r) != len(right) or l & r:
        raise ValueError(f"partition {tuple(left)} | {tuple(right)} repeats an island")
    if l | r != set(range(n_islands)):
        raise ValueError(f"partition {tuple(left)} | {tuple(right)} does not cover islands 0..{n_islands - 1}")


def rotate_island(island: Sequence[int], v: int) -> Ids:
    """Rotate ``island`` to start at ``v`` and close it with a second ``v``."""
    h = tuple(island)
    try:
        pos = h.index(v)
    except ValueError:
        raise ValueError(f"bridge vertex {v} is not on island {list(h)}") from None
    return h[pos:] + h[:pos] + (v,)


def split_boundary_at(domain: Domain, position: int) -> Tuple[Domain, Domain]:
    """Case 2: cut the boundary at ``boundary_ids[position]``.

    The pivot is addressed by position so repeated vertices (left by island
    merges) are never confused. Both halves keep the pivot; neither inherits
    islands.
    """
    ids = domain.boundary_ids
    if not 0 < position < len(ids) - 1:
        raise ValueError(f"pivot position {position} is not interior to a boundary of {len(ids)} vertices")
    return Domain(ids[:position + 1]), Domain(ids[position:])


def merge_island_at(domain: Domain, island_index: int, bridge_vertex: int) -> Tuple[Domain, Domain]:
    """Case 1: splice island ``island_index`` into the boundary at ``bridge_vertex``.

    The rotated island is appended after the last boundary vertex ``k``, so
    the merged boundary reads ``i .. k, v .. v`` and its access edge becomes
    ``(i, v)``; the triangle ``(i, v, k)`` closes the parent access edge.
    Returns the forward and the reversed traversal. Every other island is
    carried over unchanged.
    """
    i, k = domain.access_edge
    if i == k:
        raise ValueError(f"cannot merge an island through degenerate access edge ({i}, {k})")
    if not 0 <= island_index < len(domain.islands):
        raise ValueError(f"island index {island_index} out of range for {len(domain.islands)} islands")
    island = domain.islands[island_index]
    others = domain.islands[:island_index] + domain.islands[island_index + 1:]
    forward = domain.boundary_ids + rotate_island(island, bridge_vertex)
    backward = domain.boundary_ids + rotate_island(island[::-1], bridge_vertex)
    return Domain(forward, others), Domain(backward, others)
