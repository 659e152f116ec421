"""Configuration objects for island-aware hole filling."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

ISLAND_EXCLUSION_MODES = ('same_island', 'any_island')


@dataclass
class IslandFillConfig:
    """Search and reporting options for :class:`IslandTriangulator`.

    Attributes
    ----------
    memoize : bool
        Reuse the optimal result of a sub-domain reached through several
        recursive paths.
    prune_invalid : bool
        Do not solve sub-domains whose closing triangle is already invalid.
    prune_by_bound : bool
        Do not solve sub-domains whose closing triangle angle exceeds the
        best angle found so far at that level.
    island_exclusion : str
        ``'same_island'`` rejects triangles with all three vertices on one
        original island; ``'any_island'`` rejects triangles with all three
        vertices anywhere in the union of the original islands.
    dedupe_triangles : bool
        Drop repeated triangles (as vertex sets) from the final list.
    max_calls, time_limit : optional
        Budget of recursive calls / wall-clock seconds; exceeding either
        raises ``SearchBudgetExceeded``.
    recursion_limit : int
        Minimum interpreter recursion limit while a search runs.
    trace : bool
        Emit DEBUG lines for merges, splits, partitions and improvements.
    log_level : str, optional
        When set, the driver applies it to the 'holefill' logger family.
    extras : dict
        Free-form dictionary for caller annotations.
    """
    memoize: bool = True
    prune_invalid: bool = True
    prune_by_bound: bool = True
    island_exclusion: str = 'same_island'
    dedupe_triangles: bool = True
    max_calls: Optional[int] = None
    time_limit: Optional[float] = None
    recursion_limit: int = 10000
    trace: bool = False
    log_level: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def validate(self) -> 'IslandFillConfig':
        if self.island_exclusion not in ISLAND_EXCLUSION_MODES:
            raise ValueError(f"island_exclusion must be one of {ISLAND_EXCLUSION_MODES}, got {self.island_exclusion!r}")
        if self.max_calls is not None and self.max_calls <= 0:
            raise ValueError(f"max_calls must be positive, got {self.max_calls}")
        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {self.time_limit}")
        if self.recursion_limit < 100:
            raise ValueError(f"recursion_limit too small: {self.recursion_limit}")
        return self


__all__ = ['IslandFillConfig', 'ISLAND_EXCLUSION_MODES']
