"""Search statistics for the island triangulator and presentation helpers."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any

@dataclass
class SearchStats:
    calls: int = 0
    memo_hits: int = 0
    base_triangles: int = 0
    # Case 1: island merges (each yields a forward and a reversed domain)
    case1_merges: int = 0
    # Case 2: boundary splits and island partitions
    case2_splits: int = 0
    partitions_evaluated: int = 0
    partitions_skipped: int = 0
    # Pruned sub-solves (closing triangle invalid / worse than best angle)
    pruned_invalid: int = 0
    pruned_bound: int = 0
    weights_computed: int = 0
    improvements: int = 0
    duplicates_removed: int = 0
    # Timing (seconds)
    time_total: float = 0.0

    def reset(self) -> None:
        for name in self.__dataclass_fields__:
            setattr(self, name, type(getattr(self, name))())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'calls': self.calls,
            'memo_hits': self.memo_hits,
            'memo_hit_rate': (self.memo_hits / self.calls) if self.calls else 0.0,
            'base_triangles': self.base_triangles,
            'case1_merges': self.case1_merges,
            'case2_splits': self.case2_splits,
            'partitions_evaluated': self.partitions_evaluated,
            'partitions_skipped': self.partitions_skipped,
            'pruned_invalid': self.pruned_invalid,
            'pruned_bound': self.pruned_bound,
            'weights_computed': self.weights_computed,
            'improvements': self.improvements,
            'duplicates_removed': self.duplicates_removed,
            'time_total': self.time_total,
        }

def format_stats_table(stats_dict) -> str:
    """Return a human readable two-column table of search counters."""
    if not stats_dict:
        return "<no stats>"
    rows = []
    for name, value in stats_dict.items():
        if isinstance(value, float):
            text = f"{value * 1000.0:.3f} ms" if name.startswith('time') else f"{value:.3f}"
        else:
            text = str(value)
        rows.append((name, text))
    w0 = max(len('counter'), max(len(r[0]) for r in rows))
    w1 = max(len('value'), max(len(r[1]) for r in rows))
    lines = [f"{'counter'.ljust(w0)} {'value'.rjust(w1)}", "-" * (w0 + w1 + 1)]
    lines += [f"{n.ljust(w0)} {v.rjust(w1)}" for n, v in rows]
    return "\n".join(lines)

__all__ = ["SearchStats", "format_stats_table"]
