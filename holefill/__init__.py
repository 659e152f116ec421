"""Public package API for the holefill toolkit.

This facade provides a stable, flatter import surface on top of the
internal implementation package ``holefill.core`` while deferring the
driver import until first use to keep ``import holefill`` light.

Example
-------
    from holefill import fill_hole_with_islands, IslandFillConfig

    result = fill_hole_with_islands(points, boundary=[0, 1, 2, 3], islands=[[4, 5, 6]])
    if result.success:
        mesh = result.to_mesh()

The deeper modules (``holefill.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

try:  # runtime version export
    from importlib.metadata import version as _pkg_version
    __version__ = _pkg_version("holefill")  # populated when installed
except Exception:  # pragma: no cover - editable / unknown state
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

# Eager light-weight submodules
_const = _imp('holefill.core.constants')
_geom = _imp('holefill.core.geometry')
_weights = _imp('holefill.core.weights')
_domain = _imp('holefill.core.domain')
_config = _imp('holefill.core.config')
_stats = _imp('holefill.core.stats')
_islands = _imp('holefill.core.island_triangulation')
_conf = _imp('holefill.core.conformity')
_log = _imp('holefill.core.logging_utils')

def _lazy_driver_attr(name):
    def _wrapper(*args, **kwargs):
        drv = _imp('holefill.core.hole_filling')
        return getattr(drv, name)(*args, **kwargs)
    _wrapper.__name__ = name
    return _wrapper

# Public callable entry points
fill_hole_with_islands = _lazy_driver_attr('fill_hole_with_islands')
fill_hole_from_polylines = _lazy_driver_attr('fill_hole_from_polylines')
build_mesh = _lazy_driver_attr('build_mesh')

# Core types
Domain = _domain.Domain
enumerate_partitions = _domain.enumerate_partitions
split_boundary_at = _domain.split_boundary_at
merge_island_at = _domain.merge_island_at
Weight = _weights.Weight
INVALID_WEIGHT = _weights.INVALID_WEIGHT
ZERO_WEIGHT = _weights.ZERO_WEIGHT
TriangleMeasure = _weights.TriangleMeasure
DegenerateTriangle = _weights.DegenerateTriangle
PlanarAngleAreaCalculator = _weights.PlanarAngleAreaCalculator
DihedralAreaCalculator = _weights.DihedralAreaCalculator
IslandTriangulator = _islands.IslandTriangulator
TriangulationResult = _islands.TriangulationResult
SearchBudgetExceeded = _islands.SearchBudgetExceeded
IslandFillConfig = _config.IslandFillConfig
SearchStats = _stats.SearchStats

# Logging
get_logger = _log.get_logger
configure_logging = _log.configure_logging

# Tolerances
EPS_AREA = getattr(_const, 'EPS_AREA', 0.0)

# Namespace submodules for exploratory users
constants = _const
geometry = _geom
weights = _weights
domain = _domain
config = _config
stats = _stats
island_triangulation = _islands
conformity = _conf

__all__ = [
    '__version__',
    # drivers
    'fill_hole_with_islands', 'fill_hole_from_polylines', 'build_mesh',
    # core types
    'Domain', 'enumerate_partitions', 'split_boundary_at', 'merge_island_at',
    'Weight', 'INVALID_WEIGHT', 'ZERO_WEIGHT', 'TriangleMeasure', 'DegenerateTriangle',
    'PlanarAngleAreaCalculator', 'DihedralAreaCalculator',
    'IslandTriangulator', 'TriangulationResult', 'SearchBudgetExceeded',
    'IslandFillConfig', 'SearchStats',
    # logging / tolerances
    'get_logger', 'configure_logging', 'EPS_AREA',
    # submodules
    'constants', 'geometry', 'weights', 'domain', 'config', 'stats',
    'island_triangulation', 'conformity',
]
