"""Conformity and structural checks for triangle soups."""
from __future__ import annotations
import numpy as np
from .geometry import triangles_signed_areas
from .constants import EPS_AREA

__all__ = ['triangle_areas', 'edge_counts', 'check_mesh_conformity']

def triangle_areas(points, triangles):
	"""Per-triangle area; signed for 2D points, unsigned for 3D points."""
	pts = np.asarray(points, dtype=np.float64)
	T = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	if T.size == 0:
		return np.empty((0,), dtype=float)
	if pts.shape[1] == 2:
		return triangles_signed_areas(pts, T)
	p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
	return 0.5 * np.linalg.norm(np.cross(p1 - p0, p2 - p0), axis=1)

def edge_counts(triangles):
	"""Return (unique undirected edges, usage counts) of a triangle array."""
	T = np.asarray(triangles, dtype=np.int64).reshape(-1, 3)
	if T.size == 0:
		return np.empty((0, 2), dtype=np.int64), np.empty((0,), dtype=np.int64)
	edges = np.vstack((T[:, [0, 1]], T[:, [1, 2]], T[:, [2, 0]]))
	edges.sort(axis=1)
	return np.unique(edges, axis=0, return_counts=True)

def check_mesh_conformity(points, triangles, verbose=False, reject_inverted=False):
	"""Structural checks on a triangle soup.

	Flags out-of-range indices, repeated vertices inside a triangle, near-zero
	areas, duplicate triangles and non-manifold edges (shared by more than two
	triangles). With ``reject_inverted`` (2D only) negative signed areas are
	flagged too. Returns ``(ok, messages)``.
	"""
	tris = np.ascontiguousarray(np.asarray(triangles, dtype=np.int64)).reshape(-1, 3)
	pts = np.ascontiguousarray(np.asarray(points, dtype=np.float64))
	msgs = []
	if tris.size == 0:
		return False, ["No triangles."]
	if tris.max() >= len(pts) or tris.min() < 0:
		return False, ["Triangle indices out of range."]
	ok = True
	repeated = (tris[:, 0] == tris[:, 1]) | (tris[:, 1] == tris[:, 2]) | (tris[:, 0] == tris[:, 2])
	for ti in np.nonzero(repeated)[0][:50]:
		msgs.append(f"Triangle {int(ti)} repeats a vertex: {tris[ti].tolist()}.")
		ok = False
	areas = triangle_areas(pts, tris)
	zero_mask = np.abs(areas) < EPS_AREA
	for ti in np.nonzero(zero_mask)[0][:50]:
		msgs.append(f"Triangle {int(ti)} has near-zero area ({abs(areas[ti]):.3e}).")
		ok = False
	if reject_inverted and pts.shape[1] == 2:
		for ti in np.nonzero(areas <= -EPS_AREA)[0][:50]:
			msgs.append(f"Triangle {int(ti)} has negative signed area (inverted): {areas[ti]:.3e}")
			ok = False
	_, tri_counts = np.unique(np.sort(tris, axis=1), axis=0, return_counts=True)
	if np.any(tri_counts > 1):
		msgs.append("Duplicate triangles detected.")
		ok = False
	uniq_edges, counts = edge_counts(tris)
	nm_mask = counts > 2
	for e, c in zip(uniq_edges[nm_mask][:10], counts[nm_mask][:10]):
		msgs.append(f"Non-manifold edge ({int(e[0])}, {int(e[1])}) shared by >2 triangles (count={int(c)}).")
		ok = False
	if verbose:
		from .logging_utils import get_logger
		logger = get_logger('holefill.conformity')
		for m in msgs:
			logger.info("Conformity: %s", m)
	return ok, msgs
