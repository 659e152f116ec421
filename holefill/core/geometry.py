"""Geometry primitives used by the default weight calculators.

Works on 2D points for orientation-aware planar measures and on 3D points
for normal-based measures. Tolerances live in ``constants``.
"""
from __future__ import annotations
import math
import numpy as np
from .constants import EPS_COLINEAR, EPS_LENGTH

__all__ = [
	'triangle_area','triangle_angles','triangle_normal','polygon_signed_area',
	'newell_normal','triangles_signed_areas','angle_between'
]

def triangle_area(p0, p1, p2):
	"""Signed area of a 2D triangle (positive when counter-clockwise)."""
	p0 = np.asarray(p0, dtype=np.float64); p1 = np.asarray(p1, dtype=np.float64); p2 = np.asarray(p2, dtype=np.float64)
	u = p1 - p0; v = p2 - p0
	return 0.5 * float(u[0]*v[1] - u[1]*v[0])

def triangle_angles(p0, p1, p2):
	"""Interior angles in degrees at p0, p1, p2 (any dimension)."""
	p0 = np.asarray(p0, dtype=np.float64); p1 = np.asarray(p1, dtype=np.float64); p2 = np.asarray(p2, dtype=np.float64)
	a = np.linalg.norm(p1 - p2)
	b = np.linalg.norm(p0 - p2)
	c = np.linalg.norm(p0 - p1)
	def ang(A,B,C):
		cosang = (B*B + C*C - A*A) / (2*B*C + EPS_LENGTH)
		return math.degrees(math.acos(np.clip(cosang, -1.0, 1.0)))
	return [ang(a,b,c), ang(b,c,a), ang(c,a,b)]

def triangle_normal(p0, p1, p2):
	"""Return (unit_normal, area) of a 3D triangle; the normal is zero when degenerate."""
	p0 = np.asarray(p0, dtype=np.float64); p1 = np.asarray(p1, dtype=np.float64); p2 = np.asarray(p2, dtype=np.float64)
	n = np.cross(p1 - p0, p2 - p0)
	length = float(np.linalg.norm(n))
	if length <= EPS_COLINEAR:
		return np.zeros(3), 0.0
	return n / length, 0.5 * length

def angle_between(u, v):
	"""Angle in degrees between two vectors; 0 when either is zero."""
	u = np.asarray(u, dtype=np.float64); v = np.asarray(v, dtype=np.float64)
	nu = np.linalg.norm(u); nv = np.linalg.norm(v)
	if nu <= EPS_COLINEAR or nv <= EPS_COLINEAR:
		return 0.0
	cosang = float(np.dot(u, v) / (nu * nv))
	return math.degrees(math.acos(max(-1.0, min(1.0, cosang))))

def polygon_signed_area(polygon):
	"""Return signed area of a 2D polygon (sequence of (x,y)); positive if CCW."""
	arr = np.asarray(polygon, dtype=np.float64)
	if arr.shape[0] < 3:
		return 0.0
	x = arr[:,0]; y = arr[:,1]
	return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))

def newell_normal(polygon):
	"""Unit normal of a (possibly non-planar) 3D polygon by Newell's method.

	Returns a zero vector for degenerate input.
	"""
	arr = np.asarray(polygon, dtype=np.float64)
	if arr.shape[0] < 3:
		return np.zeros(3)
	nxt = np.roll(arr, -1, axis=0)
	n = np.array([
		np.sum((arr[:,1] - nxt[:,1]) * (arr[:,2] + nxt[:,2])),
		np.sum((arr[:,2] - nxt[:,2]) * (arr[:,0] + nxt[:,0])),
		np.sum((arr[:,0] - nxt[:,0]) * (arr[:,1] + nxt[:,1])),
	])
	length = float(np.linalg.norm(n))
	if length <= EPS_COLINEAR:
		return np.zeros(3)
	return n / length

def triangles_signed_areas(points, tris):
	"""Vectorized signed area for a batch of 2D triangles.

	points: (N,2) float array
	tris:   (M,3) int array
	Returns: (M,) float64 array of signed areas (0.5 * cross).
	"""
	pts = np.asarray(points, dtype=np.float64)
	T = np.asarray(tris, dtype=np.int64)
	if T.size == 0:
		return np.empty((0,), dtype=float)
	p0 = pts[T[:, 0]]; p1 = pts[T[:, 1]]; p2 = pts[T[:, 2]]
	u = p1 - p0; v = p2 - p0
	return 0.5 * (u[:, 0]*v[:, 1] - u[:, 1]*v[:, 0])
