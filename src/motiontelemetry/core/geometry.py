"""Pose construction from raw position/orientation numbers.

The decoder only needs a callable that turns an origin and two axis
vectors into a pose object. :func:`frame_from_components` is the default,
backed by numpy; hosts with their own geometry library can pass a
different factory with the same signature.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from .models import TcpPose, Vec3

PoseFactory = Callable[[Sequence[float], Sequence[float], Sequence[float]], object]


class GeometryError(ValueError):
    """Raised when numbers cannot describe a frame."""


def _as_vec3(values: Sequence[float], name: str) -> np.ndarray:
    vec = np.asarray(values, dtype=float)
    if vec.shape != (3,):
        raise GeometryError(f"{name} must have 3 components, got shape {vec.shape}")
    if not np.all(np.isfinite(vec)):
        raise GeometryError(f"{name} has non-finite components: {vec.tolist()}")
    return vec


def _unit(vec: np.ndarray, name: str) -> Vec3:
    norm = float(np.linalg.norm(vec))
    if norm == 0.0:
        raise GeometryError(f"{name} has zero length")
    unit = vec / norm
    return (float(unit[0]), float(unit[1]), float(unit[2]))


def frame_from_components(
    origin: Sequence[float],
    x_axis: Sequence[float],
    y_axis: Sequence[float],
) -> TcpPose:
    """
    Build a :class:`TcpPose` from an origin and two axis vectors.

    Axes are normalized. Orthogonality is not checked; the bridge is
    expected to send an orthonormal pair.
    """
    o = _as_vec3(origin, "origin")
    x = _unit(_as_vec3(x_axis, "x_axis"), "x_axis")
    y = _unit(_as_vec3(y_axis, "y_axis"), "y_axis")
    return TcpPose(origin=(float(o[0]), float(o[1]), float(o[2])), x_axis=x, y_axis=y)


__all__ = ["GeometryError", "PoseFactory", "frame_from_components"]
