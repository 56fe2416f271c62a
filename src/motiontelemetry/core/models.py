"""Shared dataclasses for decoded bridge telemetry."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

NullableFloats = List[Optional[float]]
Vec3 = Tuple[float, float, float]


def _finite_or_none(values: Optional[NullableFloats]) -> Optional[NullableFloats]:
    if values is None:
        return None
    return [v if v is not None and math.isfinite(v) else None for v in values]


@dataclass(frozen=True)
class TcpPose:
    """Tool-center-point frame: an origin plus unit X and Y axes."""

    origin: Vec3
    x_axis: Vec3
    y_axis: Vec3

    @property
    def z_axis(self) -> Vec3:
        z = np.cross(np.asarray(self.x_axis), np.asarray(self.y_axis))
        return (float(z[0]), float(z[1]), float(z[2]))

    def as_matrix(self) -> np.ndarray:
        """Return the 4x4 homogeneous transform of this frame."""
        matrix = np.eye(4)
        matrix[:3, 0] = self.x_axis
        matrix[:3, 1] = self.y_axis
        matrix[:3, 2] = self.z_axis
        matrix[:3, 3] = self.origin
        return matrix

    def to_mapping(self) -> Dict[str, List[float]]:
        return {
            "origin": list(self.origin),
            "x_axis": list(self.x_axis),
            "y_axis": list(self.y_axis),
        }


@dataclass(frozen=True)
class MotionRecord:
    """A bridge message that parsed as a JSON object.

    ``event`` is ``None`` when the message carries a non-string event.
    The motion fields have already been through :func:`nullable_floats`.
    """

    event: Optional[str]
    pos: Optional[NullableFloats] = None
    ori: Optional[NullableFloats] = None
    axes: Optional[NullableFloats] = None
    extax: Optional[NullableFloats] = None
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)


@dataclass(frozen=True)
class MotionSample:
    """One accepted message turned into output values."""

    pose: Optional[TcpPose]
    axes: Optional[NullableFloats]
    external_axes: Optional[NullableFloats]


@dataclass
class MotionUpdateOutputs:
    """The four results of a decoder update, in host output order."""

    log: List[str]
    action_tcp: List[Optional[TcpPose]]
    action_axes: List[Optional[NullableFloats]]
    action_external_axes: List[Optional[NullableFloats]]

    def as_dict(self) -> Dict[str, Any]:
        """Return the outputs keyed by the node's output port names."""
        return {
            "log": self.log,
            "actionTCP": self.action_tcp,
            "actionAxes": self.action_axes,
            "actionExternalAxes": self.action_external_axes,
        }

    def to_json_dict(self) -> Dict[str, Any]:
        """Like :meth:`as_dict` but with plain mappings for poses and ``None`` for non-finite axes."""
        data = self.as_dict()
        data["actionTCP"] = [
            pose.to_mapping() if pose is not None else None for pose in self.action_tcp
        ]
        # strict JSON has no NaN/Infinity
        data["actionAxes"] = [_finite_or_none(v) for v in self.action_axes]
        data["actionExternalAxes"] = [_finite_or_none(v) for v in self.action_external_axes]
        return data
