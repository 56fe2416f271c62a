"""
Boundary decoding for raw bridge messages.

The Machina bridge forwards JSON objects such as::

    {"event": "motion-update",
     "pos": [x, y, z],
     "ori": [xx, xy, xz, yx, yy, yz],
     "axes": [a1, a2, ...],
     "extax": [e1, e2, ...]}

Every field except ``event`` is optional and every number may be ``null``.
Decoding never raises: each step returns a :class:`DecodeResult` that is
either a value or a malformed marker with a reason.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .geometry import PoseFactory, frame_from_components
from .models import MotionRecord, MotionSample, NullableFloats

logger = logging.getLogger(__name__)

T = TypeVar("T")

POS_ARITY = 3
ORI_ARITY = 6


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of a fallible decode step."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> DecodeResult[T]:
        return cls(value=value)

    @classmethod
    def malformed(cls, reason: str) -> DecodeResult[T]:
        return cls(error=reason)


def _coerce_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float, str)):
        return None
    try:
        return float(value)
    except (ValueError, OverflowError):
        # huge JSON integers overflow a double
        return None


def nullable_floats(value: Any) -> Optional[NullableFloats]:
    """
    Map a JSON array to a list of floats or ``None`` with the same length.

    Returns ``None`` when the field is missing or not an array.
    """
    if not isinstance(value, (list, tuple)):
        return None
    return [_coerce_number(item) for item in value]


def decode_message(text: Any) -> DecodeResult[MotionRecord]:
    """Parse one raw bridge message into a :class:`MotionRecord`."""
    if not isinstance(text, (str, bytes, bytearray)):
        return DecodeResult.malformed(f"expected text, got {type(text).__name__}")

    try:
        obj = json.loads(text)
    except (ValueError, RecursionError) as exc:
        return DecodeResult.malformed(f"invalid JSON ({type(exc).__name__}: {exc})")

    if not isinstance(obj, Mapping):
        return DecodeResult.malformed(f"expected a JSON object, got {type(obj).__name__}")
    if obj.get("event") is None:
        return DecodeResult.malformed("missing or null 'event' field")

    event = obj["event"]
    return DecodeResult.success(
        MotionRecord(
            event=event if isinstance(event, str) else None,
            pos=nullable_floats(obj.get("pos")),
            ori=nullable_floats(obj.get("ori")),
            axes=nullable_floats(obj.get("axes")),
            extax=nullable_floats(obj.get("extax")),
            raw=obj,
        )
    )


def _complete(values: Optional[NullableFloats], arity: int) -> bool:
    if values is None or len(values) < arity:
        return False
    return all(v is not None for v in values[:arity])


def decode_sample(
    record: MotionRecord,
    pose_factory: PoseFactory = frame_from_components,
) -> DecodeResult[MotionSample]:
    """
    Turn an accepted record into output values.

    Sparse ``pos``/``ori`` fields give an absent pose, which is not an
    error. A pose factory that rejects the numbers makes the whole sample
    malformed.
    """
    pose = None
    if _complete(record.pos, POS_ARITY) and _complete(record.ori, ORI_ARITY):
        pos = record.pos[:POS_ARITY]
        ori = record.ori[:ORI_ARITY]
        try:
            pose = pose_factory(pos, ori[0:3], ori[3:6])
        except Exception as exc:
            # host geometry libraries raise their own exception types
            return DecodeResult.malformed(f"cannot build pose from pos={pos} ori={ori} ({exc})")
    else:
        logger.debug("Incomplete pose fields in record: pos=%r ori=%r", record.pos, record.ori)

    return DecodeResult.success(
        MotionSample(pose=pose, axes=record.axes, external_axes=record.extax)
    )


__all__ = [
    "DecodeResult",
    "ORI_ARITY",
    "POS_ARITY",
    "decode_message",
    "decode_sample",
    "nullable_floats",
]
