"""Core decoding: typed records, pose geometry, and the stateful decoder.

Raw bridge text is validated once in :mod:`records`, poses are built by
:mod:`geometry`, and :class:`MotionUpdateDecoder` keeps the last known
outputs between host polls.
"""

from .decoder import (
    MSG_BAD_FORMAT,
    MSG_NO_MESSAGES,
    MSG_NOTHING_TO_PARSE,
    MotionUpdateDecoder,
)
from .geometry import GeometryError, PoseFactory, frame_from_components
from .models import MotionRecord, MotionSample, MotionUpdateOutputs, TcpPose
from .records import DecodeResult, decode_message, decode_sample, nullable_floats

__all__ = [
    "MSG_BAD_FORMAT",
    "MSG_NO_MESSAGES",
    "MSG_NOTHING_TO_PARSE",
    "MotionUpdateDecoder",
    "GeometryError",
    "PoseFactory",
    "frame_from_components",
    "MotionRecord",
    "MotionSample",
    "MotionUpdateOutputs",
    "TcpPose",
    "DecodeResult",
    "decode_message",
    "decode_sample",
    "nullable_floats",
]
