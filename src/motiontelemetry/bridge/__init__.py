"""Graph-host bindings for Machina bridge telemetry nodes."""

from .motion_update import (
    DEFAULT_NODE_ID,
    OUTPUT_NAMES,
    DecoderRegistry,
    motion_update,
    session_registry,
)

__all__ = [
    "DEFAULT_NODE_ID",
    "OUTPUT_NAMES",
    "DecoderRegistry",
    "motion_update",
    "session_registry",
]
