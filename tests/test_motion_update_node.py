from __future__ import annotations

import json

from motiontelemetry.bridge import (
    DEFAULT_NODE_ID,
    OUTPUT_NAMES,
    DecoderRegistry,
    motion_update,
    session_registry,
)
from motiontelemetry.config import DecoderConfig


def _motion(**fields) -> str:
    payload = {"event": "motion-update"}
    payload.update(fields)
    return json.dumps(payload)


def test_motion_update_returns_named_outputs() -> None:
    registry = DecoderRegistry()

    outputs = motion_update([_motion(pos=[1, 2, 3], ori=[1, 0, 0, 0, 1, 0])], registry=registry)

    assert tuple(outputs) == OUTPUT_NAMES
    assert outputs["actionTCP"][0].origin == (1.0, 2.0, 3.0)
    assert outputs["actionAxes"] == [None]


def test_nodes_keep_separate_last_known_values() -> None:
    registry = DecoderRegistry()
    motion_update([_motion(axes=[1])], node_id="left", registry=registry)
    motion_update([_motion(axes=[2])], node_id="right", registry=registry)

    left = motion_update([], node_id="left", registry=registry)
    right = motion_update(None, node_id="right", registry=registry)

    assert left["actionAxes"] == [[1.0]]
    assert right["actionAxes"] == [[2.0]]
    assert len(registry) == 2


def test_only_most_recent_flag_is_forwarded() -> None:
    registry = DecoderRegistry()

    outputs = motion_update(
        [_motion(axes=[1]), _motion(axes=[2])],
        only_most_recent=True,
        registry=registry,
    )

    assert outputs["actionAxes"] == [[2.0]]


def test_registry_returns_same_decoder_per_node() -> None:
    registry = DecoderRegistry(DecoderConfig(event_name="custom"))

    decoder = registry.get("a")

    assert registry.get("a") is decoder
    assert registry.get("b") is not decoder
    assert decoder.config.event_name == "custom"


def test_registry_reset() -> None:
    registry = DecoderRegistry()
    registry.get("a")
    registry.get("b")

    registry.reset("a")
    assert "a" not in registry
    assert "b" in registry

    registry.reset()
    assert len(registry) == 0


def test_default_registry_is_session_wide() -> None:
    registry = session_registry()
    registry.reset()
    try:
        motion_update([_motion(axes=[5])])
        outputs = motion_update([])
        assert outputs["actionAxes"] == [[5.0]]
        assert DEFAULT_NODE_ID in registry
    finally:
        registry.reset()
