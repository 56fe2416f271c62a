"""Runtime configuration for the motion telemetry decoder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

logger = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "motion-update"

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"0", "false", "no", "off", ""}


@dataclass(slots=True)
class DecoderConfig:
    """
    Knobs for how incoming bridge messages are triaged and decoded.

    The defaults match what the Machina bridge emits for real-time motion
    updates.
    """

    event_name: str = DEFAULT_EVENT_NAME
    most_recent_only: bool = False

    # Keep poses/axes/external axes index-aligned when a record fails to decode
    strict_alignment: bool = True

    def sanitized(self) -> DecoderConfig:
        """Return a copy with normalized values."""
        event_name = str(self.event_name or "").strip() or DEFAULT_EVENT_NAME
        return DecoderConfig(
            event_name=event_name,
            most_recent_only=bool(self.most_recent_only),
            strict_alignment=bool(self.strict_alignment),
        )


def _parse_event_name(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"event_name must be a string, got {type(value).__name__}")
    return value


def _parse_flag(name: str, value: Any) -> bool:
    """Accept YAML booleans, 0/1 and the usual on/off words."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


_PARSERS = {
    "event_name": _parse_event_name,
    "most_recent_only": lambda value: _parse_flag("most_recent_only", value),
    "strict_alignment": lambda value: _parse_flag("strict_alignment", value),
}


def config_from_mapping(data: Mapping[str, Any] | None) -> DecoderConfig:
    """
    Build :class:`DecoderConfig` from ``data``.

    Settings may sit at the top level or under a ``decoder:`` block; the
    block wins on conflicts. Unknown keys are logged and ignored, badly
    typed values raise ``ValueError``.
    """
    if not data:
        return DecoderConfig()

    settings: Dict[str, Any] = {k: v for k, v in data.items() if k != "decoder"}
    block = data.get("decoder")
    if block is not None:
        if not isinstance(block, Mapping):
            raise ValueError(f"'decoder' must be a mapping, got {type(block).__name__}")
        settings.update(block)

    known = {f.name for f in fields(DecoderConfig)}
    unknown = sorted(str(key) for key in settings.keys() - known)
    if unknown:
        logger.warning("Ignoring unknown decoder settings: %s", ", ".join(unknown))

    payload = {key: _PARSERS[key](settings[key]) for key in settings.keys() & known}
    return DecoderConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> DecoderConfig:
    """
    Load configuration from a YAML file at ``path``.

    ``None`` or a missing file gives the defaults; an empty file too.
    """
    if path is None:
        return DecoderConfig()
    cfg_path = Path(path)
    if not cfg_path.is_file():
        logger.debug("No decoder config at %s, using defaults", cfg_path)
        return DecoderConfig()

    raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8"))
    if raw is None:
        return DecoderConfig()
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    try:
        return config_from_mapping(raw)
    except ValueError as exc:
        raise ValueError(f"{cfg_path}: {exc}") from exc


__all__ = ["DEFAULT_EVENT_NAME", "DecoderConfig", "config_from_mapping", "load_config"]
