from __future__ import annotations

"""
The motion telemetry decoder: triage a batch of raw bridge messages and keep
the last known tool pose, robot axes and external axes.

Output buffers survive between calls. They are only replaced when a batch
contains at least one motion-update message, so a host that polls while the
robot is idle keeps showing the last values it received.
"""

import logging
from collections.abc import Iterable
from typing import Any, List, Optional

from ..config.runtime import DecoderConfig
from ..tools.debug import time_block
from .geometry import PoseFactory, frame_from_components
from .models import MotionRecord, MotionUpdateOutputs, NullableFloats, TcpPose
from .records import decode_message, decode_sample

logger = logging.getLogger(__name__)

MSG_NO_MESSAGES = "No new messages."
MSG_NOTHING_TO_PARSE = "No new messages to parse."
MSG_BAD_FORMAT = "Received badly formatted message"


class MotionUpdateDecoder:
    """
    Stateful decoder for Machina bridge motion updates.

    Create one per consumer (e.g. per graph node) and call :meth:`update`
    with every batch the bridge hands over. Not thread-safe; callers are
    expected to serialize updates.
    """

    def __init__(
        self,
        config: DecoderConfig | None = None,
        *,
        pose_factory: PoseFactory | None = None,
    ) -> None:
        self.config = (config or DecoderConfig()).sanitized()
        self._pose_factory = pose_factory or frame_from_components
        self._log: List[str] = []
        self._poses: List[Optional[TcpPose]] = []
        self._axes: List[Optional[NullableFloats]] = []
        self._external_axes: List[Optional[NullableFloats]] = []

    # ------------------------------------------------------------------ update
    def update(
        self,
        messages: Iterable[Any] | None,
        most_recent_only: bool | None = None,
    ) -> MotionUpdateOutputs:
        """
        Process one batch of raw messages and return the current outputs.

        Parameters
        ----------
        messages:
            Raw message payloads as received from the bridge. ``None`` is
            treated like an empty batch.
        most_recent_only:
            Keep only the last accepted motion update. Falls back to
            ``config.most_recent_only`` when ``None``.
        """
        if messages is None:
            batch: List[Any] = []
        elif isinstance(messages, (str, bytes)):
            batch = [messages]
        else:
            batch = list(messages)

        if most_recent_only is None:
            most_recent_only = self.config.most_recent_only

        if not batch:
            self.clear_log()
            self.log(MSG_NO_MESSAGES)
            return self.outputs()

        with time_block(f"MotionUpdateDecoder.update({len(batch)} messages)", emitter=logger.debug):
            self._parse_incoming(batch, bool(most_recent_only))
        return self.outputs()

    def _parse_incoming(self, batch: List[Any], most_recent_only: bool) -> bool:
        self._log.clear()
        accepted: List[MotionRecord] = []

        for raw in batch:
            result = decode_message(raw)
            if not result.ok:
                logger.warning("Dropping malformed bridge message %r: %s", raw, result.error)
                self._log.append(MSG_BAD_FORMAT)
                continue

            record = result.value
            if record.event != self.config.event_name:
                logger.debug("Ignoring bridge event %r", record.raw.get("event"))
                continue
            accepted.append(record)

        if not accepted:
            self._log.append(MSG_NOTHING_TO_PARSE)
            return False

        self._log.append(f"Received {len(accepted)} messages.")
        if most_recent_only:
            accepted = accepted[-1:]

        self._clear_outputs()
        for record in accepted:
            self._append_record(record)

        self._log.append(f"Parsed {len(accepted)} messages.")
        return True

    def _append_record(self, record: MotionRecord) -> None:
        result = decode_sample(record, self._pose_factory)
        if not result.ok:
            logger.warning("Could not decode motion update %r: %s", record.raw, result.error)
            self._log.append(MSG_BAD_FORMAT)
            if self.config.strict_alignment:
                self._poses.append(None)
                self._axes.append(None)
                self._external_axes.append(None)
            return

        sample = result.value
        self._poses.append(sample.pose)
        self._axes.append(sample.axes)
        self._external_axes.append(sample.external_axes)

    # ----------------------------------------------------------------- buffers
    def log(self, msg: str) -> None:
        """Add a message to the log output."""
        self._log.append(msg)

    def clear_log(self) -> None:
        self._log.clear()

    def _clear_outputs(self) -> None:
        self._poses.clear()
        self._axes.clear()
        self._external_axes.clear()

    def clear(self) -> None:
        """Forget everything, including the last known values."""
        self.clear_log()
        self._clear_outputs()

    def outputs(self) -> MotionUpdateOutputs:
        """Return a snapshot of the four output buffers."""
        return MotionUpdateOutputs(
            log=list(self._log),
            action_tcp=list(self._poses),
            action_axes=[list(v) if v is not None else None for v in self._axes],
            action_external_axes=[
                list(v) if v is not None else None for v in self._external_axes
            ],
        )


__all__ = [
    "MSG_BAD_FORMAT",
    "MSG_NOTHING_TO_PARSE",
    "MSG_NO_MESSAGES",
    "MotionUpdateDecoder",
]
