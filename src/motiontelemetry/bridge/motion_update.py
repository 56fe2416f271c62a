"""Host binding for the "Motion Update" graph node.

A graph host re-evaluates the node on every pull and hands it the latest
batch of bridge messages. Each node id gets its own decoder so that two
nodes listening to different bridges never share "last known" values.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Hashable, Iterable, Optional

from ..config.runtime import DecoderConfig
from ..core.decoder import MotionUpdateDecoder
from ..core.geometry import PoseFactory

logger = logging.getLogger(__name__)

OUTPUT_NAMES = ("log", "actionTCP", "actionAxes", "actionExternalAxes")
DEFAULT_NODE_ID = "default"


class DecoderRegistry:
    """Mapping of node id -> MotionUpdateDecoder, created on first use.

    Lives for the host session. The lock only guards creation and removal;
    updates on a single decoder are expected to be serialized by the host.
    """

    def __init__(
        self,
        config: DecoderConfig | None = None,
        *,
        pose_factory: PoseFactory | None = None,
    ) -> None:
        self._config = config or DecoderConfig()
        self._pose_factory = pose_factory
        self._decoders: Dict[Hashable, MotionUpdateDecoder] = {}
        self._lock = threading.RLock()

    def get(self, node_id: Hashable = DEFAULT_NODE_ID) -> MotionUpdateDecoder:
        with self._lock:
            decoder = self._decoders.get(node_id)
            if decoder is None:
                logger.debug("Creating motion update decoder for node %r", node_id)
                decoder = MotionUpdateDecoder(self._config, pose_factory=self._pose_factory)
                self._decoders[node_id] = decoder
            return decoder

    def reset(self, node_id: Optional[Hashable] = None) -> None:
        """Drop the decoder for ``node_id``, or every decoder when ``None``."""
        with self._lock:
            if node_id is None:
                self._decoders.clear()
            else:
                self._decoders.pop(node_id, None)

    def __contains__(self, node_id: Hashable) -> bool:
        with self._lock:
            return node_id in self._decoders

    def __len__(self) -> int:
        with self._lock:
            return len(self._decoders)


_session_registry = DecoderRegistry()


def session_registry() -> DecoderRegistry:
    """Return the process-wide registry used when no registry is passed."""
    return _session_registry


def motion_update(
    bridge_messages: Iterable[Any] | None,
    only_most_recent: bool = False,
    *,
    node_id: Hashable = DEFAULT_NODE_ID,
    registry: DecoderRegistry | None = None,
) -> Dict[str, Any]:
    """
    Will update every time real-time motion data is received from the device.

    Parameters
    ----------
    bridge_messages:
        The last batch of messages received from the bridge.
    only_most_recent:
        If true, only the single most recent message is output.
    node_id:
        Identifies the calling node; each id keeps its own last known values.
    registry:
        Decoder registry to use. Defaults to :func:`session_registry`.

    Returns
    -------
    dict
        ``log`` (status messages), ``actionTCP`` (last known TCP poses),
        ``actionAxes`` (last known robot axes) and ``actionExternalAxes``
        (last known external axes).
    """
    decoder = (registry or _session_registry).get(node_id)
    return decoder.update(bridge_messages, only_most_recent).as_dict()


__all__ = [
    "DEFAULT_NODE_ID",
    "DecoderRegistry",
    "OUTPUT_NAMES",
    "motion_update",
    "session_registry",
]
