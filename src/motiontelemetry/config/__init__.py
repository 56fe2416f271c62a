"""Configuration objects for the motion telemetry decoder.

Settings can be given in code, as a plain mapping, or as a YAML file with an
optional top-level ``decoder:`` block. The resulting :class:`DecoderConfig`
is shared by the decoder, the host binding and the replay tool.
"""

from .runtime import DEFAULT_EVENT_NAME, DecoderConfig, config_from_mapping, load_config

__all__ = ["DEFAULT_EVENT_NAME", "DecoderConfig", "config_from_mapping", "load_config"]
