from __future__ import annotations

import logging

import pytest

from motiontelemetry.config import DEFAULT_EVENT_NAME, DecoderConfig, config_from_mapping, load_config


def test_defaults() -> None:
    cfg = DecoderConfig()

    assert cfg.event_name == "motion-update" == DEFAULT_EVENT_NAME
    assert cfg.most_recent_only is False
    assert cfg.strict_alignment is True


def test_config_from_mapping_ignores_unknown_keys() -> None:
    cfg = config_from_mapping({"most_recent_only": 1, "unknown": "x"})

    assert cfg.most_recent_only is True
    assert cfg.event_name == DEFAULT_EVENT_NAME


def test_config_from_mapping_flattens_decoder_block() -> None:
    cfg = config_from_mapping({"decoder": {"event_name": "  other  ", "strict_alignment": False}})

    assert cfg.event_name == "other"
    assert cfg.strict_alignment is False


def test_blank_event_name_falls_back_to_default() -> None:
    assert DecoderConfig(event_name="  ").sanitized().event_name == DEFAULT_EVENT_NAME


def test_load_config_missing_file_gives_defaults(tmp_path) -> None:
    assert load_config(tmp_path / "missing.yaml") == DecoderConfig()
    assert load_config(None) == DecoderConfig()


def test_load_config_reads_yaml(tmp_path) -> None:
    path = tmp_path / "decoder.yaml"
    path.write_text("decoder:\n  most_recent_only: true\n  event_name: motion-update\n", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.most_recent_only is True


def test_load_config_rejects_non_mapping(tmp_path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("value", [123, None, ["motion-update"]])
def test_event_name_must_be_a_string(value) -> None:
    with pytest.raises(ValueError, match="event_name"):
        config_from_mapping({"event_name": value})


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (0, False), ("yes", True), ("Off", False), (" true ", True)],
)
def test_flags_accept_common_spellings(value, expected) -> None:
    assert config_from_mapping({"strict_alignment": value}).strict_alignment is expected


@pytest.mark.parametrize("value", ["maybe", 2, 0.5])
def test_flags_reject_other_values(value) -> None:
    with pytest.raises(ValueError, match="most_recent_only"):
        config_from_mapping({"most_recent_only": value})


def test_decoder_block_must_be_mapping() -> None:
    with pytest.raises(ValueError, match="decoder"):
        config_from_mapping({"decoder": "fast"})


def test_decoder_block_overrides_top_level() -> None:
    cfg = config_from_mapping({"event_name": "a", "decoder": {"event_name": "b"}})

    assert cfg.event_name == "b"


def test_unknown_keys_are_logged(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="motiontelemetry.config.runtime"):
        config_from_mapping({"decoder": {"batch_size": 3}})

    assert any("batch_size" in rec.getMessage() for rec in caplog.records)


def test_load_config_empty_file_gives_defaults(tmp_path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == DecoderConfig()


def test_load_config_reports_file_on_bad_value(tmp_path) -> None:
    path = tmp_path / "decoder.yaml"
    path.write_text("decoder:\n  event_name: 42\n", encoding="utf-8")

    with pytest.raises(ValueError, match="decoder.yaml"):
        load_config(path)
