from __future__ import annotations

from main import _with_env_config


def test_env_config_is_prepended(monkeypatch) -> None:
    monkeypatch.setenv("MOTIONTELEMETRY_CONFIG", "/etc/decoder.yaml")

    assert _with_env_config(["capture.jsonl"]) == ["--config", "/etc/decoder.yaml", "capture.jsonl"]


def test_explicit_config_wins(monkeypatch) -> None:
    monkeypatch.setenv("MOTIONTELEMETRY_CONFIG", "/etc/decoder.yaml")

    assert _with_env_config(["--config", "mine.yaml"]) == ["--config", "mine.yaml"]
    assert _with_env_config(["--config=mine.yaml"]) == ["--config=mine.yaml"]


def test_no_env_config_leaves_args(monkeypatch) -> None:
    monkeypatch.delenv("MOTIONTELEMETRY_CONFIG", raising=False)

    assert _with_env_config(["-"]) == ["-"]
