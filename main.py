"""Replay captured Machina bridge messages from a source checkout.

Usage::

    python main.py capture.jsonl --batch-size 10

``MOTIONTELEMETRY_CONFIG`` names a YAML config that is used when
``--config`` is not given on the command line.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from pathlib import Path

# Make sure the 'src' directory is on sys.path so 'motiontelemetry' can be imported
REPO_ROOT = Path(__file__).resolve().parent
SRC_DIR = REPO_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from motiontelemetry.tools.replay import main as run_replay_main


def _with_env_config(argv: list[str]) -> list[str]:
    env_config = os.getenv("MOTIONTELEMETRY_CONFIG", "").strip()
    if not env_config or any(arg == "--config" or arg.startswith("--config=") for arg in argv):
        return argv
    return ["--config", env_config, *argv]


def main(argv: Sequence[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    return run_replay_main(_with_env_config(args))


if __name__ == "__main__":
    sys.exit(main())
