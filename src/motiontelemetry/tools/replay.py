"""Replay recorded bridge messages through a motion update decoder.

Input is one raw bridge message per line (as captured from the Machina
bridge websocket). Each batch prints one JSON object with the four node
outputs, which makes it easy to diff decoder behavior against a capture.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence, TextIO

from ..config import DecoderConfig, load_config
from ..core.decoder import MotionUpdateDecoder

logger = logging.getLogger(__name__)


def iter_batches(lines: Iterable[str], batch_size: int) -> Iterator[List[str]]:
    """
    Group non-blank lines into batches of ``batch_size``.

    ``batch_size <= 0`` yields everything as a single batch.
    """
    batch: List[str] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        batch.append(line)
        if batch_size > 0 and len(batch) >= batch_size:
            yield batch
            batch = []
    if batch:
        yield batch


def replay(
    lines: Iterable[str],
    decoder: MotionUpdateDecoder,
    out: TextIO,
    *,
    batch_size: int = 0,
    most_recent_only: bool | None = None,
) -> int:
    """Feed ``lines`` to ``decoder`` and write one JSON line per batch."""
    count = 0
    for batch in iter_batches(lines, batch_size):
        outputs = decoder.update(batch, most_recent_only)
        out.write(json.dumps(outputs.to_json_dict(), allow_nan=False) + "\n")
        count += 1
    logger.info("Replayed %d batch(es)", count)
    return count


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay Machina bridge messages")
    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with one bridge message per line ('-' for stdin)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=0,
        help="Messages per decoder update (0 = one batch for the whole input)",
    )
    parser.add_argument(
        "--most-recent-only",
        action="store_true",
        help="Only output the last motion update of each batch",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML file describing DecoderConfig overrides",
    )
    parser.add_argument(
        "--event-name",
        help="Override event_name without editing the YAML",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Python logging level for diagnostics on stderr",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> DecoderConfig:
    cfg = load_config(args.config) if args.config else DecoderConfig()
    if args.event_name is not None:
        cfg.event_name = args.event_name
    if args.most_recent_only:
        cfg.most_recent_only = True
    return cfg.sanitized()


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = _resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    decoder = MotionUpdateDecoder(cfg)
    if args.input == "-":
        replay(sys.stdin, decoder, sys.stdout, batch_size=args.batch_size)
    else:
        path = Path(args.input)
        if not path.exists():
            parser.error(f"input file not found: {path}")
        with path.open("r", encoding="utf-8") as fh:
            replay(fh, decoder, sys.stdout, batch_size=args.batch_size)
    return 0


if __name__ == "__main__":
    sys.exit(main())
