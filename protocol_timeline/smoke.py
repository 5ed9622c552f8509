# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Smoke-test helpers.

Run via:

    poetry run python -m protocol_timeline.smoke

This only parses the configured transcript and prints statistics. Nothing is
written and no text extraction runs.
"""

import argparse
from dataclasses import asdict
from pathlib import Path

from protocol_timeline.config import ConfigError, load_config
from protocol_timeline.json_io import dump_json
from protocol_timeline.transcripts.base import ParserError
from protocol_timeline.transcripts.grammar import TranscriptGrammar
from protocol_timeline.transcripts.models import ALL_FLAGS
from protocol_timeline.transcripts.registry import load_transcript


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Protocol timeline smoke test")
    parser.add_argument(
        "--config",
        default="protocol.yaml",
        help="Path to protocol.yaml (default: ./protocol.yaml)",
    )
    parser.add_argument(
        "--print-flagged",
        action="store_true",
        help="Print the JSON of all flagged messages",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config_path = Path(str(args.config))

    try:
        cfg = load_config(config_path)
        parsed = load_transcript(cfg.transcript, TranscriptGrammar(**asdict(cfg.grammar)))
    except ConfigError as exc:
        print(f"CONFIG ERROR: {exc}")
        return 2
    except ParserError as exc:
        print(f"PARSE ERROR: {exc}")
        return 4

    dates = {m.date.iso for m in parsed.messages}
    documents = {d for m in parsed.messages for d in m.documents}

    print(f"Config: {cfg.config_path}")
    print(f"Transcript: {cfg.transcript}")
    print(f"Title: {parsed.intro.title}")
    print(f"Messages: {len(parsed.messages)}")
    print(f"Distinct dates: {len(dates)}")
    print(f"Distinct documents: {len(documents)}")
    for flag in ALL_FLAGS:
        print(f"Flag {flag}: {sum(1 for m in parsed.messages if flag in m.flags)}")

    # Ids must be gapless and in order.
    expected = [f"msg-{i:03d}" for i in range(1, len(parsed.messages) + 1)]
    if [m.id for m in parsed.messages] != expected:
        print("INTERNAL ERROR: message ids are not sequential")
        return 3

    if bool(args.print_flagged):
        print(dump_json([m.to_dict() for m in parsed.flagged]), end="")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
