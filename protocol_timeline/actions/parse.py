# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Transcript parsing action.

This action reads the configured transcript and writes the intro metadata and
message records to `messages.json` for the presentation page.
"""

import argparse
from dataclasses import asdict, dataclass
from pathlib import Path

from protocol_timeline.cli_io import may_write
from protocol_timeline.config import ProtocolConfig
from protocol_timeline.json_io import dump_json, write_json
from protocol_timeline.transcripts.grammar import TranscriptGrammar
from protocol_timeline.transcripts.models import ALL_FLAGS
from protocol_timeline.transcripts.registry import load_transcript


@dataclass(frozen=True)
class ParseAction:
    """
    `parse` subcommand.

    Structural transcript errors (no date heading, message before the first
    date heading) abort the run with a ParserError. Missing fields only flag
    the affected records.
    """

    name: str = "parse"
    help: str = "Parse the transcript into messages.json"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `parse` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Overwrite the output file if it already exists",
        )
        parser.add_argument(
            "--stdout",
            action="store_true",
            help="Print the JSON to stdout instead of writing messages_out",
        )
        parser.add_argument(
            "--output",
            "-o",
            help="Override the configured messages_out path",
        )

    def run(self, args: argparse.Namespace, config: ProtocolConfig | None) -> None:
        """
        Execute transcript parsing.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If the transcript cannot be read or the output cannot be written.
            ParserError:
                If the transcript violates the record grammar.
        """

        if config is None:
            raise RuntimeError("ParseAction requires a config, but none was provided")

        grammar = TranscriptGrammar(**asdict(config.grammar))
        parsed = load_transcript(config.transcript, grammar)
        payload = parsed.to_dict()

        if bool(getattr(args, "stdout", False)):
            print(dump_json(payload), end="")
            return

        output = getattr(args, "output", None)
        outfile = Path(output).resolve() if output else config.messages_out
        if not may_write(outfile, force=bool(getattr(args, "force", False))):
            return

        write_json(outfile, payload)

        flagged = parsed.flagged
        print(f"Parsed {len(parsed.messages)} messages ({len(flagged)} flagged).")
        for flag in ALL_FLAGS:
            count = sum(1 for m in flagged if flag in m.flags)
            if count:
                print(f"  - {flag}: {count}")
        print(f"Wrote messages: {outfile}")
