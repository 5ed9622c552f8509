from __future__ import annotations

"""
Subcommand contract shared by `template`, `parse` and `map-images`.
"""

import argparse
from typing import Protocol

from protocol_timeline.config import ProtocolConfig


class Action(Protocol):
    """
    One `protocol-timeline` subcommand.

    Attributes:
        name:
            Subcommand name on the command line, e.g. `map-images`.
        help:
            One-line summary shown in the command list.
        requires_config:
            If True, `protocol.yaml` is loaded before `run()` and the
            subcommand accepts `--config`.
    """

    name: str
    help: str
    requires_config: bool

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add the subcommand's own options, such as `--force`."""

    def run(self, args: argparse.Namespace, config: ProtocolConfig | None) -> None:
        """
        Carry out the step.

        `config` is None for subcommands that work without `protocol.yaml`.
        Failures are raised as `ConfigError` or `ParserError` and turned into
        exit codes by the CLI.
        """
