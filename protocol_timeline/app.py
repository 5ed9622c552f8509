from __future__ import annotations

"""
Command line interface of `protocol-timeline`.

A timeline is built in two steps, each one a subcommand:

	protocol-timeline parse        transcript  -> messages.json
	protocol-timeline map-images   messages.json -> image-map.json

`template` writes a starter `protocol.yaml` that both steps read their paths
and grammar settings from.
"""

import argparse
import sys
from dotenv import load_dotenv

from protocol_timeline.actions.base import Action
from protocol_timeline.actions.map_images import MapImagesAction
from protocol_timeline.actions.parse import ParseAction
from protocol_timeline.actions.template import TemplateAction
from protocol_timeline.config import ConfigError, ProtocolConfig, find_config_path, load_config
from protocol_timeline.transcripts.base import ParserError


EXIT_OK = 0
EXIT_CONFIG = 2
EXIT_TRANSCRIPT = 4

_EPILOG = (
	"Run 'parse' first, then 'map-images'. Both look for the config in --config, "
	"then $PROTOCOL_TIMELINE_CONFIG, then ./protocol.yaml."
)


def _action_repository() -> dict[str, Action]:
	"""Subcommands in the order they appear in `--help`."""
	actions: list[Action] = [
		TemplateAction(),
		ParseAction(),
		MapImagesAction(),
	]
	return {a.name: a for a in actions}


def build_parser() -> argparse.ArgumentParser:
	"""
	Build the `protocol-timeline` argument parser.

	Only subcommands that read `protocol.yaml` get the `--config` option.
	"""
	parser = argparse.ArgumentParser(
		prog="protocol-timeline",
		description="Turn a dated message transcript into timeline data: message records and preview images.",
		epilog=_EPILOG,
	)

	with_config = argparse.ArgumentParser(add_help=False)
	with_config.add_argument(
		"--config",
		"-c",
		metavar="YAML",
		help="protocol.yaml holding transcript, output and preview paths",
	)

	subparsers = parser.add_subparsers(dest="action", metavar="COMMAND", required=True)

	for name, action in _action_repository().items():
		sub = subparsers.add_parser(
			name,
			help=action.help,
			parents=[with_config] if action.requires_config else [],
		)
		action.add_arguments(sub)
		sub.set_defaults(_action_name=name)

	return parser


def _config_for(action: Action, args: argparse.Namespace) -> ProtocolConfig | None:
	if not action.requires_config:
		return None
	return load_config(find_config_path(getattr(args, "config", None)))


def main(argv: list[str] | None = None) -> int:
	"""
	Parse the command line and run the selected step.

	Args:
		argv:
			Arguments without the program name. Defaults to `sys.argv[1:]`.

	Returns:
		`EXIT_OK`, `EXIT_CONFIG` for a missing or broken `protocol.yaml` (and
		refused overwrites), or `EXIT_TRANSCRIPT` when the transcript has no
		date heading or a message ahead of the first one.
	"""
	load_dotenv()

	parser = build_parser()
	args = parser.parse_args(argv)

	actions = _action_repository()
	action = actions.get(getattr(args, "_action_name", None) or "")
	if action is None:
		parser.error("Unknown or missing command")

	try:
		action.run(args, _config_for(action, args))
	except ConfigError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return EXIT_CONFIG
	except ParserError as exc:
		print(f"error: {exc}", file=sys.stderr)
		return EXIT_TRANSCRIPT

	return EXIT_OK


if __name__ == "__main__":
	raise SystemExit(main())
