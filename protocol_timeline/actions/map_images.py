# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Preview image mapping action.

This action reads `messages.json` (written by `parse`) and writes
`image-map.json`, mapping each message id to zero or one preview image path.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from protocol_timeline.cli_io import may_write
from protocol_timeline.config import ConfigError, ProtocolConfig
from protocol_timeline.images.scorer import FanOutPolicy, assign_images
from protocol_timeline.images.store import FilesystemAssetStore
from protocol_timeline.json_io import read_json_mapping, write_json


@dataclass(frozen=True)
class MapImagesAction:
    """
    `map-images` subcommand.

    Missing previews, missing documents and failing text extraction never
    abort the run; affected messages simply get no image or a lower score.
    """

    name: str = "map-images"
    help: str = "Select a preview image for each parsed message"
    requires_config: bool = True

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `map-images` subcommand.

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
            "--messages",
            help="Override the configured messages_out path to read from",
        )

    def run(self, args: argparse.Namespace, config: ProtocolConfig | None) -> None:
        """
        Execute the preview mapping.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Loaded configuration.

        Returns:
            None

        Raises:
            ConfigError:
                If messages.json is missing or malformed, or the output cannot
                be written.
        """

        if config is None:
            raise RuntimeError("MapImagesAction requires a config, but none was provided")

        source = getattr(args, "messages", None)
        messages_path = Path(source).resolve() if source else config.messages_out
        if not messages_path.exists():
            raise ConfigError(
                f"Messages file not found: {messages_path}. Run the 'parse' command first."
            )

        messages = self._load_messages(messages_path)

        outfile = config.image_map_out
        if not may_write(outfile, force=bool(getattr(args, "force", False))):
            return

        store = FilesystemAssetStore(
            base_dir=config.base_dir,
            documents_dir=config.documents_dir,
            previews_dir=config.previews_dir,
            preview_suffix=config.preview_suffix,
            extract_command=config.images.extract_command,
            extract_timeout=config.images.extract_timeout,
        )
        policy = FanOutPolicy(
            leading_independent=config.images.leading_independent,
            group_size=config.images.group_size,
        )

        cache: dict[str, int] = {}
        mapping = assign_images(messages, store, cache, policy)
        write_json(outfile, mapping)

        with_image = sum(1 for paths in mapping.values() if paths)
        print(f"Mapped {len(mapping)} messages.")
        print(f"  - with preview: {with_image}, scored documents: {len(cache)}")
        print(f"Wrote image map: {outfile}")

    def _load_messages(self, path: Path) -> list[dict[str, Any]]:
        """
        Read and validate the message list from messages.json.

        Raises:
            ConfigError:
                If the file does not contain a message list with ids.
        """

        payload = read_json_mapping(path)
        messages = payload.get("messages")
        if not isinstance(messages, list):
            raise ConfigError(f"Messages file has no 'messages' list: {path}")

        for idx, message in enumerate(messages, start=1):
            if not isinstance(message, dict) or not isinstance(message.get("id"), str):
                raise ConfigError(f"Invalid message entry at index {idx} in {path}")
            documents = message.get("documents", [])
            if not isinstance(documents, list) or not all(isinstance(d, str) for d in documents):
                raise ConfigError(f"Invalid documents list for message '{message['id']}' in {path}")

        return messages
