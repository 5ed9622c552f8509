# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Template configuration generator.

This action writes a ready-to-edit `protocol.yaml` file into the current
directory (or a user-specified path).
"""

import argparse
from dataclasses import dataclass
from pathlib import Path

from protocol_timeline.config import ConfigError, ProtocolConfig


@dataclass(frozen=True)
class TemplateAction:
    """
    `template` subcommand.

    This action does not require a YAML config because it produces one.
    """

    name: str = "template"
    help: str = "Write a template protocol.yaml config"
    requires_config: bool = False

    _TEMPLATE_YAML: str = "\n".join(
        [
            "# Transcript source file (.txt, .md or .odt)",
            "transcript: content/article.txt",
            "",
            "# Output files",
            "messages_out: data/messages.json",
            "image_map_out: data/image-map.json",
            "",
            "# Source documents referenced by the messages (e.g. EFTA001.pdf)",
            "documents_dir: Tchoumi",
            "",
            "# Preview images, one per document: <previews_dir>/<document stem><preview_suffix>",
            "# The previews_dir value is written verbatim into the image map.",
            "previews_dir: assets/previews",
            "preview_suffix: .jpg",
            "",
            "# Record grammar (optional; defaults shown)",
            "# Labels are given without the trailing colon and are case-sensitive.",
            "# grammar:",
            "#   sender_label: Absender",
            "#   recipient_label: Empfänger",
            "#   message_label: Nachricht",
            "#   # Lines starting with this label mark the end of an unlabeled message body.",
            "#   document_label: Dokument",
            "#   document_pattern: 'EFTA\\d+\\.pdf'",
            "",
            "# Preview image selection (optional; defaults shown)",
            "# images:",
            "#   # The first messages are scored on their own ...",
            "#   leading_independent: 2",
            "#   # ... afterwards runs of this many messages share one result.",
            "#   group_size: 5",
            "#   # Text extraction command; the document path is appended.",
            "#   extract_command: [strings]",
            "#   extract_timeout: 30",
            "",
        ]
    )

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """
        Register CLI arguments for the `template` subcommand.

        Args:
            parser:
                Subparser for this command.

        Returns:
            None
        """

        parser.add_argument(
            "path",
            nargs="?",
            default="protocol.yaml",
            help="Destination path for the template (default: ./protocol.yaml)",
        )
        parser.add_argument(
            "-f",
            "--force",
            action="store_true",
            help="Allow overwriting an existing file",
        )

    def run(self, args: argparse.Namespace, config: ProtocolConfig | None) -> None:
        """
        Execute the template writer.

        Args:
            args:
                Parsed args for the subcommand.
            config:
                Unused for this action.

        Returns:
            None

        Raises:
            ConfigError:
                If the destination exists and `--force` is not set.
        """

        _ = config
        dest = Path(args.path)
        self._write_template(dest, force=bool(args.force))
        print(f"Wrote template config to: {dest}")

    def _write_template(self, dest: Path, *, force: bool) -> None:
        """
        Write a template YAML configuration file.

        Raises:
            ConfigError:
                If the destination exists and `force` is False.
            OSError:
                If the file cannot be written.
        """

        if dest.exists() and not force:
            raise ConfigError(f"Refusing to overwrite existing file: {dest} (use --force)")

        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(self._TEMPLATE_YAML, encoding="utf-8")
