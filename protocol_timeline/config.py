# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""
Configuration loading and validation.

This module handles reading `protocol.yaml`, validating its keys, and
normalizing paths so that downstream actions can rely on a typed config object.
"""

from dataclasses import dataclass, field
import os
from pathlib import Path
import re
from typing import Any

import yaml


CONFIG_ENV_VAR = "PROTOCOL_TIMELINE_CONFIG"


@dataclass(frozen=True)
class GrammarConfig:
    """
    Record grammar settings.

    Attributes:
        sender_label:
            Sender-label token without the trailing colon.
        recipient_label:
            Recipient-label token without the trailing colon.
        message_label:
            Message-label token without the trailing colon.
        document_label:
            Document line token used to infer unlabeled message bodies.
        document_pattern:
            Regular expression for document identifiers.
    """

    sender_label: str = "Absender"
    recipient_label: str = "Empfänger"
    message_label: str = "Nachricht"
    document_label: str = "Dokument"
    document_pattern: str = r"EFTA\d+\.pdf"


@dataclass(frozen=True)
class ImagesConfig:
    """
    Preview image selection settings.

    Attributes:
        leading_independent:
            Number of leading messages that get their own scoring computation.
        group_size:
            Number of consecutive messages sharing one scoring computation
            afterwards.
        extract_command:
            Text extraction command; the document path is appended.
        extract_timeout:
            Seconds before a text extraction run is treated as failed.
    """

    leading_independent: int = 2
    group_size: int = 5
    extract_command: tuple[str, ...] = ("strings",)
    extract_timeout: float = 30.0


@dataclass(frozen=True)
class ProtocolConfig:
    """
    Parsed configuration for a protocol timeline build.

    Attributes:
        config_path:
            Path to the YAML config file used for this run.
        base_dir:
            Directory that relative paths are resolved against.
        transcript:
            Transcript source file.
        messages_out:
            Target path of the parsed messages JSON.
        image_map_out:
            Target path of the preview image mapping JSON.
        documents_dir:
            Directory holding the referenced source documents.
        previews_dir:
            Preview image directory, as a POSIX path relative to `base_dir`.
            Written verbatim into the image map.
        preview_suffix:
            File extension of preview images.
        grammar:
            Record grammar settings.
        images:
            Preview image selection settings.
    """

    config_path: Path
    base_dir: Path
    transcript: Path
    messages_out: Path
    image_map_out: Path
    documents_dir: Path
    previews_dir: str
    preview_suffix: str
    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    images: ImagesConfig = field(default_factory=ImagesConfig)


class ConfigError(RuntimeError):
    """
    Raised when the YAML configuration is missing, invalid, or cannot be parsed.
    """

    pass


def find_config_path(cli_path: str | None) -> Path:
    """
    Determine which YAML config file to use.

    Args:
        cli_path:
            Optional config path provided on the command line. Falls back to
            the `PROTOCOL_TIMELINE_CONFIG` environment variable and then to
            `./protocol.yaml`.

    Returns:
        The resolved Path object (not necessarily existing).
    """

    if cli_path:
        return Path(cli_path)

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path.cwd() / "protocol.yaml"


def _optional_str(raw: dict[str, Any], key: str, default: str, *, context: str = "") -> str:
    value = raw.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"'{context}{key}' must be a non-empty string")
    return value.strip()


def _parse_grammar(value: Any) -> GrammarConfig:
    """
    Parse and validate the optional `grammar` section.

    Args:
        value:
            Raw YAML value for the `grammar` key.

    Returns:
        A GrammarConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return GrammarConfig()

    if not isinstance(value, dict):
        raise ConfigError("'grammar' must be a mapping if provided")

    defaults = GrammarConfig()
    labels: dict[str, str] = {}
    for key in ("sender_label", "recipient_label", "message_label", "document_label"):
        label = _optional_str(value, key, getattr(defaults, key), context="grammar.")
        labels[key] = label.rstrip(":").strip()

    pattern = _optional_str(value, "document_pattern", defaults.document_pattern, context="grammar.")
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"grammar.document_pattern is not a valid regular expression: {exc}") from exc

    return GrammarConfig(document_pattern=pattern, **labels)


def _parse_images(value: Any) -> ImagesConfig:
    """
    Parse and validate the optional `images` section.

    Args:
        value:
            Raw YAML value for the `images` key.

    Returns:
        An ImagesConfig instance (with defaults if section is missing).

    Raises:
        ConfigError:
            If the section exists but is not valid.
    """

    if value is None:
        return ImagesConfig()

    if not isinstance(value, dict):
        raise ConfigError("'images' must be a mapping if provided")

    leading = value.get("leading_independent", ImagesConfig.leading_independent)
    group_size = value.get("group_size", ImagesConfig.group_size)
    command = value.get("extract_command", list(ImagesConfig.extract_command))
    timeout = value.get("extract_timeout", ImagesConfig.extract_timeout)

    if not isinstance(leading, int) or isinstance(leading, bool):
        raise ConfigError("images.leading_independent must be an integer")
    if not isinstance(group_size, int) or isinstance(group_size, bool):
        raise ConfigError("images.group_size must be an integer")
    if leading < 0:
        raise ConfigError("images.leading_independent must be >= 0")
    if group_size <= 0:
        raise ConfigError("images.group_size must be > 0")

    if isinstance(command, str):
        command = command.split()
    if (
        not isinstance(command, list)
        or not command
        or not all(isinstance(c, str) and c.strip() for c in command)
    ):
        raise ConfigError("images.extract_command must be a non-empty string or list of strings")

    if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
        raise ConfigError("images.extract_timeout must be a number > 0")

    return ImagesConfig(
        leading_independent=leading,
        group_size=group_size,
        extract_command=tuple(c.strip() for c in command),
        extract_timeout=float(timeout),
    )


def load_config(path: Path) -> ProtocolConfig:
    """
    Load and validate a `protocol.yaml` configuration file.

    Args:
        path:
            Path to the YAML config file.

    Returns:
        A validated ProtocolConfig instance.

    Raises:
        ConfigError:
            If the file is missing, unreadable, cannot be parsed as YAML, or is
            missing required keys.
    """

    if not path.exists():
        raise ConfigError(
            "No protocol.yaml found in current directory and no --config provided. "
            "Use the 'template' command to create one or pass --config PATH."
        )
    if not path.is_file():
        raise ConfigError(f"Config path is not a file: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read YAML config: {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError("Config YAML must contain a mapping at the top level")

    if "transcript" not in raw:
        raise ConfigError("Config is missing required key(s): transcript")

    transcript = _optional_str(raw, "transcript", "")
    messages_out = _optional_str(raw, "messages_out", "data/messages.json")
    image_map_out = _optional_str(raw, "image_map_out", "data/image-map.json")
    documents_dir = _optional_str(raw, "documents_dir", "Tchoumi")
    previews_dir = _optional_str(raw, "previews_dir", "assets/previews")
    preview_suffix = _optional_str(raw, "preview_suffix", ".jpg")

    if not preview_suffix.startswith("."):
        preview_suffix = "." + preview_suffix

    grammar = _parse_grammar(raw.get("grammar"))
    images = _parse_images(raw.get("images"))

    # Interpret all paths relative to config file location.
    base_dir = path.parent.resolve()

    return ProtocolConfig(
        config_path=path.resolve(),
        base_dir=base_dir,
        transcript=(base_dir / transcript).resolve(),
        messages_out=(base_dir / messages_out).resolve(),
        image_map_out=(base_dir / image_map_out).resolve(),
        documents_dir=(base_dir / documents_dir).resolve(),
        previews_dir=Path(previews_dir).as_posix().rstrip("/"),
        preview_suffix=preview_suffix,
        grammar=grammar,
        images=images,
    )
