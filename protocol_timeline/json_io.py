# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""JSON I/O helpers.

This module centralizes reading and writing the JSON data files consumed by
the presentation page.
"""

import json
from pathlib import Path
from typing import Any

from protocol_timeline.config import ConfigError


def dump_json(payload: Any) -> str:
    """Serialize a payload the way all data files are written."""

    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def write_json(path: Path, payload: Any) -> None:
    """Write a JSON data file, creating parent directories as needed."""

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(payload), encoding="utf-8")


def read_json_mapping(path: Path) -> dict[str, Any]:
    """Read a JSON file into a dictionary.

    Args:
        path:
            JSON file path.

    Returns:
        Parsed JSON object.

    Raises:
        ConfigError:
            If the file cannot be read or does not contain an object.
    """

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to read JSON file '{path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigError(f"JSON file must contain an object: {path}")

    return raw
