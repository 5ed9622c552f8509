# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Asset store access for preview images and source documents.

The scorer only reads from the store: it checks whether a preview image
exists and asks for the readable text of a source document.
"""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
import subprocess
from typing import Protocol, Sequence


class AssetStore(Protocol):
    """Read-only view of preview images and source documents."""

    def preview_key(self, document: str) -> str:
        """Return the preview asset key for a document identifier."""

        raise NotImplementedError

    def exists(self, key: str) -> bool:
        """Return True if the preview asset exists."""

        raise NotImplementedError

    def extract_text(self, document: str) -> str | None:
        """Return the readable text of a document, or None if unavailable."""

        raise NotImplementedError


@dataclass(frozen=True)
class FilesystemAssetStore:
    """
    Asset store backed by local directories.

    Attributes:
        base_dir:
            Directory that all other paths are relative to.
        documents_dir:
            Directory holding the source documents (PDF files).
        previews_dir:
            Directory holding the preview images, relative to `base_dir`.
            Preview keys are POSIX paths below this directory.
        preview_suffix:
            File extension of preview images.
        extract_command:
            Command used to extract readable text. The document path is
            appended as the last argument and the text is read from stdout.
        extract_timeout:
            Seconds before an extraction run is abandoned.
    """

    base_dir: Path
    documents_dir: Path
    previews_dir: str = "assets/previews"
    preview_suffix: str = ".jpg"
    extract_command: Sequence[str] = ("strings",)
    extract_timeout: float = 30.0

    def preview_key(self, document: str) -> str:
        stem = PurePosixPath(document).stem
        return (PurePosixPath(self.previews_dir) / f"{stem}{self.preview_suffix}").as_posix()

    def exists(self, key: str) -> bool:
        return (self.base_dir / key).is_file()

    def extract_text(self, document: str) -> str | None:
        path = self.documents_dir / document
        if not path.is_file():
            return None

        try:
            result = subprocess.run(
                [*self.extract_command, str(path)],
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.extract_timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired):
            return None

        if result.returncode != 0 or not result.stdout:
            return None
        return result.stdout
