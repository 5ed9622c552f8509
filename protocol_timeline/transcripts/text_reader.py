# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""TXT/Markdown transcript reader.

The file must be UTF-8 encoded. A leading byte order mark is dropped and CR-LF
or CR line endings are normalized to LF.
"""

from pathlib import Path

from protocol_timeline.transcripts.base import ParserError


class TextTranscriptReader:
    """Read .txt and .md transcripts."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() in {".txt", ".md"}

    def read_text(self, path: Path) -> str:
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParserError(f"Transcript is not valid UTF-8: {exc}", path=path) from exc
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to read text file: {exc}", path=path) from exc

        return raw.replace("\r\n", "\n").replace("\r", "\n")
