# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader interface and parser errors."""

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class TranscriptReader(Protocol):
    """Interface for reading a transcript source file.

    Implementations only extract the raw text (one source line or paragraph per
    line). Record parsing is done by `parse_transcript()` on the returned text.
    """

    def can_read(self, path: Path) -> bool:
        """Return True if this reader supports the given file."""

        raise NotImplementedError

    def read_text(self, path: Path) -> str:
        """Return the transcript text with `\\n` line endings."""

        raise NotImplementedError


@dataclass(frozen=True)
class ParserError(RuntimeError):
    """Raised when a transcript cannot be read or violates the record grammar."""

    message: str
    path: Path | None = None
    line: int | None = None
    excerpt: str | None = None

    def __str__(self) -> str:  # pragma: no cover
        parts: list[str] = []

        if self.path is not None:
            if self.line is not None:
                parts.append(f"{self.path}:{self.line}: {self.message}")
            else:
                parts.append(f"{self.path}: {self.message}")
        elif self.line is not None:
            parts.append(f"line {self.line}: {self.message}")
        else:
            parts.append(self.message)

        if isinstance(self.excerpt, str) and self.excerpt.strip():
            excerpt = self.excerpt.strip().replace("\n", " ")
            if len(excerpt) > 160:
                excerpt = excerpt[:157] + "..."
            parts.append(f"> {excerpt}")

        return "\n".join(parts)

    def with_path(self, path: Path) -> ParserError:
        """Return a copy of this error that names the source file."""

        return type(self)(message=self.message, path=path, line=self.line, excerpt=self.excerpt)


class NoDateAnchorError(ParserError):
    """The transcript contains no date heading at all."""


class MessageBeforeDateError(ParserError):
    """A message block appears before the first date heading."""
