# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Parsed transcript records.

All records are immutable once created. The JSON layout produced by
`ParsedTranscript.to_dict()` is read verbatim by the scrolling presentation
page, so field names and their order must not change.
"""

from dataclasses import dataclass
from typing import Any


FLAG_MISSING_SENDER = "missing_sender"
FLAG_MISSING_RECIPIENT = "missing_recipient"
FLAG_MISSING_MESSAGE = "missing_message"
FLAG_INFERRED_MESSAGE_LABEL = "inferred_message_label"
FLAG_MISSING_DOCUMENTS = "missing_documents"

ALL_FLAGS = (
    FLAG_INFERRED_MESSAGE_LABEL,
    FLAG_MISSING_MESSAGE,
    FLAG_MISSING_SENDER,
    FLAG_MISSING_RECIPIENT,
    FLAG_MISSING_DOCUMENTS,
)


@dataclass(frozen=True)
class IntroMetadata:
    """Preamble text found before the first date line.

    Attributes:
        kicker:
            First intro line.
        title:
            Second intro line.
        lede:
            Third intro line.
        paragraphs:
            All remaining intro lines in order.
    """

    kicker: str = ""
    title: str = ""
    lede: str = ""
    paragraphs: tuple[str, ...] = ()

    @classmethod
    def from_lines(cls, lines: list[str]) -> IntroMetadata:
        """Assign intro lines by position (kicker, title, lede, paragraphs)."""

        padded = list(lines[:3]) + [""] * (3 - len(lines[:3]))
        return cls(
            kicker=padded[0],
            title=padded[1],
            lede=padded[2],
            paragraphs=tuple(lines[3:]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kicker": self.kicker,
            "title": self.title,
            "lede": self.lede,
            "intro_paragraphs": list(self.paragraphs),
        }


@dataclass(frozen=True)
class DateContext:
    """A calendar date heading that applies to all following messages.

    Attributes:
        label:
            Human-readable form as written, e.g. `12. Mai 2021`.
        iso:
            Canonical `YYYY-MM-DD` form.
        note:
            Optional parenthetical annotation following the date.
    """

    label: str
    iso: str
    note: str | None = None


@dataclass(frozen=True)
class MessageRecord:
    """One message taken from the transcript."""

    id: str
    date: DateContext
    sender: str
    recipient: str
    message: str
    documents: tuple[str, ...]
    flags: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date_iso": self.date.iso,
            "date_label": self.date.label,
            "sender": self.sender,
            "recipient": self.recipient,
            "message": self.message,
            "documents": list(self.documents),
            "parse_flags": list(self.flags),
        }


@dataclass(frozen=True)
class ParsedTranscript:
    """Parser result: intro metadata plus messages in document order."""

    intro: IntroMetadata
    messages: tuple[MessageRecord, ...]

    @property
    def flagged(self) -> list[MessageRecord]:
        return [m for m in self.messages if m.flags]

    def to_dict(self) -> dict[str, Any]:
        return {
            "intro": self.intro.to_dict(),
            "messages": [m.to_dict() for m in self.messages],
        }


def message_id(sequence: int) -> str:
    """Return the message id for a 1-based sequence number (`msg-001`, ...)."""

    return f"msg-{sequence:03d}"
