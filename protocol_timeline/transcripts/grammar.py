# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Record grammar: field label tokens and the document identifier pattern."""

from dataclasses import dataclass, field
import re


@dataclass(frozen=True)
class TranscriptGrammar:
    """
    Label tokens and patterns of the message record grammar.

    Labels are given without the trailing colon. A field line starts with
    `<label>:` (case-sensitive) and the field value is the remainder of the line.

    Attributes:
        sender_label:
            Introduces the sender line and starts a new message block.
        recipient_label:
            Introduces the recipient line.
        message_label:
            Introduces an explicit message body line.
        document_label:
            Introduces a document line. Used to infer an unlabeled message body
            between the recipient line and the document line.
        document_pattern:
            Regular expression matching a document identifier anywhere in a block.
    """

    sender_label: str = "Absender"
    recipient_label: str = "Empfänger"
    message_label: str = "Nachricht"
    document_label: str = "Dokument"
    document_pattern: str = r"EFTA\d+\.pdf"
    _document_re: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_document_re", re.compile(self.document_pattern))

    @property
    def document_re(self) -> re.Pattern[str]:
        return self._document_re

    def token(self, label: str) -> str:
        return f"{label}:"

    def is_sender_line(self, line: str) -> bool:
        return line.startswith(self.token(self.sender_label))


DEFAULT_GRAMMAR = TranscriptGrammar()
