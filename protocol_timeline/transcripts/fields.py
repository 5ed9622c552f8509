# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Field extraction for message blocks.

Each extractor returns a `(value, flags)` pair. A missing field never aborts
parsing: the value falls back to an empty string (or empty tuple) and the
matching flag is reported instead.
"""

from typing import Sequence

from protocol_timeline.transcripts.grammar import TranscriptGrammar
from protocol_timeline.transcripts.models import (
    FLAG_INFERRED_MESSAGE_LABEL,
    FLAG_MISSING_DOCUMENTS,
    FLAG_MISSING_MESSAGE,
    FLAG_MISSING_RECIPIENT,
    FLAG_MISSING_SENDER,
)


Extracted = tuple[str, tuple[str, ...]]


def _find_index(lines: Sequence[str], token: str) -> int:
    for idx, line in enumerate(lines):
        if line.startswith(token):
            return idx
    return -1


def pick_labeled(lines: Sequence[str], label: str) -> str | None:
    """Return the trimmed value of the first line starting with `label:`.

    Returns None if no such line exists.
    """

    token = f"{label}:"
    idx = _find_index(lines, token)
    if idx < 0:
        return None
    return lines[idx].replace(token, "", 1).strip()


def _required(value: str | None, flag: str) -> Extracted:
    if not value:
        return "", (flag,)
    return value, ()


def extract_sender(lines: Sequence[str], grammar: TranscriptGrammar) -> Extracted:
    return _required(pick_labeled(lines, grammar.sender_label), FLAG_MISSING_SENDER)


def extract_recipient(lines: Sequence[str], grammar: TranscriptGrammar) -> Extracted:
    return _required(pick_labeled(lines, grammar.recipient_label), FLAG_MISSING_RECIPIENT)


def extract_message(lines: Sequence[str], grammar: TranscriptGrammar) -> Extracted:
    """Extract the message body.

    An explicit message line wins. Otherwise, if at least one line sits between
    the recipient line and a later document line, those lines are joined into
    the body and flagged as inferred. Failing both, the body is empty and
    flagged as missing.
    """

    explicit = pick_labeled(lines, grammar.message_label)
    if explicit is not None:
        return explicit, ()

    recipient_idx = _find_index(lines, grammar.token(grammar.recipient_label))
    document_idx = _find_index(lines, grammar.token(grammar.document_label))

    if recipient_idx >= 0 and document_idx > recipient_idx + 1:
        body = " ".join(lines[recipient_idx + 1 : document_idx]).strip()
        return body, (FLAG_INFERRED_MESSAGE_LABEL,)

    return "", (FLAG_MISSING_MESSAGE,)


def extract_documents(
    lines: Sequence[str],
    grammar: TranscriptGrammar,
) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Collect document identifiers anywhere in the block.

    Duplicates are dropped, keeping the first occurrence.
    """

    found = [m.group(0) for m in grammar.document_re.finditer(" ".join(lines))]
    documents = tuple(dict.fromkeys(found))
    if not documents:
        return (), (FLAG_MISSING_DOCUMENTS,)
    return documents, ()
