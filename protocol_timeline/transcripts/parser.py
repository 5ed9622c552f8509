# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript parser.

Turns a dated message transcript into intro metadata and an ordered list of
message records:

    Das Protokoll                 <- kicker
    Eine Chronik                  <- title
    Was geschah                   <- lede
    Weitere Einleitung ...        <- intro paragraphs

    12. Mai 2021                  <- date heading
    Absender: A
    Empfänger: B
    Nachricht: Hallo
    Dokument: EFTA001.pdf

Everything before the first date heading is intro text. After segmentation,
every block is interpreted in order by `interpret_step()`, a pure function of
the accumulated state and the next block. The most recent date heading is part
of that state and is inherited by every following message.

Missing fields are flagged on the record. Only two conditions are fatal: no
date heading anywhere, and a message block before the first date heading.
"""

from dataclasses import dataclass, field, replace

from protocol_timeline.transcripts.base import MessageBeforeDateError, NoDateAnchorError
from protocol_timeline.transcripts.blocks import Block, Line, segment_blocks
from protocol_timeline.transcripts.chain import Chain
from protocol_timeline.transcripts.dates import parse_date_line, split_date_runs
from protocol_timeline.transcripts.fields import (
    extract_documents,
    extract_message,
    extract_recipient,
    extract_sender,
)
from protocol_timeline.transcripts.grammar import DEFAULT_GRAMMAR, TranscriptGrammar
from protocol_timeline.transcripts.models import (
    DateContext,
    IntroMetadata,
    MessageRecord,
    ParsedTranscript,
    message_id,
)


@dataclass(frozen=True)
class ScanState:
    """Accumulator for `interpret_step()`.

    Attributes:
        date:
            Most recent date heading, or None before the first one.
        records:
            Records emitted so far.
    """

    date: DateContext | None = None
    records: Chain[MessageRecord] = field(default_factory=Chain)

    @property
    def messages(self) -> tuple[MessageRecord, ...]:
        return self.records.to_tuple()

    @property
    def next_sequence(self) -> int:
        return len(self.records) + 1


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def starts_date_heading(raw_line: str) -> bool:
    """Return True if a raw line is, or begins with, a date heading.

    Glued headings such as `4. Juni 2022 5. Juni 2022` count as well, so the
    intro ends exactly where segmentation sees the first date.
    """

    return any(parse_date_line(f.strip()) is not None for f in split_date_runs(raw_line))


def split_intro(raw_lines: list[str]) -> tuple[IntroMetadata, int]:
    """Extract intro metadata from the lines before the first date heading.

    Args:
        raw_lines:
            Transcript lines as read (not yet date-split).

    Returns:
        A tuple of (`intro`, `first_date_index`), the latter being the 0-based
        index of the first line containing a date heading.

    Raises:
        NoDateAnchorError:
            If no line is a date heading.
    """

    for idx, line in enumerate(raw_lines):
        if starts_date_heading(line):
            intro_lines = [t for t in (x.strip() for x in raw_lines[:idx]) if t]
            return IntroMetadata.from_lines(intro_lines), idx

    raise NoDateAnchorError("No date heading found in transcript")


def expand_lines(raw_lines: list[str]) -> list[Line]:
    """Number the lines and split glued-together date headings apart."""

    expanded: list[Line] = []
    for number, raw in enumerate(raw_lines, start=1):
        for fragment in split_date_runs(raw):
            expanded.append(Line(number=number, text=fragment))
    return expanded


def build_record(
    block: Block,
    date: DateContext,
    sequence: int,
    grammar: TranscriptGrammar = DEFAULT_GRAMMAR,
) -> MessageRecord:
    """Build a message record from a sender block."""

    lines = block.lines
    message, message_flags = extract_message(lines, grammar)
    sender, sender_flags = extract_sender(lines, grammar)
    recipient, recipient_flags = extract_recipient(lines, grammar)
    documents, document_flags = extract_documents(lines, grammar)

    return MessageRecord(
        id=message_id(sequence),
        date=date,
        sender=sender,
        recipient=recipient,
        message=message,
        documents=documents,
        flags=message_flags + sender_flags + recipient_flags + document_flags,
    )


def interpret_step(
    state: ScanState,
    block: Block,
    grammar: TranscriptGrammar = DEFAULT_GRAMMAR,
) -> ScanState:
    """Interpret one block.

    A leading date heading replaces the current date. A block that (after the
    heading) starts with a sender line becomes a message record. Anything else
    is prose and leaves the state unchanged apart from the date.

    Raises:
        MessageBeforeDateError:
            If a sender block is found while no date is known.
    """

    date = parse_date_line(block.first)
    if date is not None:
        state = replace(state, date=date)
        block = block.rest()
        if not block.lines:
            return state

    if not grammar.is_sender_line(block.first):
        return state

    if state.date is None:
        raise MessageBeforeDateError(
            "Message found before any date heading",
            line=block.start_line,
            excerpt=block.first,
        )

    record = build_record(block, state.date, state.next_sequence, grammar)
    return replace(state, records=state.records.push(record))


def parse_transcript(text: str, grammar: TranscriptGrammar = DEFAULT_GRAMMAR) -> ParsedTranscript:
    """Parse a transcript.

    Args:
        text:
            Full transcript text. CR-LF and LF line endings are accepted.
        grammar:
            Label tokens and document pattern.

    Returns:
        The intro metadata and all message records in document order.

    Raises:
        NoDateAnchorError:
            If the transcript has no date heading.
        MessageBeforeDateError:
            If a message block precedes the first date heading.
    """

    raw_lines = normalize_newlines(text).split("\n")
    intro, _ = split_intro(raw_lines)

    state = ScanState()
    for block in segment_blocks(expand_lines(raw_lines), grammar):
        state = interpret_step(state, block, grammar)

    return ParsedTranscript(intro=intro, messages=state.messages)
