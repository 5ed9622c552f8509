# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Block segmentation.

The (date-split) transcript lines are partitioned into blocks of contiguous
non-blank lines:

- A blank line closes the current block.
- A date heading always closes the current block and starts a new one.
- A sender line closes the current block and starts a new one, so consecutive
  messages under the same date need no separator.
- Any other line is appended to the current block.

Segmentation is written as a fold: `segment_step()` maps the accumulated state
and the next line to a new state without mutating its input.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable

from protocol_timeline.transcripts.chain import Chain
from protocol_timeline.transcripts.dates import parse_date_line
from protocol_timeline.transcripts.grammar import DEFAULT_GRAMMAR, TranscriptGrammar


@dataclass(frozen=True)
class Line:
    """A logical input line with its 1-based source line number."""

    number: int
    text: str


@dataclass(frozen=True)
class Block:
    """A contiguous run of trimmed, non-blank lines.

    `numbers` holds the source line number of each entry in `lines`.
    """

    lines: tuple[str, ...]
    numbers: tuple[int, ...]

    @property
    def first(self) -> str:
        return self.lines[0]

    @property
    def start_line(self) -> int:
        return self.numbers[0]

    def rest(self) -> Block:
        """Return the block without its first line."""

        return Block(lines=self.lines[1:], numbers=self.numbers[1:])

    @classmethod
    def from_lines(cls, lines: tuple[Line, ...]) -> Block:
        return cls(lines=tuple(x.text for x in lines), numbers=tuple(x.number for x in lines))


@dataclass(frozen=True)
class SegmentState:
    """Accumulator for `segment_step()`.

    Attributes:
        closed:
            Finished blocks.
        pending:
            Lines of the block that is still open.
    """

    closed: Chain[Block] = field(default_factory=Chain)
    pending: Chain[Line] = field(default_factory=Chain)

    @property
    def current(self) -> Block | None:
        if not self.pending:
            return None
        return Block.from_lines(self.pending.to_tuple())

    def flush(self) -> SegmentState:
        block = self.current
        if block is None:
            return self
        return SegmentState(closed=self.closed.push(block))

    def start(self, line: Line) -> SegmentState:
        return replace(self.flush(), pending=Chain().push(line))

    def append(self, line: Line) -> SegmentState:
        return replace(self, pending=self.pending.push(line))

    def blocks(self) -> list[Block]:
        """Return all blocks, including a still open one."""

        return list(self.flush().closed.to_tuple())


def segment_step(
    state: SegmentState,
    line: Line,
    grammar: TranscriptGrammar = DEFAULT_GRAMMAR,
) -> SegmentState:
    """Advance the segmentation by one line."""

    text = line.text.strip()
    if not text:
        return state.flush()

    trimmed = Line(number=line.number, text=text)
    if parse_date_line(text) is not None or grammar.is_sender_line(text):
        return state.start(trimmed)

    return state.append(trimmed)


def segment_blocks(
    lines: Iterable[Line],
    grammar: TranscriptGrammar = DEFAULT_GRAMMAR,
) -> list[Block]:
    """Partition lines into blocks. A trailing open block is flushed."""

    state = SegmentState()
    for line in lines:
        state = segment_step(state, line, grammar)
    return state.blocks()
