# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Date heading recognition.

Date headings look like `12. Mai 2021` with an optional parenthetical note,
e.g. `3. März 2020 (Nachtrag)`. Month names come from a fixed German calendar
table. Lines whose month name is unknown are plain text, not an error.
"""

import re

from protocol_timeline.transcripts.models import DateContext


MONTHS: dict[str, str] = {
    "januar": "01",
    "februar": "02",
    "maerz": "03",
    "märz": "03",
    "april": "04",
    "mai": "05",
    "juni": "06",
    "juli": "07",
    "august": "08",
    "september": "09",
    "oktober": "10",
    "november": "11",
    "dezember": "12",
}

_LETTERS = "A-Za-zÄÖÜäöü"

_DATE_LINE_RE = re.compile(
    rf"^(?P<day>[0-9]{{1,2}})\.\s+(?P<month>[{_LETTERS}]+)\s+(?P<year>[0-9]{{4}})"
    r"(?:\s*\((?P<note>.+)\))?\s*$"
)

# A date pattern at the start of the line, after whitespace, or glued directly
# onto a preceding year or closing note parenthesis.
_EMBEDDED_DATE_RE = re.compile(
    rf"(?:^|(?<=\s)|(?<=[0-9]{{4}})|(?<=\)))[0-9]{{1,2}}\.\s+[{_LETTERS}]+\s+[0-9]{{4}}"
)


def month_number(name: str) -> str | None:
    """Resolve a month name to its two-digit number.

    Matching ignores case and accepts `ae` in place of `ä`.
    """

    lowered = name.lower()
    return MONTHS.get(lowered.replace("ä", "ae")) or MONTHS.get(lowered)


def parse_date_line(line: str) -> DateContext | None:
    """Parse a date heading.

    Args:
        line:
            A single (trimmed) line.

    Returns:
        The date context, or None if the line is not a date heading.
    """

    match = _DATE_LINE_RE.match(line)
    if match is None:
        return None

    month = month_number(match.group("month"))
    if month is None:
        return None

    day = match.group("day")
    year = match.group("year")
    return DateContext(
        label=f"{day}. {match.group('month')} {year}",
        iso=f"{year}-{month}-{day.zfill(2)}",
        note=match.group("note"),
    )


def split_date_runs(line: str) -> list[str]:
    """Split a line that contains several date patterns.

    Each date pattern starts a new fragment. Fragments are trimmed and empty
    fragments dropped. Lines with fewer than two date patterns are returned
    unchanged as a single-item list.
    """

    starts = [m.start() for m in _EMBEDDED_DATE_RE.finditer(line)]
    if len(starts) < 2:
        return [line]

    bounds = [0] + [s for s in starts if s > 0] + [len(line)]
    fragments = [line[a:b].strip() for a, b in zip(bounds, bounds[1:])]
    return [f for f in fragments if f]
