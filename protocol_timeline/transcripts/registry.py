# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Transcript reader registry."""

from pathlib import Path

from protocol_timeline.config import ConfigError
from protocol_timeline.transcripts.base import ParserError, TranscriptReader
from protocol_timeline.transcripts.grammar import DEFAULT_GRAMMAR, TranscriptGrammar
from protocol_timeline.transcripts.models import ParsedTranscript
from protocol_timeline.transcripts.odt_reader import OdtTranscriptReader
from protocol_timeline.transcripts.parser import parse_transcript
from protocol_timeline.transcripts.text_reader import TextTranscriptReader


_READERS: list[TranscriptReader] = [
    OdtTranscriptReader(),
    TextTranscriptReader(),
]


def get_transcript_reader(path: Path) -> TranscriptReader:
    """Select a transcript reader based on the file suffix.

    Args:
        path:
            Transcript file path.

    Returns:
        A reader instance.

    Raises:
        ConfigError:
            If no reader supports the file.
    """

    for reader in _READERS:
        if reader.can_read(path):
            return reader

    supported = ", ".join(sorted({".odt", ".txt", ".md"}))
    raise ConfigError(f"Unsupported transcript format: {path} (supported: {supported})")


def read_transcript_text(path: Path) -> str:
    """Read a transcript and normalize read errors to ConfigError."""

    if not path.is_file():
        raise ConfigError(f"Transcript file not found: {path}")

    reader = get_transcript_reader(path)
    try:
        return reader.read_text(path)
    except ParserError as exc:
        raise ConfigError(str(exc)) from exc


def load_transcript(path: Path, grammar: TranscriptGrammar = DEFAULT_GRAMMAR) -> ParsedTranscript:
    """Read and parse a transcript file.

    Read errors become ConfigError. Structural errors are re-raised as
    ParserError naming the file.
    """

    text = read_transcript_text(path)
    try:
        return parse_transcript(text, grammar)
    except ParserError as exc:
        raise exc.with_path(path) from exc
