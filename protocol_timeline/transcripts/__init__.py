"""Transcript parsing.

Transcripts can be read from different source formats (TXT, Markdown, ODT).
Each reader returns plain text, which `parse_transcript()` turns into:

- intro metadata (kicker, title, lede, paragraphs) from the text before the
  first date heading
- message records with sender, recipient, message, documents and parse flags
"""

from protocol_timeline.transcripts.base import (
    MessageBeforeDateError,
    NoDateAnchorError,
    ParserError,
    TranscriptReader,
)
from protocol_timeline.transcripts.grammar import TranscriptGrammar
from protocol_timeline.transcripts.models import (
    DateContext,
    IntroMetadata,
    MessageRecord,
    ParsedTranscript,
)
from protocol_timeline.transcripts.parser import parse_transcript
from protocol_timeline.transcripts.registry import get_transcript_reader, load_transcript

__all__ = [
    "DateContext",
    "IntroMetadata",
    "MessageBeforeDateError",
    "MessageRecord",
    "NoDateAnchorError",
    "ParsedTranscript",
    "ParserError",
    "TranscriptGrammar",
    "TranscriptReader",
    "get_transcript_reader",
    "load_transcript",
    "parse_transcript",
]
