from __future__ import annotations

import json

import pytest

from protocol_timeline.transcripts.base import MessageBeforeDateError, NoDateAnchorError
from protocol_timeline.transcripts.blocks import Block
from protocol_timeline.transcripts.models import DateContext
from protocol_timeline.transcripts.parser import (
    ScanState,
    interpret_step,
    parse_transcript,
    starts_date_heading,
)


def test_single_message_example() -> None:
    text = "\n".join(
        ["12. Mai 2021", "Absender: A", "Empfänger: B", "Nachricht: Hallo", "EFTA001.pdf"]
    )

    parsed = parse_transcript(text).to_dict()

    assert parsed["messages"] == [
        {
            "id": "msg-001",
            "date_iso": "2021-05-12",
            "date_label": "12. Mai 2021",
            "sender": "A",
            "recipient": "B",
            "message": "Hallo",
            "documents": ["EFTA001.pdf"],
            "parse_flags": [],
        }
    ]
    assert parsed["intro"] == {"kicker": "", "title": "", "lede": "", "intro_paragraphs": []}


def test_intro_lines_are_assigned_by_position(sample_transcript: str) -> None:
    intro = parse_transcript(sample_transcript).intro

    assert intro.kicker == "Das Protokoll"
    assert intro.title == "Eine Chronik in Nachrichten"
    assert intro.lede == "Wie alles begann"
    assert intro.paragraphs == ("Erster Absatz der Einleitung.", "Zweiter Absatz.")


def test_short_intro_leaves_missing_positions_empty() -> None:
    intro = parse_transcript("Kicker\n\n12. Mai 2021\n").intro

    assert (intro.kicker, intro.title, intro.lede, intro.paragraphs) == ("Kicker", "", "", ())


def test_sample_transcript_records(sample_transcript: str) -> None:
    messages = parse_transcript(sample_transcript).to_dict()["messages"]

    assert [m["id"] for m in messages] == ["msg-001", "msg-002", "msg-003", "msg-004"]
    assert [m["date_iso"] for m in messages] == [
        "2021-05-12",
        "2021-05-12",
        "2022-03-03",
        "2022-06-05",
    ]

    second = messages[1]
    assert second["sender"] == "C"
    assert second["recipient"] == "D"
    assert second["message"] == "Das ist der Text über zwei Zeilen"
    assert second["documents"] == ["EFTA002.pdf", "EFTA003.pdf"]
    assert second["parse_flags"] == ["inferred_message_label"]

    third = messages[2]
    assert third["date_label"] == "3. März 2022"
    assert third["sender"] == ""
    assert third["recipient"] == "E"
    assert third["message"] == ""
    assert third["documents"] == []
    assert third["parse_flags"] == ["missing_message", "missing_sender", "missing_documents"]

    fourth = messages[3]
    assert fourth["date_label"] == "5. Juni 2022"
    assert fourth["message"] == "Tschüss"
    assert fourth["parse_flags"] == ["missing_recipient"]


def test_flags_match_empty_fields(sample_transcript: str) -> None:
    for message in parse_transcript(sample_transcript).to_dict()["messages"]:
        flags = message["parse_flags"]
        assert ("missing_sender" in flags) == (message["sender"] == "")
        assert ("missing_recipient" in flags) == (message["recipient"] == "")
        assert ("missing_documents" in flags) == (message["documents"] == [])
        assert not ("missing_message" in flags and "inferred_message_label" in flags)


def test_parsing_is_deterministic(sample_transcript: str) -> None:
    first = json.dumps(parse_transcript(sample_transcript).to_dict(), ensure_ascii=False)
    second = json.dumps(parse_transcript(sample_transcript).to_dict(), ensure_ascii=False)

    assert first == second


def test_crlf_input_gives_same_result(sample_transcript: str) -> None:
    crlf = sample_transcript.replace("\n", "\r\n")

    assert parse_transcript(crlf) == parse_transcript(sample_transcript)


def test_messages_inherit_latest_date() -> None:
    text = "\n".join(
        [
            "1. Januar 2020",
            "Absender: A",
            "",
            "2. Februar 2020",
            "",
            "Ein Absatz ohne Nachricht.",
            "",
            "Absender: B",
            "3. März 2020",
            "Absender: C",
        ]
    )

    messages = parse_transcript(text).messages

    assert [(m.sender, m.date.iso) for m in messages] == [
        ("A", "2020-01-01"),
        ("B", "2020-02-02"),
        ("C", "2020-03-03"),
    ]


def test_date_heading_followed_directly_by_message_lines() -> None:
    # The sender line starts its own block, so the date block is bare.
    parsed = parse_transcript("7. August 2021\nAbsender: A\nEmpfänger: B\nEFTA9.pdf")

    assert len(parsed.messages) == 1
    assert parsed.messages[0].date.iso == "2021-08-07"


def test_prose_blocks_after_dates_are_ignored() -> None:
    parsed = parse_transcript("12. Mai 2021\nKommentar\n\nNoch ein Kommentar")

    assert parsed.messages == ()


def test_unknown_month_line_is_treated_as_text() -> None:
    parsed = parse_transcript("12. Mai 2021\n\n13. Mayo 2021\nAbsender: A")

    assert parsed.messages[0].date.iso == "2021-05-12"


def test_no_date_heading_is_fatal() -> None:
    with pytest.raises(NoDateAnchorError):
        parse_transcript("Titel\nAbsender: A\nEmpfänger: B\nEFTA1.pdf")


def test_empty_transcript_has_no_date_anchor() -> None:
    with pytest.raises(NoDateAnchorError):
        parse_transcript("")


def test_message_before_first_date_is_fatal() -> None:
    text = "Titel\nAbsender: A\nEmpfänger: B\n\n12. Mai 2021\nAbsender: C"

    with pytest.raises(MessageBeforeDateError) as excinfo:
        parse_transcript(text)

    assert excinfo.value.line == 2
    assert excinfo.value.excerpt == "Absender: A"


def test_glued_first_heading_ends_intro_and_keeps_records_once() -> None:
    text = "Titel\n\n4. Juni 2022 5. Juni 2022\nAbsender: A\nEmpfänger: B\nNachricht: x\nEFTA1.pdf\n\n6. Juni 2022\nAbsender: C"

    parsed = parse_transcript(text)

    assert parsed.intro.kicker == "Titel"
    assert parsed.intro.title == ""
    assert parsed.intro.lede == ""
    assert parsed.intro.paragraphs == ()
    assert [(m.id, m.sender, m.date.iso) for m in parsed.messages] == [
        ("msg-001", "A", "2022-06-05"),
        ("msg-002", "C", "2022-06-06"),
    ]


def test_glued_headings_alone_are_a_date_anchor() -> None:
    parsed = parse_transcript("4. Juni 2022 5. Juni 2022\nAbsender: A\nEmpfänger: B\nEFTA1.pdf")

    assert [m.date.iso for m in parsed.messages] == ["2022-06-05"]


def test_starts_date_heading_sees_glued_runs() -> None:
    assert starts_date_heading("4. Juni 2022 5. Juni 2022")
    assert starts_date_heading("  12. Mai 2021  ")
    assert not starts_date_heading("Titel")


def test_duplicate_documents_keep_first_position() -> None:
    text = "12. Mai 2021\nAbsender: A\nEFTA2.pdf EFTA1.pdf\nEFTA2.pdf"

    assert parse_transcript(text).messages[0].documents == ("EFTA2.pdf", "EFTA1.pdf")


def test_interpret_step_updates_date_without_emitting() -> None:
    state = interpret_step(ScanState(), Block(lines=("12. Mai 2021",), numbers=(1,)))

    assert state.date == DateContext(label="12. Mai 2021", iso="2021-05-12")
    assert state.messages == ()


def test_interpret_step_emits_record_with_next_sequence() -> None:
    date = DateContext(label="1. Mai 2021", iso="2021-05-01")
    block = Block(lines=("Absender: A", "Empfänger: B", "Nachricht: x", "EFTA1.pdf"), numbers=(5, 6, 7, 8))

    first = interpret_step(ScanState(date=date), block)
    second = interpret_step(first, block)

    assert [m.id for m in second.messages] == ["msg-001", "msg-002"]
    assert all(m.date is date for m in second.messages)


def test_interpret_step_rejects_message_without_date() -> None:
    block = Block(lines=("Absender: A",), numbers=(3,))

    with pytest.raises(MessageBeforeDateError):
        interpret_step(ScanState(), block)


def test_scan_state_accumulates_records_without_copying_earlier_states() -> None:
    date = DateContext(label="1. Mai 2021", iso="2021-05-01")
    block = Block(lines=("Absender: A", "Empfänger: B", "EFTA1.pdf"), numbers=(1, 2, 3))

    start = ScanState(date=date)
    states = [start]
    for _ in range(3):
        states.append(interpret_step(states[-1], block))

    assert [len(s.records) for s in states] == [0, 1, 2, 3]
    assert isinstance(states[-1].messages, tuple)
    assert start.messages == ()
    assert states[-1].next_sequence == 4
