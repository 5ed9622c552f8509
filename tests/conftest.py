"""
Shared test fixtures for the protocol timeline test suite.
"""
from __future__ import annotations

from pathlib import Path
import sys

import pytest


SAMPLE_TRANSCRIPT = "\n".join(
    [
        "Das Protokoll",
        "Eine Chronik in Nachrichten",
        "Wie alles begann",
        "Erster Absatz der Einleitung.",
        "",
        "Zweiter Absatz.",
        "",
        "12. Mai 2021",
        "Absender: A",
        "Empfänger: B",
        "Nachricht: Hallo",
        "EFTA001.pdf",
        "Absender: C",
        "Empfänger: D",
        "Das ist der Text",
        "über zwei Zeilen",
        "Dokument: EFTA002.pdf EFTA002.pdf EFTA003.pdf",
        "",
        "3. März 2022 (Nachtrag)",
        "Absender:",
        "Empfänger: E",
        "",
        "Ein Kommentar ohne Absender.",
        "",
        "4. Juni 2022 5. Juni 2022",
        "Absender: F",
        "Nachricht: Tschüss",
        "Dokument: EFTA004.pdf",
        "",
    ]
)


# ==========================================================================
# Transcripts
# ==========================================================================

@pytest.fixture
def sample_transcript() -> str:
    return SAMPLE_TRANSCRIPT


# ==========================================================================
# Project directory
# ==========================================================================

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with transcript, config, documents and previews."""

    (tmp_path / "content").mkdir()
    (tmp_path / "content" / "article.txt").write_text(SAMPLE_TRANSCRIPT, encoding="utf-8")

    docs = tmp_path / "Tchoumi"
    docs.mkdir()
    (docs / "EFTA001.pdf").write_text("Hallo Welt", encoding="utf-8")
    (docs / "EFTA002.pdf").write_text("wenig", encoding="utf-8")
    (docs / "EFTA003.pdf").write_text("sehr viel mehr lesbarer Text hier", encoding="utf-8")

    previews = tmp_path / "assets" / "previews"
    previews.mkdir(parents=True)
    for name in ("EFTA001.jpg", "EFTA002.jpg", "EFTA003.jpg"):
        (previews / name).write_bytes(b"\xff\xd8\xff")

    (tmp_path / "protocol.yaml").write_text(
        "\n".join(
            [
                "transcript: content/article.txt",
                "images:",
                "  extract_command:",
                f"    - '{sys.executable}'",
                "    - -c",
                "    - \"import sys; sys.stdout.write(open(sys.argv[1], encoding='utf-8').read())\"",
                "",
            ]
        ),
        encoding="utf-8",
    )
    return tmp_path
