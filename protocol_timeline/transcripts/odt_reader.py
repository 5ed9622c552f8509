# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""ODT transcript reader.

Each ODT paragraph or heading becomes one line of text. Empty paragraphs
become blank lines, so they separate message blocks just like in text files.
"""

from pathlib import Path

from odfdo import Document

from protocol_timeline.transcripts.base import ParserError


class OdtTranscriptReader:
    """Read ODT documents into transcript text."""

    def can_read(self, path: Path) -> bool:
        return path.suffix.lower() == ".odt"

    def read_text(self, path: Path) -> str:
        """Extract the paragraph texts of an ODT document, one per line."""

        try:
            doc = Document(path)
            body = doc.body

            def _node_text(node: object) -> str:
                # odfdo Paragraph objects often expose richer text via
                # `inner_text`/`text_recursive` than via `.text`.
                for attr in ("inner_text", "text_recursive", "text"):
                    if hasattr(node, attr):
                        value = getattr(node, attr)
                        if callable(value):
                            value = value()
                        if value is not None:
                            return str(value)
                return ""

            nodes = list(body.xpath(".//text:p | .//text:h"))
            if not nodes:
                nodes = list(body.get_paragraphs())

            lines = [_node_text(n) for n in nodes]
        except Exception as exc:  # noqa: BLE001
            raise ParserError(f"Failed to read ODT file: {exc}", path=path) from exc

        return "\n".join(lines).replace("\r\n", "\n").replace("\r", "\n")
