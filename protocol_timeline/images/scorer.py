# Protocol Timeline
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Preview image selection.

For each message, the preview images of its referenced documents are looked up
in the asset store. If several exist, the one whose source document contains
the most readable text wins. Documents whose text cannot be extracted score -1
and therefore never beat a document that could be scored.

Scoring is not done for every message. The first messages are scored on their
own; after that, messages are grouped into consecutive runs and the result for
the first message of a run is reused for the whole run.
"""

from dataclasses import dataclass
import re
from typing import Any, Iterable, Mapping, MutableMapping, Sequence

from protocol_timeline.images.store import AssetStore


UNSCORABLE = -1

_WORD_RE = re.compile(r"[A-Za-zÄÖÜäöüß]{3,}")


@dataclass(frozen=True)
class FanOutPolicy:
    """
    Grouping of messages for preview scoring.

    Attributes:
        leading_independent:
            Number of leading messages that are scored individually.
        group_size:
            Maximum number of consecutive messages sharing the result computed
            for the first message of the run.
    """

    leading_independent: int = 2
    group_size: int = 5


def text_score(text: str) -> int:
    """Count runs of three or more letters in a text."""

    return len(_WORD_RE.findall(text))


def score_document(document: str, store: AssetStore, cache: MutableMapping[str, int]) -> int:
    """Score a document by its readable text, memoized in `cache`."""

    if document in cache:
        return cache[document]

    text = store.extract_text(document)
    score = UNSCORABLE if text is None else text_score(text)
    cache[document] = score
    return score


def preview_candidates(documents: Iterable[str], store: AssetStore) -> list[tuple[str, str]]:
    """Return `(document, preview_key)` pairs whose preview exists, in order."""

    candidates: list[tuple[str, str]] = []
    for document in documents:
        key = store.preview_key(document)
        if store.exists(key):
            candidates.append((document, key))
    return candidates


def best_preview(
    documents: Iterable[str],
    store: AssetStore,
    cache: MutableMapping[str, int],
) -> list[str]:
    """Pick the best preview for a message.

    Returns:
        A list with zero or one preview key. Ties go to the earlier document.
    """

    candidates = preview_candidates(documents, store)
    if not candidates:
        return []

    best_key = candidates[0][1]
    best_score = UNSCORABLE
    for document, key in candidates:
        score = score_document(document, store, cache)
        if score > best_score:
            best_score = score
            best_key = key

    return [best_key]


def scoring_runs(count: int, policy: FanOutPolicy = FanOutPolicy()) -> list[range]:
    """Split message indices into runs that share one scoring computation.

    The first index of each run is its anchor. With the default policy and
    seven messages: `[0], [1], [2..6]`.
    """

    if policy.group_size <= 0:
        raise ValueError("group_size must be > 0")

    runs: list[range] = []
    leading = min(max(policy.leading_independent, 0), count)
    for idx in range(leading):
        runs.append(range(idx, idx + 1))

    start = leading
    while start < count:
        end = min(start + policy.group_size, count)
        runs.append(range(start, end))
        start = end

    return runs


def assign_images(
    messages: Sequence[Mapping[str, Any]],
    store: AssetStore,
    cache: MutableMapping[str, int] | None = None,
    policy: FanOutPolicy = FanOutPolicy(),
) -> dict[str, list[str]]:
    """Build the message id -> preview list mapping.

    Args:
        messages:
            Message objects as written to messages.json (`id`, `documents`).
        store:
            Asset store to look candidates up in.
        cache:
            Score cache keyed by document identifier. Pass a dict to inspect or
            pre-seed it; a fresh one is used otherwise.
        policy:
            Fan-out policy.

    Returns:
        Mapping in message order.
    """

    if cache is None:
        cache = {}

    mapping: dict[str, list[str]] = {}
    for run in scoring_runs(len(messages), policy):
        anchor = messages[run.start]
        chosen = best_preview(list(anchor.get("documents") or []), store, cache)
        for idx in run:
            mapping[str(messages[idx]["id"])] = list(chosen)

    return mapping
