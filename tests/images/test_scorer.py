from __future__ import annotations

import pytest

from protocol_timeline.images.scorer import (
    FanOutPolicy,
    assign_images,
    best_preview,
    preview_candidates,
    score_document,
    scoring_runs,
    text_score,
)


class _FakeStore:
    def __init__(self, previews: set[str], texts: dict[str, str | None]) -> None:
        self.previews = previews
        self.texts = texts
        self.extract_calls: list[str] = []

    def preview_key(self, document: str) -> str:
        return f"assets/previews/{document.rsplit('.', 1)[0]}.jpg"

    def exists(self, key: str) -> bool:
        return key in self.previews

    def extract_text(self, document: str) -> str | None:
        self.extract_calls.append(document)
        return self.texts.get(document)


def _preview(stem: str) -> str:
    return f"assets/previews/{stem}.jpg"


def test_text_score_counts_runs_of_three_letters() -> None:
    assert text_score("abc de fgh Äpfel 12345 Straße") == 4
    assert text_score("") == 0


def test_preview_candidates_keep_only_existing_previews() -> None:
    store = _FakeStore({_preview("B")}, {})

    assert preview_candidates(["A.pdf", "B.pdf"], store) == [("B.pdf", _preview("B"))]


def test_no_existing_preview_gives_no_image() -> None:
    store = _FakeStore(set(), {"A.pdf": "lots of text"})

    assert best_preview(["A.pdf"], store, {}) == []
    assert store.extract_calls == []


def test_document_with_most_text_wins() -> None:
    store = _FakeStore(
        {_preview("A"), _preview("B")},
        {"A.pdf": "one two", "B.pdf": "one two three four"},
    )

    assert best_preview(["A.pdf", "B.pdf"], store, {}) == [_preview("B")]


def test_ties_go_to_the_first_document() -> None:
    store = _FakeStore({_preview("A"), _preview("B")}, {"A.pdf": "abc", "B.pdf": "xyz"})

    assert best_preview(["A.pdf", "B.pdf"], store, {}) == [_preview("A")]


def test_unextractable_document_never_beats_a_scored_one() -> None:
    store = _FakeStore({_preview("A"), _preview("B")}, {"A.pdf": None, "B.pdf": "--"})

    assert best_preview(["A.pdf", "B.pdf"], store, {}) == [_preview("B")]


def test_all_unextractable_falls_back_to_first_candidate() -> None:
    store = _FakeStore({_preview("A"), _preview("B")}, {})

    assert best_preview(["A.pdf", "B.pdf"], store, {}) == [_preview("A")]


def test_scores_are_memoized_per_document() -> None:
    store = _FakeStore({_preview("A")}, {"A.pdf": "abc def"})
    cache: dict[str, int] = {}

    assert score_document("A.pdf", store, cache) == 2
    assert score_document("A.pdf", store, cache) == 2
    assert store.extract_calls == ["A.pdf"]
    assert cache == {"A.pdf": 2}


def test_preseeded_cache_skips_extraction() -> None:
    store = _FakeStore({_preview("A"), _preview("B")}, {"A.pdf": "abc", "B.pdf": "abc"})

    result = best_preview(["A.pdf", "B.pdf"], store, {"A.pdf": 0, "B.pdf": 9})

    assert result == [_preview("B")]
    assert store.extract_calls == []


def test_scoring_runs_for_seven_messages() -> None:
    assert scoring_runs(7) == [range(0, 1), range(1, 2), range(2, 7)]


def test_scoring_runs_respect_policy() -> None:
    policy = FanOutPolicy(leading_independent=0, group_size=3)

    assert scoring_runs(7, policy) == [range(0, 3), range(3, 6), range(6, 7)]
    assert scoring_runs(1) == [range(0, 1)]
    assert scoring_runs(0) == []

    with pytest.raises(ValueError):
        scoring_runs(3, FanOutPolicy(group_size=0))


def test_assign_images_reuses_anchor_result_within_a_run() -> None:
    messages = [
        {"id": f"msg-{i:03d}", "documents": [f"D{i}a.pdf", f"D{i}b.pdf"]} for i in range(1, 8)
    ]
    previews = {_preview(f"D{i}{s}") for i in range(1, 8) for s in "ab"}
    texts = {f"D{i}{s}.pdf": ("abc " * (2 if s == "b" else 1)) for i in range(1, 8) for s in "ab"}
    store = _FakeStore(previews, texts)

    mapping = assign_images(messages, store)

    assert list(mapping) == [m["id"] for m in messages]
    assert mapping["msg-001"] == [_preview("D1b")]
    assert mapping["msg-002"] == [_preview("D2b")]
    for i in range(3, 8):
        assert mapping[f"msg-{i:03d}"] == [_preview("D3b")]
    assert sorted(set(store.extract_calls)) == ["D1a.pdf", "D1b.pdf", "D2a.pdf", "D2b.pdf", "D3a.pdf", "D3b.pdf"]


def test_assign_images_uses_passed_in_cache() -> None:
    messages = [{"id": "msg-001", "documents": ["A.pdf"]}, {"id": "msg-002", "documents": ["A.pdf"]}]
    store = _FakeStore({_preview("A")}, {"A.pdf": "abc"})
    cache: dict[str, int] = {}

    mapping = assign_images(messages, store, cache)

    assert mapping == {"msg-001": [_preview("A")], "msg-002": [_preview("A")]}
    assert cache == {"A.pdf": 1}
    assert store.extract_calls == ["A.pdf"]


def test_message_without_documents_gets_empty_list() -> None:
    store = _FakeStore(set(), {})

    assert assign_images([{"id": "msg-001", "documents": []}], store) == {"msg-001": []}
