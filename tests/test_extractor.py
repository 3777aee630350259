"""Tests for gateway.pipeline.extractor — candidate text-node selection."""

from __future__ import annotations

from gateway.pipeline.extractor import (
    MAX_CANDIDATES,
    MIN_TEXT_LENGTH,
    extract_candidates,
)
from gateway.scraper.document import HtmlDocument


def _paragraphs(n: int) -> str:
    return "".join(f"<p>Paragraph number {i} has enough words.</p>" for i in range(n))


class TestExtractCandidates:
    def test_never_more_than_fifty(self) -> None:
        doc = HtmlDocument(f"<body>{_paragraphs(200)}</body>")
        candidates = extract_candidates(doc)
        assert len(candidates) == MAX_CANDIDATES == 50

    def test_document_order_and_first_fifty(self) -> None:
        doc = HtmlDocument(f"<body>{_paragraphs(80)}</body>")
        candidates = extract_candidates(doc)
        indexes = [c.index for c in candidates]
        assert indexes == sorted(indexes)
        assert candidates[0].text == "Paragraph number 0 has enough words."
        assert candidates[-1].text == "Paragraph number 49 has enough words."

    def test_length_threshold_is_strict(self) -> None:
        doc = HtmlDocument(f"<p>{'a' * MIN_TEXT_LENGTH}</p><p>{'b' * (MIN_TEXT_LENGTH + 1)}</p>")
        candidates = extract_candidates(doc)
        assert [c.text for c in candidates] == ["b" * 16]
        assert all(len(c.text) > 15 for c in candidates)

    def test_index_is_position_among_all_matches(self) -> None:
        doc = HtmlDocument(
            "<h1>Short</h1><p>tiny</p><p>This paragraph is long enough to keep.</p>"
        )
        (candidate,) = extract_candidates(doc)
        assert candidate.index == 2
        assert candidate.key == "2"

    def test_direct_text_only(self) -> None:
        doc = HtmlDocument(
            "<ul><li>Outer list item text here <ul><li>Inner list item text here</li></ul></li></ul>"
        )
        texts = [c.text for c in extract_candidates(doc)]
        assert texts == ["Outer list item text here", "Inner list item text here"]

    def test_text_is_trimmed(self) -> None:
        doc = HtmlDocument("<td>\n     Padded table cell content   \n</td>")
        (candidate,) = extract_candidates(doc)
        assert candidate.text == "Padded table cell content"

    def test_non_content_tags_ignored(self) -> None:
        doc = HtmlDocument("<div>A long div that is not a content tag at all</div>")
        assert extract_candidates(doc) == []

    def test_covers_headings_quotes_and_definitions(self) -> None:
        doc = HtmlDocument(
            "<h6>A sixth level heading</h6>"
            "<blockquote>A quotation worth reading</blockquote>"
            "<dl><dt>Definition term here</dt><dd>Definition description here</dd></dl>"
            "<figure><figcaption>A caption for the figure</figcaption></figure>"
            "<table><caption>Quarterly results by region</caption>"
            "<tr><td>x</td></tr></table>"
        )
        assert len(extract_candidates(doc)) == 6
        assert extract_candidates(doc)[-1].text == "Quarterly results by region"
