"""Selection of text-bearing nodes for AI rewriting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from bs4 import Tag

from gateway.scraper.document import HtmlDocument

TEXT_SELECTORS = (
    "h1, h2, h3, h4, h5, h6, p, li, td, th, caption, figcaption, blockquote, dt, dd"
)

# Shorter fragments are labels, bylines, and table figures not worth rewriting.
MIN_TEXT_LENGTH = 15
# Hard ceiling on one rewrite batch.
MAX_CANDIDATES = 50


@dataclass(frozen=True)
class TextNodeCandidate:
    """A node whose direct text may be rewritten.

    ``index`` is the node's position in the full :data:`TEXT_SELECTORS`
    query result and is the key used to map model output back onto ``node``.
    """

    index: int
    text: str
    node: Tag

    @property
    def key(self) -> str:
        return str(self.index)


def extract_candidates(
    doc: HtmlDocument,
    limit: int = MAX_CANDIDATES,
) -> List[TextNodeCandidate]:
    """Collect up to *limit* candidates from *doc* in document order.

    Only the node's own text counts; text inside child elements belongs to
    those children, which are matched separately when they are content tags.
    """
    candidates: List[TextNodeCandidate] = []
    for index, node in enumerate(doc.select(TEXT_SELECTORS)):
        text = HtmlDocument.direct_text(node).strip()
        if len(text) <= MIN_TEXT_LENGTH:
            continue
        candidates.append(TextNodeCandidate(index=index, text=text, node=node))
        if len(candidates) >= limit:
            break
    return candidates
