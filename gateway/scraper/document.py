"""Mutable, queryable HTML document used by the transform pipeline.

:class:`HtmlDocument` wraps a BeautifulSoup tree (stdlib ``html.parser``
backend) behind the handful of operations the pipeline needs: CSS-selector
queries, subtree removal, direct-text read/replace, head/body access, markup
injection, and serialization.  Real-world pages are frequently invalid, so
construction never raises.
"""

from __future__ import annotations

import logging
from typing import List

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import Doctype, PreformattedString

logger = logging.getLogger(__name__)

_PARSER = "html.parser"
_EMPTY_SHELL = "<html><head></head><body></body></html>"


def _is_text(node: object) -> bool:
    """``True`` for visible text strings (comments, doctypes, CDATA excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def _parse_fragment(markup: str) -> List:
    return list(BeautifulSoup(markup, _PARSER).contents)


class HtmlDocument:
    """One parsed HTML document, owned by a single request."""

    def __init__(self, html: str) -> None:
        try:
            self.soup = BeautifulSoup(html, _PARSER)
        except ParserRejectedMarkup as exc:
            logger.warning("[document] parser rejected markup, keeping raw text: %s", exc)
            self.soup = BeautifulSoup(_EMPTY_SHELL, _PARSER)
            self.soup.body.append(html)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def select(self, selector: str) -> List[Tag]:
        """Return every element matching *selector*, in document order.

        Raises:
            soupsieve.SelectorSyntaxError: If *selector* is not valid CSS.
        """
        return list(self.soup.select(selector))

    def text(self) -> str:
        """Return the text of the whole document."""
        return self.soup.get_text()

    @staticmethod
    def direct_text(node: Tag) -> str:
        """Return the text of *node* excluding text inside child elements."""
        return "".join(str(child) for child in node.children if _is_text(child))

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def remove(self, selector: str) -> int:
        """Remove every element matching *selector* and return how many went.

        Matches nested inside an already-removed match are skipped.
        """
        removed = 0
        for node in self.select(selector):
            if node.decomposed:
                continue
            node.decompose()
            removed += 1
        return removed

    @staticmethod
    def replace_direct_text(node: Tag, text: str) -> None:
        """Replace the direct text of *node* with *text*.

        A node holding only text gets *text* as its sole content.  Otherwise
        child elements are kept: the first non-blank direct string becomes
        *text* and the remaining direct strings are dropped.
        """
        children = list(node.children)
        strings = [child for child in children if _is_text(child)]
        if len(strings) == len(children):
            node.string = text
            return

        target = next((s for s in strings if s.strip()), None)
        if target is None:
            node.insert(0, NavigableString(text))
            return
        for string in strings:
            if string is target:
                string.replace_with(NavigableString(text))
            else:
                string.extract()

    def ensure_head(self) -> Tag:
        """Return the ``<head>``, creating it (and an ``<html>`` root) if absent."""
        head = self.soup.head
        if head is not None:
            return head
        head = self.soup.new_tag("head")
        self._ensure_root().insert(0, head)
        return head

    def body(self) -> Tag:
        """Return ``<body>``, falling back to ``<html>`` and then the document."""
        return self.soup.body or self.soup.html or self.soup

    def new_tag(self, name: str, **attrs: str) -> Tag:
        return self.soup.new_tag(name, attrs=attrs)

    def append_markup(self, parent: Tag, markup: str) -> None:
        """Parse *markup* and append the resulting nodes to *parent*."""
        for node in _parse_fragment(markup):
            parent.append(node)

    def prepend_markup(self, parent: Tag, markup: str) -> None:
        """Parse *markup* and insert the resulting nodes before *parent*'s content."""
        for offset, node in enumerate(_parse_fragment(markup)):
            parent.insert(offset, node)

    def serialize(self) -> str:
        return str(self.soup)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _ensure_root(self) -> Tag:
        html = self.soup.html
        if html is not None:
            return html
        html = self.soup.new_tag("html")
        for child in list(self.soup.contents):
            if isinstance(child, Doctype):
                continue
            html.append(child.extract())
        self.soup.append(html)
        return html
