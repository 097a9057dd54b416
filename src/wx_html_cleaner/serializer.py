"""Render cleaned content as a complete, minimal HTML document.

Strategies are tried in order and each one returns the document text or
None. The last resort is a fixed placeholder document, so serialize() always
returns a string.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup, Doctype, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from wx_html_cleaner.document import Document, SyntheticDocument, body_of
from wx_html_cleaner.rules import FAILURE_DOCUMENT, KEPT_META_NAMES

logger = logging.getLogger(__name__)

SKELETON = "<!DOCTYPE html><html><head></head><body></body></html>"

_TITLE_RE = re.compile(r"<title[^>]*>([\s\S]*?)</title>", re.IGNORECASE)


class _SourceOrderFormatter(HTMLFormatter):
    """HTML5-style output that keeps attributes in source order."""

    def __init__(self) -> None:
        super().__init__(
            entity_substitution=EntitySubstitution.substitute_xml,
            void_element_close_prefix=None,
        )

    def attributes(self, tag):
        return list(tag.attrs.items())


FORMATTER = _SourceOrderFormatter()

Strategy = Callable[[Document, str], "str | None"]


def document_title(document: Document) -> str:
    """Title text of a parsed or synthetic document, '' when it has none."""
    tree = document.tree
    if isinstance(tree, SyntheticDocument):
        match = _TITLE_RE.search(tree.head)
        return html.unescape(match.group(1)).strip() if match else ""
    if tree.title is None:
        return ""
    return tree.title.get_text().strip()


def _kept_metas(soup: BeautifulSoup) -> list[dict[str, str]]:
    metas = []
    for meta in soup.find_all("meta"):
        name = (meta.get("name") or "").lower()
        if name in KEPT_META_NAMES and meta.get("content"):
            metas.append({"name": name, "content": meta["content"]})
    return metas


def _body_markup(document: Document, fragment: str) -> str:
    if fragment.strip():
        return fragment
    tree = document.tree
    if isinstance(tree, SyntheticDocument):
        return tree.body
    return "".join(
        node.decode(formatter=FORMATTER) if isinstance(node, Tag) else node.output_ready(FORMATTER)
        for node in body_of(tree).contents
        if not isinstance(node, Doctype) and getattr(node, "name", None) != "head"
    )


def _native(document: Document, fragment: str) -> str | None:
    if not document.is_real_tree:
        return None
    try:
        out = BeautifulSoup(SKELETON, "html.parser")
        out.head.append(out.new_tag("meta", attrs={"charset": "utf-8"}))
        title = document_title(document)
        if title:
            title_tag = out.new_tag("title")
            title_tag.string = title
            out.head.append(title_tag)
        for attrs in _kept_metas(document.tree):
            out.head.append(out.new_tag("meta", attrs=attrs))
        body = BeautifulSoup(_body_markup(document, fragment), "html.parser")
        for node in list(body.contents):
            out.body.append(node.extract())
        return out.decode(formatter=FORMATTER)
    except Exception as exc:
        logger.warning("Tree serialization failed, assembling by hand: %s", exc)
        return None


def _manual(document: Document, fragment: str) -> str | None:
    try:
        title = document_title(document)
        title_html = f"<title>{html.escape(title, quote=False)}</title>" if title else ""
        return (
            '<!DOCTYPE html><html><head><meta charset="utf-8">'
            f"{title_html}</head><body>{_body_markup(document, fragment)}</body></html>"
        )
    except Exception as exc:
        logger.warning("Manual serialization failed: %s", exc)
        return None


STRATEGIES: tuple[Strategy, ...] = (_native, _manual)


def serialize(document: Document, fragment: str = "", strategies: tuple[Strategy, ...] = STRATEGIES) -> str:
    """Wrap ``fragment`` (or the cleaned body when it is empty) in a document."""
    for strategy in strategies:
        result = strategy(document, fragment)
        if result is not None:
            return result
    logger.error("All serialization strategies failed, emitting placeholder document")
    return FAILURE_DOCUMENT
