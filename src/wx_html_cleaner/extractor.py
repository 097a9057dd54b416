"""Rebuild the article as a small fragment of semantic HTML.

The extractor walks the content region (or the whole body when no region
qualifies) depth-first and emits headings, paragraphs, lists, images and
text blocks. Whatever it has already emitted is recorded in a processed set
so a node swallowed by an ancestor (a heading's spans, a paragraph's
images) is never emitted a second time. Consecutive text blocks are
coalesced into one, so a second pass over the output finds nothing left to
merge.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable

from bs4 import BeautifulSoup, Tag

from wx_html_cleaner.document import body_of
from wx_html_cleaner.rules import (
    BLOCK_DIRECT_MIN_TEXT,
    BLOCK_MIN_TEXT,
    CONTENT_MIN_TEXT,
    CONTENT_SELECTORS,
    HEADING_MIN_TEXT,
    HEADING_TAGS,
    INLINE_TAGS,
    LONG_TEXT_MAX_KEYWORDS,
    PARAGRAPH_CHUNK_CHARS,
    PHRASING_TAGS,
    PRESERVED_ATTRIBUTES,
    SENTENCE_TERMINATORS,
    SHORT_TEXT_LIMIT,
    SPAN_MIN_TEXT,
    UI_KEYWORDS,
    ElementKind,
)
from wx_html_cleaner.simplifier import child_elements, direct_text, is_text_node

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")
_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff]")
_BR_RE = re.compile(r"<br>")
_SENTENCE_RE = re.compile(
    rf"[^{SENTENCE_TERMINATORS}]*[{SENTENCE_TERMINATORS}]+|[^{SENTENCE_TERMINATORS}]+"
)

_SPAN_CONTAINERS = ["p", "li", *sorted(HEADING_TAGS)]


def normalize_text(text: str) -> str:
    text = _ZERO_WIDTH_RE.sub("", text)
    return _WS_RE.sub(" ", text).strip()


def block_text(tag: Tag) -> str:
    """Normalized text of ``tag`` with each line break read as a space."""
    pieces = []
    for node in tag.descendants:
        if is_text_node(node):
            pieces.append(str(node))
        elif isinstance(node, Tag) and node.name == "br":
            pieces.append(" ")
    return normalize_text("".join(pieces))


def is_ui_text(text: str) -> bool:
    """Whether ``text`` reads like interface chrome rather than prose.

    Short strings are rejected on any keyword hit. Longer ones are presumed
    to be prose unless they are littered with keywords.
    """
    lowered = text.lower()
    hits = {keyword for keyword in UI_KEYWORDS if keyword in lowered}
    if len(text) <= SHORT_TEXT_LIMIT:
        return bool(hits)
    return len(hits) > LONG_TEXT_MAX_KEYWORDS


def split_long_text(text: str, limit: int = PARAGRAPH_CHUNK_CHARS) -> list[str]:
    """Greedily pack sentences into chunks of roughly ``limit`` characters.

    A single sentence longer than ``limit`` becomes a chunk of its own.
    """
    chunks: list[str] = []
    current = ""
    for sentence in _SENTENCE_RE.findall(text):
        if current.strip() and len(current) + len(sentence) > limit:
            chunks.append(current.strip())
            current = sentence
        else:
            current += sentence
    if current.strip():
        chunks.append(current.strip())
    return chunks


def image_html(tag: Tag) -> str | None:
    src = tag.get("src") or tag.get("data-src")
    if not src or "data:image/svg" in src.lower():
        return None
    alt = tag.get("alt") or tag.get("data-alt") or ""
    return f'<img src="{html.escape(src)}" alt="{html.escape(alt)}">'


def _attributes_html(tag: Tag) -> str:
    parts = []
    for name, value in tag.attrs.items():
        if name.lower() not in PRESERVED_ATTRIBUTES:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        parts.append(f' {name}="{html.escape(value)}"')
    return "".join(parts)


def locate_content_region(soup: BeautifulSoup) -> Tag | None:
    """First selector match with more than CONTENT_MIN_TEXT characters of text."""
    for selector in CONTENT_SELECTORS:
        for candidate in soup.select(selector):
            if len(normalize_text(candidate.get_text())) > CONTENT_MIN_TEXT:
                logger.debug("Content region found via %s", selector)
                return candidate
    return None


class ContentExtractor:
    """Depth-first reconstruction of one subtree.

    Handlers are looked up by ElementKind. A handler returns True when it
    consumed the element's whole subtree, False when the walk should still
    descend into its children.
    """

    def __init__(self, split_long_text: bool = False) -> None:
        self.split_long_text = split_long_text
        self._processed: set[int] = set()
        self._parts: list[str] = []
        self._open_text: str | None = None
        self._handlers: dict[ElementKind, Callable[[Tag], bool]] = {
            ElementKind.IMAGE: self._handle_image,
            ElementKind.HEADING: self._handle_heading,
            ElementKind.LIST: self._handle_list,
            ElementKind.PARAGRAPH: self._handle_paragraph,
            ElementKind.STRONG: self._handle_strong,
            ElementKind.SPAN: self._handle_span,
            ElementKind.BLOCK: self._handle_block,
        }

    def extract(self, root: Tag) -> str:
        self._processed = set()
        self._parts = []
        self._open_text = None
        stack = [root]
        while stack:
            node = stack.pop()
            if id(node) in self._processed:
                continue
            handler = self._handlers.get(ElementKind.of(node.name))
            consumed = handler(node) if handler is not None else False
            self._processed.add(id(node))
            if not consumed:
                stack.extend(reversed(child_elements(node)))
        logger.debug("Extracted %d blocks", len(self._parts))
        return "\n".join(self._parts)

    # bookkeeping

    def _mark(self, tag: Tag) -> None:
        self._processed.add(id(tag))
        for descendant in tag.find_all(True):
            self._processed.add(id(descendant))

    def _emit(self, fragment: str) -> None:
        self._open_text = None
        self._parts.append(fragment)

    def _emit_text(self, text: str) -> None:
        """Emit a text block, folding it into an immediately preceding one.

        The join is skipped when the combined text would read as interface
        chrome.
        """
        if self._open_text is not None:
            joined = f"{self._open_text} {text}"
            if not is_ui_text(joined):
                self._parts.pop()
                text = joined
        if self.split_long_text and len(text) > PARAGRAPH_CHUNK_CHARS:
            for chunk in split_long_text(text):
                self._emit(f"<p>{html.escape(chunk, quote=False)}</p>")
        else:
            self._emit(f"<div>{html.escape(text, quote=False)}</div>")
            self._open_text = text

    def _emit_images(self, tag: Tag) -> None:
        for img in tag.find_all("img"):
            fragment = image_html(img)
            if fragment:
                self._emit(fragment)

    # inline serialization

    def _inline(self, node) -> str:
        if is_text_node(node):
            return html.escape(_WS_RE.sub(" ", _ZERO_WIDTH_RE.sub("", str(node))), quote=False)
        if not isinstance(node, Tag):
            return ""
        if node.name == "img":
            return image_html(node) or ""
        if node.name == "br":
            return "<br>"
        inner = self._inline_children(node)
        if node.name not in INLINE_TAGS:
            return inner
        if not inner.strip():
            return inner
        return f"<{node.name}{_attributes_html(node)}>{inner}</{node.name}>"

    def _inline_children(self, tag: Tag) -> str:
        return "".join(self._inline(child) for child in tag.children)

    def _mixed(self, element: Tag) -> list[str]:
        """Text, inline markup and images of a list item, flattened.

        Bare text is wrapped in a span when ``element`` sits directly in a
        p or li, otherwise in a div. A div that already holds nothing but
        text keeps its own wrapper.
        """
        parent = element.parent
        wrapper = "span" if parent is not None and parent.name in ("p", "li") else "div"
        parts: list[str] = []
        for child in element.children:
            if is_text_node(child):
                text = normalize_text(str(child))
                if text:
                    parts.append(f"<{wrapper}>{html.escape(text, quote=False)}</{wrapper}>")
            elif isinstance(child, Tag):
                kind = ElementKind.of(child.name)
                if kind is ElementKind.IMAGE:
                    parts.append(image_html(child) or "")
                elif kind is ElementKind.LIST:
                    parts.append(self._list_html(child) or "")
                elif child.name in INLINE_TAGS:
                    parts.append(self._inline(child).strip())
                elif child.name == "div" and not child_elements(child):
                    text = normalize_text(child.get_text())
                    if text:
                        parts.append(f"<div>{html.escape(text, quote=False)}</div>")
                else:
                    parts.extend(self._mixed(child))
        return [part for part in parts if part]

    def _list_html(self, tag: Tag) -> str | None:
        items = []
        for li in tag.find_all("li", recursive=False):
            content = "".join(self._mixed(li))
            if content:
                items.append(f"<li>{content}</li>")
        if not items:
            return None
        return f"<{tag.name}>{''.join(items)}</{tag.name}>"

    # handlers

    def _handle_image(self, tag: Tag) -> bool:
        fragment = image_html(tag)
        if fragment:
            self._emit(fragment)
        self._mark(tag)
        return True

    def _handle_heading(self, tag: Tag) -> bool:
        if len(normalize_text(tag.get_text())) > HEADING_MIN_TEXT:
            self._emit(f"<{tag.name}>{self._inline_children(tag).strip()}</{tag.name}>")
        self._mark(tag)
        return True

    def _handle_list(self, tag: Tag) -> bool:
        fragment = self._list_html(tag)
        if fragment:
            self._emit(fragment)
        self._mark(tag)
        return True

    def _handle_paragraph(self, tag: Tag) -> bool:
        content = self._inline_children(tag).strip()
        if _BR_RE.sub("", content).strip():
            self._emit(f"<p>{content}</p>")
        self._mark(tag)
        return True

    def _handle_strong(self, tag: Tag) -> bool:
        content = self._inline_children(tag).strip()
        if _BR_RE.sub("", content).strip():
            self._emit(f"<strong>{content}</strong>")
        self._mark(tag)
        return True

    def _handle_span(self, tag: Tag) -> bool:
        if tag.find_parent(_SPAN_CONTAINERS) is not None:
            return False
        text = block_text(tag)
        if len(text) <= SPAN_MIN_TEXT or is_ui_text(text):
            return False
        self._emit_text(text)
        self._mark(tag)
        self._emit_images(tag)
        return True

    def _handle_block(self, tag: Tag) -> bool:
        leaf = _is_leaf_block(tag)
        direct = normalize_text(direct_text(tag))
        if len(direct) > BLOCK_DIRECT_MIN_TEXT and not is_ui_text(direct) and not leaf:
            # Only the block's own text; its child elements are walked next.
            self._emit_text(direct)
            return False
        if not leaf:
            return False

        text = block_text(tag)
        if len(text) <= BLOCK_MIN_TEXT or is_ui_text(text):
            self._mark(tag)
            return True
        self._emit_text(text)
        self._mark(tag)
        return True

def _is_leaf_block(tag: Tag) -> bool:
    """A block holding nothing but text and phrasing markup."""
    return all(descendant.name in PHRASING_TAGS for descendant in tag.find_all(True))


def extract_content(soup: BeautifulSoup, region: Tag | None = None) -> str:
    """Extract from ``region`` if given, otherwise walk the whole body.

    The whole-body walk also breaks long text blocks into paragraphs. Region
    output long enough to qualify as a region again is wrapped in an
    article, so cleaning the result a second time finds the same region and
    leaves its text blocks whole.
    """
    if region is not None:
        fragment = ContentExtractor().extract(region)
        if fragment:
            text = normalize_text(BeautifulSoup(fragment, "html.parser").get_text())
            if len(text) > CONTENT_MIN_TEXT:
                return f"<article>\n{fragment}\n</article>"
            return fragment
        logger.debug("Content region yielded nothing, walking the whole body")
    return ContentExtractor(split_long_text=True).extract(body_of(soup))
