"""Collapse wrapper divs and drop empty nodes until the tree stops changing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from wx_html_cleaner.rules import (
    ALWAYS_KEPT_TAGS,
    PRESERVED_ATTRIBUTES,
    SIGNIFICANT_TEXT,
    WHITESPACE_SENSITIVE_TAGS,
)

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")


@dataclass
class SimplifyReport:
    passes: int = 0
    unwrapped: int = 0
    removed: int = 0
    whitespace_removed: int = 0
    # (replaced div, the child that took its place), in order
    replacements: list[tuple[Tag, Tag]] = field(default_factory=list)

    def follow(self, tag: Tag | None) -> Tag | None:
        """Return whatever now stands where ``tag`` stood after unwrapping."""
        for old, new in self.replacements:
            if old is tag:
                tag = new
        return tag


def is_text_node(node) -> bool:
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def direct_text(tag: Tag) -> str:
    """Text of the tag's own text-node children, descendants excluded."""
    return "".join(str(child) for child in tag.children if is_text_node(child))


def child_elements(tag: Tag) -> list[Tag]:
    return [child for child in tag.children if isinstance(child, Tag)]


def has_preserved_attributes(tag: Tag) -> bool:
    return any(name.lower() in PRESERVED_ATTRIBUTES for name in tag.attrs)


def is_empty_element(tag: Tag) -> bool:
    return (
        not tag.get_text(strip=True)
        and not child_elements(tag)
        and not has_preserved_attributes(tag)
    )


def _unwrap_divs(soup: BeautifulSoup, report: SimplifyReport) -> int:
    changes = 0
    for div in soup.find_all("div"):
        if div.decomposed or div.parent is None:
            continue
        children = child_elements(div)
        if (
            len(children) == 1
            and not has_preserved_attributes(div)
            and len(direct_text(div).strip()) <= SIGNIFICANT_TEXT
        ):
            child = children[0]
            if child.name == "div" and has_preserved_attributes(child):
                continue
            div.replace_with(child)
            report.replacements.append((div, child))
            report.unwrapped += 1
            changes += 1
        elif not children and is_empty_element(div):
            div.decompose()
            report.removed += 1
            changes += 1
    return changes


def _remove_empty_elements(soup: BeautifulSoup, report: SimplifyReport) -> int:
    changes = 0
    for tag in soup.find_all(True):
        if tag.decomposed or tag.name in ALWAYS_KEPT_TAGS:
            continue
        if is_empty_element(tag):
            tag.decompose()
            changes += 1
    report.removed += changes
    return changes


def _remove_whitespace_nodes(soup: BeautifulSoup, report: SimplifyReport) -> int:
    changes = 0
    for text in soup.find_all(string=True):
        if not is_text_node(text) or text.strip():
            continue
        if text.parent is not None and text.parent.name in WHITESPACE_SENSITIVE_TAGS:
            continue
        text.extract()
        changes += 1
    report.whitespace_removed += changes
    return changes


def simplify(soup: BeautifulSoup) -> SimplifyReport:
    """Run the simplification rules until a full pass changes nothing.

    Every pass works on a fresh snapshot of the matching nodes, so removals
    made earlier in the pass never invalidate the iteration.
    """
    report = SimplifyReport()
    changed = True
    while changed:
        report.passes += 1
        changes = _unwrap_divs(soup, report)
        changes += _remove_empty_elements(soup, report)
        changes += _remove_whitespace_nodes(soup, report)
        changed = changes > 0
    logger.debug(
        "Simplified in %d passes: %d unwrapped, %d removed, %d whitespace nodes",
        report.passes, report.unwrapped, report.removed, report.whitespace_removed,
    )
    return report


def collapse_text_whitespace(soup: BeautifulSoup) -> int:
    """Collapse whitespace runs in text nodes. Text is not trimmed."""
    changed = 0
    for text in soup.find_all(string=True):
        if not is_text_node(text) or text.find_parent(list(WHITESPACE_SENSITIVE_TAGS)):
            continue
        collapsed = _WS_RE.sub(" ", str(text))
        if collapsed != str(text):
            text.replace_with(NavigableString(collapsed))
            changed += 1
    return changed
