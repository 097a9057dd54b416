"""Turn raw HTML text into something the cleaner can work on.

A real BeautifulSoup tree is preferred. When no tree builder can parse the
input a SyntheticDocument carrying raw head/body slices is returned instead,
so callers always get a handle back.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "lxml"
FALLBACK_PARSER = "html.parser"

_HEAD_RE = re.compile(r"<head[^>]*>([\s\S]*?)</head>", re.IGNORECASE)
_BODY_RE = re.compile(r"<body[^>]*>([\s\S]*?)</body>", re.IGNORECASE)


@dataclass(frozen=True)
class SyntheticDocument:
    """Raw-text stand-in for a parsed tree."""

    head: str = ""
    body: str = ""

    @classmethod
    def from_text(cls, html_text: str) -> SyntheticDocument:
        head_match = _HEAD_RE.search(html_text)
        body_match = _BODY_RE.search(html_text)
        return cls(
            head=head_match.group(1) if head_match else "",
            body=body_match.group(1) if body_match else "",
        )


@dataclass
class Document:
    tree: BeautifulSoup | SyntheticDocument
    is_real_tree: bool
    raw: str = ""


def acquire(html_text: str, parser: str = DEFAULT_PARSER) -> Document:
    """Parse ``html_text`` with the first tree builder that works."""
    for name in dict.fromkeys((parser, FALLBACK_PARSER)):
        try:
            soup = BeautifulSoup(html_text, name)
        except Exception as exc:
            logger.warning("Tree builder %r unavailable or failed: %s", name, exc)
            continue
        logger.debug("Parsed document with %s", name)
        return Document(tree=soup, is_real_tree=True, raw=html_text)

    logger.warning("No tree builder could parse the document, using raw text slices")
    return Document(tree=SyntheticDocument.from_text(html_text), is_real_tree=False, raw=html_text)


def body_of(soup: BeautifulSoup) -> Tag:
    """The body tag, or the closest stand-in when the builder did not create one."""
    return soup.body or soup.html or soup
