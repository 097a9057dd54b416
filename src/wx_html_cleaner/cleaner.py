"""Entry point of the cleaning core.

clean() tries the tree path first, falls back to the string-mode pipeline,
and as a last resort hands back the input untouched. It never raises; every
failure is logged instead.
"""

from __future__ import annotations

import logging

from wx_html_cleaner.document import DEFAULT_PARSER, Document, acquire
from wx_html_cleaner.extractor import extract_content, locate_content_region
from wx_html_cleaner.serializer import serialize
from wx_html_cleaner.simplifier import collapse_text_whitespace, simplify
from wx_html_cleaner.string_mode import clean_string
from wx_html_cleaner.stripper import remove_noise_elements, strip_attributes

logger = logging.getLogger(__name__)


def clean_tree(document: Document) -> str:
    """Clean a parsed document in place and serialize the extracted content."""
    soup = document.tree
    removed = remove_noise_elements(soup)
    # Located before attributes go, the selectors need id and class.
    region = locate_content_region(soup)
    attributes = strip_attributes(soup)
    report = simplify(soup)
    region = report.follow(region)
    collapse_text_whitespace(soup)
    fragment = extract_content(soup, region)
    logger.debug(
        "Tree path: %d noise nodes, %d attributes, %d simplify passes, region=%s",
        removed, attributes, report.passes, region.name if region is not None else None,
    )
    return serialize(document, fragment)


def _run_tree_path(document: Document) -> str | None:
    try:
        return clean_tree(document)
    except Exception:
        logger.warning("Tree cleaning failed, retrying in string mode", exc_info=True)
        return None


def _run_string_path(html_text: str) -> str | None:
    try:
        return clean_string(html_text)
    except Exception:
        logger.error("String-mode cleaning failed, returning input unchanged", exc_info=True)
        return None


def clean(html_text: str, parser: str = DEFAULT_PARSER) -> str:
    """Return a minimal, well-formed HTML document holding the article content.

    Args:
        html_text: A complete HTML document.
        parser: BeautifulSoup tree builder to try first.

    Returns:
        The cleaned document, or ``html_text`` itself if nothing worked.
    """
    if html_text is None:
        html_text = ""
    logger.info("Cleaning %.2f KB of HTML", len(html_text) / 1024)

    document = acquire(html_text, parser)
    cleaned = _run_tree_path(document) if document.is_real_tree else None
    if cleaned is None:
        cleaned = _run_string_path(html_text)
    if cleaned is None:
        return html_text

    reduction = (1 - len(cleaned) / max(len(html_text), 1)) * 100
    logger.info("Cleaned: %d -> %d chars (%.0f%% reduction)", len(html_text), len(cleaned), reduction)
    return cleaned
