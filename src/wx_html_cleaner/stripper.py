"""Noise removal passes over a parsed document.

Each pass mutates the tree in place, is safe to run twice, and returns how
many nodes (or attributes) it removed so the caller can log it.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Comment, Tag

from wx_html_cleaner.rules import (
    KEPT_META_NAMES,
    NON_CONTENT_PATTERN,
    NON_CONTENT_TAGS,
    PASSTHROUGH_DATA_ATTRIBUTES,
    PLATFORM_TAGS,
    REMOVED_ATTRIBUTE_PREFIXES,
    REMOVED_ATTRIBUTES,
    SCRIPT_LIKE_TAGS,
)

logger = logging.getLogger(__name__)

_STRUCTURAL_TAGS = frozenset({"html", "head", "body"})


def _decompose_all(tags: list[Tag]) -> int:
    removed = 0
    for tag in tags:
        # Descendants of an already removed ancestor are decomposed with it.
        if tag.decomposed:
            continue
        tag.decompose()
        removed += 1
    return removed


def _is_stylesheet_link(tag: Tag) -> bool:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return "stylesheet" in (r.lower() for r in rel)


def remove_styles_and_scripts(soup: BeautifulSoup) -> int:
    """Remove <style>, <script>, <noscript>, <iframe> and stylesheet <link> elements."""
    doomed = soup.find_all(list(SCRIPT_LIKE_TAGS))
    doomed.extend(link for link in soup.find_all("link") if _is_stylesheet_link(link))
    return _decompose_all(doomed)


def remove_platform_tags(soup: BeautifulSoup) -> int:
    return _decompose_all(soup.find_all(list(PLATFORM_TAGS)))


def looks_like_non_content(tag: Tag) -> bool:
    """True for nav/header/footer/aside and elements whose class or id reads like chrome."""
    if tag.name in NON_CONTENT_TAGS:
        return True
    if tag.name in _STRUCTURAL_TAGS:
        return False
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    tokens = list(classes)
    element_id = tag.get("id")
    if isinstance(element_id, str) and element_id:
        tokens.append(element_id)
    return any(NON_CONTENT_PATTERN.search(token) for token in tokens)


def remove_non_content_areas(soup: BeautifulSoup) -> int:
    """Must run before strip_attributes, it reads class and id."""
    return _decompose_all([tag for tag in soup.find_all(True) if looks_like_non_content(tag)])


def remove_comments(soup: BeautifulSoup) -> int:
    comments = soup.find_all(string=lambda s: isinstance(s, Comment))
    for comment in comments:
        comment.extract()
    return len(comments)


def _keeps_meta(meta: Tag) -> bool:
    if meta.get("charset"):
        return True
    if (meta.get("http-equiv") or "").lower() == "content-type":
        return True
    return (meta.get("name") or "").lower() in KEPT_META_NAMES


def clean_meta_tags(soup: BeautifulSoup) -> int:
    """Drop every <meta> that is not about encoding, viewport or description."""
    return _decompose_all([meta for meta in soup.find_all("meta") if not _keeps_meta(meta)])


def is_removed_attribute(name: str) -> bool:
    name = name.lower()
    if name in PASSTHROUGH_DATA_ATTRIBUTES:
        return False
    return name in REMOVED_ATTRIBUTES or name.startswith(REMOVED_ATTRIBUTE_PREFIXES)


def strip_attributes(soup: BeautifulSoup) -> int:
    """Remove style/class/id, event handlers, data-*, aria-*, role and tabindex."""
    removed = 0
    for tag in soup.find_all(True):
        for name in list(tag.attrs):
            if is_removed_attribute(name):
                del tag.attrs[name]
                removed += 1
    return removed


def remove_noise_elements(soup: BeautifulSoup) -> int:
    """All element-level passes. Attributes are left for strip_attributes."""
    removed = remove_styles_and_scripts(soup)
    removed += remove_platform_tags(soup)
    removed += remove_non_content_areas(soup)
    removed += remove_comments(soup)
    removed += clean_meta_tags(soup)
    logger.debug("Removed %d noise nodes", removed)
    return removed

