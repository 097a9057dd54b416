"""File names for cleaned documents, derived from the page title."""

from __future__ import annotations

import html
import re

DEFAULT_SUFFIX = "_clean.html"
DEFAULT_MAX_LENGTH = 20

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_ILLEGAL_RE = re.compile(r'[<>:"/\\|?*]')
_WS_RE = re.compile(r"\s+")
_HTML_EXT_RE = re.compile(r"\.html?$", re.IGNORECASE)


def _sanitize(title: str) -> str:
    title = _TAG_RE.sub("", title)
    title = html.unescape(title)
    title = _ILLEGAL_RE.sub("", title)
    return _WS_RE.sub(" ", title).strip()


def suggest_title(html_text: str, original_name: str = "", max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Title usable as a file stem.

    Falls back to ``original_name`` without its .htm/.html extension, then to
    "untitled". The result is cut to ``max_length`` characters.
    """
    match = _TITLE_RE.search(html_text or "")
    title = _sanitize(match.group(1)) if match else ""
    if not title:
        title = _ILLEGAL_RE.sub("", _HTML_EXT_RE.sub("", original_name or "")).strip()
    if not title:
        title = "untitled"
    return title[:max_length].strip()


def cleaned_filename(
    html_text: str,
    original_name: str = "",
    suffix: str = DEFAULT_SUFFIX,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> str:
    return f"{suggest_title(html_text, original_name, max_length)}{suffix}"
