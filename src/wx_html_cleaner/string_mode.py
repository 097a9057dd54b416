"""Regex-only cleaning for input no tree builder could handle.

Runs the same kind of cleanup as the tree path with plain substitutions:
strip style/script bodies and stylesheet links, drop presentation and
tracking attributes, collapse whitespace, then wrap whatever is left of the
body in a canonical document. The order of the steps matters: attributes
go before whitespace is collapsed.
"""

from __future__ import annotations

import logging
import re

from wx_html_cleaner.rules import DEFAULT_TITLE, KEPT_IDS

logger = logging.getLogger(__name__)

# attribute value: double-quoted, single-quoted or bare
_VALUE = r"""(?:"[^"]*"|'[^']*'|[^\s>]+)"""

_STYLE_RE = re.compile(r"<style[^>]*>.*?</style>", re.DOTALL | re.IGNORECASE)
_SCRIPT_RE = re.compile(r"<script[^>]*>.*?</script>", re.DOTALL | re.IGNORECASE)
_STYLESHEET_LINK_RE = re.compile(r"""<link[^>]*rel\s*=\s*["']?stylesheet["']?[^>]*>""", re.IGNORECASE)
_STYLE_ATTR_RE = re.compile(rf"\s+style\s*=\s*{_VALUE}", re.IGNORECASE)
_CLASS_ATTR_RE = re.compile(rf"\s+class\s*=\s*{_VALUE}", re.IGNORECASE)
_ID_ATTR_RE = re.compile(r"""\s+id\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE)
_EVENT_ATTR_RE = re.compile(rf"\s+on\w+\s*=\s*{_VALUE}", re.IGNORECASE)
_DATA_ATTR_RE = re.compile(rf"\s+data-(?!(?:src|alt)\s*=)[\w-]+\s*=\s*{_VALUE}", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")
_BETWEEN_TAGS_RE = re.compile(r">\s+<")

_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.DOTALL | re.IGNORECASE)
_BODY_RE = re.compile(r"<body[^>]*>(.*?)</body>", re.DOTALL | re.IGNORECASE)
# Document wrappers left over when there is no <body> to take content from.
_WRAPPER_RE = re.compile(
    r"<!DOCTYPE[^>]*>|</?html[^>]*>|<head[^>]*>.*?</head>|</?body[^>]*>",
    re.DOTALL | re.IGNORECASE,
)


def _strip_id(match: re.Match[str]) -> str:
    value = next((group for group in match.groups() if group is not None), "")
    return match.group(0) if value in KEPT_IDS else ""


def strip_noise(html_text: str) -> str:
    """Drop noise blocks and attributes, then collapse whitespace."""
    text = _STYLE_RE.sub("", html_text)
    text = _SCRIPT_RE.sub("", text)
    text = _STYLESHEET_LINK_RE.sub("", text)
    text = _STYLE_ATTR_RE.sub("", text)
    text = _CLASS_ATTR_RE.sub("", text)
    text = _ID_ATTR_RE.sub(_strip_id, text)
    text = _EVENT_ATTR_RE.sub("", text)
    text = _DATA_ATTR_RE.sub("", text)
    text = _WS_RE.sub(" ", text)
    return _BETWEEN_TAGS_RE.sub("><", text)


def extract_title(html_text: str) -> str:
    match = _TITLE_RE.search(html_text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return DEFAULT_TITLE


def extract_body(html_text: str) -> str:
    match = _BODY_RE.search(html_text)
    if match:
        return match.group(1).strip()
    return _WRAPPER_RE.sub("", html_text).strip()


def clean_string(html_text: str) -> str:
    """Clean ``html_text`` with regex substitutions only."""
    logger.debug("Cleaning %d chars in string mode", len(html_text))
    text = strip_noise(html_text)
    title = extract_title(text)
    body = extract_body(text)
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f"<title>{title}</title></head><body>{body}</body></html>"
    )
