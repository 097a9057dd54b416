"""Static cleaning rules shared by the tree path and the string-mode pipeline.

Everything here is immutable module-level data. The cleaning functions take
these sets by reference and never mutate them.
"""

from __future__ import annotations

import re
from enum import Enum

# Attributes whose presence makes an otherwise empty element worth keeping.
PRESERVED_ATTRIBUTES = frozenset({
    "href", "src", "alt", "title", "target",
    "charset", "content", "name", "http-equiv",
})

REMOVED_ATTRIBUTES = frozenset({"style", "class", "id", "role", "tabindex"})
REMOVED_ATTRIBUTE_PREFIXES = ("on", "data-", "aria-")

# Lazy-loaded images keep their real source in these.
PASSTHROUGH_DATA_ATTRIBUTES = frozenset({"data-src", "data-alt"})

# Removed together with their contents.
SCRIPT_LIKE_TAGS = ("style", "script", "noscript", "iframe")

ALWAYS_KEPT_TAGS = frozenset({"html", "head", "body", "title", "meta", "img", "br", "hr"})

WHITESPACE_SENSITIVE_TAGS = frozenset({"pre", "code", "textarea"})

# WeChat embeds (voice notes, ad cards, profile cards, mini programs...)
PLATFORM_TAGS = (
    "mpvoice",
    "mpcps",
    "mpprofile",
    "mp-common-profile",
    "mp-miniprogram",
    "mpvideosnap",
    "qqmusic",
    "mp-style-type",
)

NON_CONTENT_TAGS = ("nav", "header", "footer", "aside")

# Matched per class token and against the id value, e.g. "top-nav", "ad_box".
NON_CONTENT_PATTERN = re.compile(
    r"(?:^|[-_])(?:navigation|navbar|nav|sidebar|menu|advertisement|advert|ads|ad|banner)(?:[-_]|$)",
    re.IGNORECASE,
)

KEPT_META_NAMES = frozenset({"viewport", "description"})

# Content region candidates, highest priority first.
CONTENT_SELECTORS = (
    "#js_content",
    ".rich_media_content",
    "[id*=content]",
    "[class*=content]",
    "article",
    "main",
)
CONTENT_MIN_TEXT = 100

UI_KEYWORDS = (
    "点击", "查看", "更多", "阅读原文", "分享", "收藏", "点赞", "在看",
    "关注", "扫码", "长按", "二维码", "返回", "转发", "留言", "赞赏",
    "微信扫一扫", "继续滑动", "知道了", "取消", "允许",
    "click", "view", "more", "share", "follow", "subscribe",
    "login", "sign in", "download", "scan", "menu",
)
SHORT_TEXT_LIMIT = 50
LONG_TEXT_MAX_KEYWORDS = 3

HEADING_MIN_TEXT = 5
SPAN_MIN_TEXT = 10
BLOCK_DIRECT_MIN_TEXT = 10
BLOCK_MIN_TEXT = 5
SIGNIFICANT_TEXT = 10

PARAGRAPH_CHUNK_CHARS = 200
SENTENCE_TERMINATORS = "。！？.!?"

# String-mode keeps these ids so a second pass can still find the article.
KEPT_IDS = frozenset({"js_content", "js_author", "js_name"})

DEFAULT_TITLE = "清理后的文档"

FAILURE_DOCUMENT = (
    '<!DOCTYPE html><html><head><meta charset="utf-8"></head>'
    "<body><p>HTML清理失败</p></body></html>"
)

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
BLOCK_TAGS = frozenset({"div", "section", "article", "blockquote", "figcaption"})

# Inline tags re-serialized verbatim inside paragraphs, headings and list items.
INLINE_TAGS = frozenset({"strong", "b", "em", "i", "u", "span", "a", "sup", "sub", "code"})

# Tags a "leaf" block may contain while still being read as one run of text.
PHRASING_TAGS = INLINE_TAGS | frozenset({
    "br", "wbr", "font", "small", "mark", "abbr", "time", "label",
    "s", "del", "ins", "q", "cite", "var", "kbd", "samp",
})


class ElementKind(Enum):
    IMAGE = "image"
    HEADING = "heading"
    LIST = "list"
    PARAGRAPH = "paragraph"
    STRONG = "strong"
    SPAN = "span"
    BLOCK = "block"
    OTHER = "other"

    @classmethod
    def of(cls, tag_name: str | None) -> ElementKind:
        name = (tag_name or "").lower()
        if name == "img":
            return cls.IMAGE
        if name in HEADING_TAGS:
            return cls.HEADING
        if name in ("ul", "ol"):
            return cls.LIST
        if name == "p":
            return cls.PARAGRAPH
        if name in ("strong", "b"):
            return cls.STRONG
        if name == "span":
            return cls.SPAN
        if name in BLOCK_TAGS:
            return cls.BLOCK
        return cls.OTHER
