# src/cleanup/html_utils.py — v1
"""lxml helpers shared by the cleanup strategies.

Parsing is lenient (``recover=True``); callers treat any exception raised
here as a strategy decline.
"""

from __future__ import annotations

import html as html_lib
import re

import lxml.html
from lxml import etree

# Removed wholesale from any extracted fragment
NOISE_TAGS = (
    "script", "style", "noscript",
    "nav", "header", "footer",
    "iframe", "embed", "object",
)

# Substring patterns matched against class/id (lower-cased)
_SOCIAL_PATTERNS = ("social", "share")
_COMMENT_PATTERNS = ("comment",)
_SIDEBAR_PATTERNS = ("sidebar",)

# "ad" is matched per class token, not as a substring: "header", "heading"
# and "shadow" must survive.
_AD_TOKEN_RE = re.compile(
    r"^(ad|ads|adv|advert\w*|advertisement\w*|sponsor\w*|ad[-_]\w+|\w+[-_]ads?)$"
)

_HIDDEN_STYLE_RE = re.compile(r"display\s*:\s*none|visibility\s*:\s*hidden")
_WS_RE = re.compile(r"\s+")

_STRIPPED_ATTRS = ("style", "class", "id")


def parse_document(raw_html: str) -> lxml.html.HtmlElement:
    """Parse a full HTML document. Raises on empty or unparseable input."""
    if not raw_html or not raw_html.strip():
        raise ValueError("empty HTML document")
    parser = lxml.html.HTMLParser(recover=True, encoding="utf-8")
    return lxml.html.document_fromstring(raw_html.encode("utf-8"), parser=parser)


def normalized_text(el: lxml.html.HtmlElement) -> str:
    """Whitespace-collapsed text content of an element."""
    return _WS_RE.sub(" ", el.text_content()).strip()


def inner_html(el: lxml.html.HtmlElement) -> str:
    """Serialize an element's children (not the element tag itself)."""
    parts: list[str] = []
    if el.text:
        parts.append(html_lib.escape(el.text, quote=False))
    for child in el:
        parts.append(lxml.html.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts).strip()


def body_of(doc: lxml.html.HtmlElement) -> lxml.html.HtmlElement:
    """Return the <body> element, or the document root when absent."""
    bodies = doc.xpath("//body")
    return bodies[0] if bodies else doc


def _attr_tokens(el: lxml.html.HtmlElement) -> list[str]:
    values = f"{el.get('class', '')} {el.get('id', '')}".lower()
    return values.split()


def _matches_any(el: lxml.html.HtmlElement, patterns: tuple[str, ...]) -> bool:
    values = f"{el.get('class', '')} {el.get('id', '')}".lower()
    return any(p in values for p in patterns)


def _is_ad(el: lxml.html.HtmlElement) -> bool:
    return any(_AD_TOKEN_RE.match(token) for token in _attr_tokens(el))


def _is_hidden(el: lxml.html.HtmlElement) -> bool:
    style = (el.get("style") or "").lower()
    return bool(_HIDDEN_STYLE_RE.search(style))


def _drop(el: lxml.html.HtmlElement) -> None:
    # drop_tree keeps the element's tail text attached to the parent
    if el.getparent() is not None:
        el.drop_tree()


def remove_noise(root: lxml.html.HtmlElement, include_sidebar: bool = False) -> int:
    """Remove boilerplate elements below ``root`` in place.

    Returns the number of elements dropped.
    """
    doomed: list[lxml.html.HtmlElement] = []
    for el in root.iter():
        if el is root or not isinstance(el.tag, str):
            if isinstance(el, (etree._Comment, etree._ProcessingInstruction)):
                doomed.append(el)
            continue
        tag = el.tag.lower()
        if (
            tag in NOISE_TAGS
            or _is_ad(el)
            or _matches_any(el, _SOCIAL_PATTERNS)
            or _matches_any(el, _COMMENT_PATTERNS)
            or (include_sidebar and _matches_any(el, _SIDEBAR_PATTERNS))
            or _is_hidden(el)
        ):
            doomed.append(el)

    for el in doomed:
        if isinstance(el, lxml.html.HtmlElement):
            _drop(el)
        elif el.getparent() is not None:
            _remove_keep_tail(el)
    return len(doomed)


def _remove_keep_tail(node: etree._Element) -> None:
    parent = node.getparent()
    if node.tail:
        prev = node.getprevious()
        if prev is not None:
            prev.tail = (prev.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


def strip_attributes(root: lxml.html.HtmlElement) -> None:
    """Drop presentational and scripting attributes from ``root`` and below."""
    for el in root.iter():
        if not isinstance(el.tag, str):
            continue
        for name in list(el.attrib):
            lowered = name.lower()
            if (
                lowered in _STRIPPED_ATTRS
                or lowered.startswith("data-")
                or lowered.startswith("on")
            ):
                del el.attrib[name]


def clean_element(root: lxml.html.HtmlElement, include_sidebar: bool = False) -> None:
    """Remove noise elements, then strip attributes."""
    remove_noise(root, include_sidebar=include_sidebar)
    strip_attributes(root)
