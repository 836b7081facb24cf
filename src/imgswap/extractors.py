from __future__ import annotations

import re

from lxml import etree
from lxml import html as lxml_html

URL_ATTRIBUTES = ["src", "data-src"]
SRCSET_ATTRIBUTES = ["srcset", "data-srcset"]

_BACKGROUND_URL_RE = re.compile(
    r"background(?:-image)?\s*:[^;]*?url\(\s*(['\"]?)(?P<url>[^'\")]+)\1\s*\)",
    re.IGNORECASE,
)


def _srcset_urls(value: str) -> list[str]:
    urls = []
    for candidate in value.split(","):
        parts = candidate.strip().split()
        if parts:
            urls.append(parts[0])
    return urls


def _background_urls(style: str) -> list[str]:
    return [m.group("url").strip() for m in _BACKGROUND_URL_RE.finditer(style)]


def extract_image_urls(html: str) -> list[str]:
    if not html or not html.strip():
        return []
    try:
        root = lxml_html.fromstring(html)
    except (etree.LxmlError, ValueError):
        return []

    found: list[str] = []
    for img in root.iter("img"):
        for attr in URL_ATTRIBUTES:
            value = img.get(attr)
            if value and value.strip():
                found.append(value.strip())
        for attr in SRCSET_ATTRIBUTES:
            value = img.get(attr)
            if value:
                found.extend(_srcset_urls(value))
    for element in root.xpath("descendant-or-self::*[@style]"):
        found.extend(_background_urls(element.get("style", "")))

    seen: set[str] = set()
    unique = []
    for url in found:
        if url in seen:
            continue
        seen.add(url)
        unique.append(url)
    return unique
