from __future__ import annotations

from typing import Iterable

from .classifier import ImageReplacer
from .extractors import extract_image_urls
from .models import ClassifyRequest, ClassifyResponse, UrlDecision


def decide(replacer: ImageReplacer, url: str, replaced: bool = True) -> UrlDecision:
    candidate = replacer.prepare(url) if replaced else None
    if candidate is None:
        return UrlDecision(url=url, eligible=False, normalized_url=url)
    return UrlDecision(
        url=url,
        eligible=True,
        normalized_url=candidate.url,
        width=candidate.width,
        height=candidate.height,
        crop=candidate.crop,
    )


def collect_urls(payload: ClassifyRequest) -> list[str]:
    urls = list(payload.urls)
    if payload.html:
        urls.extend(extract_image_urls(payload.html))
    return list(dict.fromkeys(urls))


def classify(replacer: ImageReplacer, urls: Iterable[str], replaced: bool = True) -> ClassifyResponse:
    return ClassifyResponse(
        replaced=replaced,
        is_foreign_allowed=replacer.is_foreign_allowed,
        decisions=[decide(replacer, url, replaced) for url in urls],
    )
