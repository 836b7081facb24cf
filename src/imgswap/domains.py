from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional
from urllib.parse import urlparse

from .log import get_logger

logger = get_logger(__name__)

WWW_PREFIX = "www."


class DomainSet(frozenset):
    """Lowercase hostnames, each bare domain paired with its ``www.`` sibling."""

    def __repr__(self) -> str:
        return f"DomainSet({sorted(self)!r})"


def extract_host(url: object) -> Optional[str]:
    if not isinstance(url, str):
        return None
    try:
        parsed = urlparse(url)
        host = parsed.hostname
    except ValueError:
        return None
    if host:
        return host.lower()
    return None


def build_domain_set(urls: Optional[Iterable[str]]) -> DomainSet:
    if urls is None or isinstance(urls, (str, bytes)):
        return DomainSet()
    try:
        hosts = {host for host in (extract_host(u) for u in urls) if host}
    except TypeError:
        return DomainSet()
    # www versions are needed when validating either spelling of the host.
    siblings = {WWW_PREFIX + h for h in hosts if not h.startswith(WWW_PREFIX)}
    return DomainSet(hosts | siblings)


@dataclass(frozen=True)
class SourceRegistry:
    possible_sources: DomainSet = field(default_factory=DomainSet)
    allowed_sources: DomainSet = field(default_factory=DomainSet)
    is_foreign_allowed: bool = False
    site_mappings: dict[str, str] = field(default_factory=dict)

    def is_known(self, host: str) -> bool:
        return host in self.possible_sources or host in self.allowed_sources


def site_mappings_for(site_url: Optional[str], mirror_url: Optional[str]) -> dict[str, str]:
    if not mirror_url:
        return {}
    return {(site_url or "").rstrip("/"): mirror_url.rstrip("/")}


def configure(
    site_url: Optional[str],
    mirror_url: Optional[str] = None,
    whitelist: Optional[Iterable[str]] = (),
) -> SourceRegistry:
    mappings = site_mappings_for(site_url, mirror_url)
    possible = build_domain_set([site_url or "", *mappings.values()])
    allowed = build_domain_set(whitelist)
    registry = SourceRegistry(
        possible_sources=possible,
        allowed_sources=allowed,
        is_foreign_allowed=len(possible - allowed) > 0,
        site_mappings=mappings,
    )
    logger.debug(
        "Sources configured: possible=%s allowed=%s foreign=%s",
        sorted(possible),
        sorted(allowed),
        registry.is_foreign_allowed,
    )
    return registry
