from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional, Union

from .config import Settings
from .domains import DomainSet, SourceRegistry, configure, extract_host
from .log import get_logger
from .sizes import Crop, ImageSizeRegistry
from .uploads import UploadResource

logger = get_logger(__name__)

NO_DIMENSIONS = (False, False)

Dimension = Union[int, bool]


@lru_cache(maxsize=32)
def _compile_suffix_pattern(extensions: frozenset) -> Optional[re.Pattern]:
    if not extensions:
        return None
    alternatives = "|".join(re.escape(ext) for ext in sorted(extensions))
    return re.compile(rf"-([0-9]+)x([0-9]+)\.(?:{alternatives})$", re.IGNORECASE | re.ASCII)


def size_suffix_pattern(extensions: Iterable[str]) -> Optional[re.Pattern]:
    """Pattern for a trailing ``-WxH.ext`` segment, None when no extension is known."""
    return _compile_suffix_pattern(frozenset(e.lower() for e in extensions if e))


def _match_suffix(url: object, extensions: Iterable[str]) -> Optional[re.Match]:
    if not isinstance(url, str):
        return None
    pattern = size_suffix_pattern(extensions)
    if pattern is None:
        return None
    return pattern.search(url)


def can_replace(url: object, possible_sources: DomainSet, allowed_sources: DomainSet) -> bool:
    host = extract_host(url)
    if not host:
        return False
    return host in possible_sources or host in allowed_sources


def strip_size_suffix(url: str, upload_resource: UploadResource, known_extensions: Iterable[str]) -> str:
    match = _match_suffix(url, known_extensions)
    if match is None:
        return url
    # group 1 starts right after the hyphen; drop "-WxH" and keep ".ext".
    stripped = url[: match.start(1) - 1] + url[match.end(2) :]
    path = upload_resource.local_path(stripped)
    if path is None:
        logger.debug("Size suffix kept, not an uploads url: %s", url)
        return url
    try:
        exists = path.is_file()
    except OSError:
        exists = False
    if not exists:
        logger.debug("Size suffix kept, original missing: %s", url)
        return url
    logger.debug("Size suffix stripped: %s -> %s", url, stripped)
    return stripped


def parse_dimensions_from_filename(
    url: str, known_extensions: Iterable[str]
) -> tuple[Dimension, Dimension]:
    match = _match_suffix(url, known_extensions)
    if match is None:
        return NO_DIMENSIONS
    try:
        width = int(match.group(1))
        height = int(match.group(2))
    except ValueError:
        # digit runs past the interpreter's int conversion limit
        return NO_DIMENSIONS
    if width > 0 and height > 0:
        return width, height
    return NO_DIMENSIONS


@dataclass(frozen=True)
class ReplacementCandidate:
    """What the CDN URL builder receives for one eligible image."""

    original_url: str
    url: str
    width: Dimension
    height: Dimension
    crop: Crop
    max_width: int
    max_height: int


@dataclass(frozen=True)
class ImageReplacer:
    sources: SourceRegistry
    upload_resource: UploadResource
    size_registry: ImageSizeRegistry = field(default_factory=ImageSizeRegistry)
    extensions: frozenset = field(default_factory=frozenset)
    max_width: int = 3000
    max_height: int = 3000

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageReplacer":
        sources = configure(settings.site_url, settings.site_mirror, settings.whitelist)
        replacer = cls(
            sources=sources,
            upload_resource=UploadResource.from_upload_dir(
                settings.uploads.base_url, settings.uploads.directory
            ),
            size_registry=ImageSizeRegistry(settings.image_sizes),
            extensions=frozenset(e.lower() for e in settings.extensions if e),
            max_width=settings.max_width,
            max_height=settings.max_height,
        )
        logger.info(
            "Replacer configured for %s (mirror=%s, whitelist=%d, foreign_allowed=%s)",
            settings.site_url or "<no site>",
            settings.site_mirror or "-",
            len(settings.whitelist),
            sources.is_foreign_allowed,
        )
        return replacer

    @property
    def is_foreign_allowed(self) -> bool:
        return self.sources.is_foreign_allowed

    def can_replace_url(self, url: object) -> bool:
        return can_replace(url, self.sources.possible_sources, self.sources.allowed_sources)

    def strip_image_size_from_url(self, url: str) -> str:
        return strip_size_suffix(url, self.upload_resource, self.extensions)

    def parse_dimensions_from_filename(self, url: str) -> tuple[Dimension, Dimension]:
        return parse_dimensions_from_filename(url, self.extensions)

    def prepare(self, url: object) -> Optional[ReplacementCandidate]:
        if not self.can_replace_url(url):
            return None
        width, height = self.parse_dimensions_from_filename(url)
        crop: Crop = False
        if width and height:
            crop = self.size_registry.crop_for(width, height)
        return ReplacementCandidate(
            original_url=url,
            url=self.strip_image_size_from_url(url),
            width=width,
            height=height,
            crop=crop,
            max_width=self.max_width,
            max_height=self.max_height,
        )
