from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .config import ImageSizesConfig, SizeSpec
from .log import get_logger

logger = get_logger(__name__)

Crop = Union[bool, list]


class ImageSizeRegistry:
    """Registered image sizes, computed once from static configuration.

    The built-in sizes mirror what a WordPress install exposes (``thumb``,
    ``medium``, ``large``, ``full`` and the ``thumbnail`` alias); additional
    sizes from configuration are merged on top and override built-ins with
    the same name.
    """

    def __init__(self, config: Optional[ImageSizesConfig] = None) -> None:
        self.config = config or ImageSizesConfig()
        self._sizes: Optional[Mapping[str, SizeSpec]] = None
        self._size_to_crop: Optional[Mapping[tuple, Crop]] = None
        self._lock = threading.Lock()

    def _compute_sizes(self) -> dict[str, SizeSpec]:
        cfg = self.config
        images = {
            "thumb": SizeSpec(width=cfg.thumbnail_w, height=cfg.thumbnail_h, crop=cfg.thumbnail_crop),
            "medium": SizeSpec(width=cfg.medium_w, height=cfg.medium_h, crop=False),
            "large": SizeSpec(width=cfg.large_w, height=cfg.large_h, crop=False),
            "full": SizeSpec(width=None, height=None, crop=False),
        }
        images["thumbnail"] = images["thumb"]
        images.update(cfg.additional)
        return images

    def sizes(self) -> Mapping[str, SizeSpec]:
        if self._sizes is not None:
            return self._sizes
        with self._lock:
            if self._sizes is None:
                self._sizes = MappingProxyType(self._compute_sizes())
                logger.debug("Image size registry built: %s", list(self._sizes))
        return self._sizes

    def size_to_crop(self) -> Mapping[tuple, Crop]:
        if self._size_to_crop is not None:
            return self._size_to_crop
        sizes = self.sizes()
        with self._lock:
            if self._size_to_crop is None:
                mapping = {(spec.width, spec.height): spec.crop for spec in sizes.values()}
                self._size_to_crop = MappingProxyType(mapping)
        return self._size_to_crop

    def crop_for(self, width: Optional[int], height: Optional[int]) -> Crop:
        return self.size_to_crop().get((width, height), False)
