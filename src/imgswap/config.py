from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError

DEFAULT_EXTENSIONS = ["jpg", "jpeg", "jpe", "png", "webp", "svg", "gif"]


class SizeSpec(BaseModel):
    width: Optional[int] = None
    height: Optional[int] = None
    crop: Union[bool, list[str]] = False


class ImageSizesConfig(BaseModel):
    thumbnail_w: int = 150
    thumbnail_h: int = 150
    thumbnail_crop: Union[bool, list[str]] = True
    medium_w: int = 300
    medium_h: int = 300
    large_w: int = 1024
    large_h: int = 1024
    additional: dict[str, SizeSpec] = Field(default_factory=dict)


class UploadsConfig(BaseModel):
    base_url: str = ""
    directory: str = ""


class Settings(BaseModel):
    site_url: str = ""
    site_mirror: Optional[str] = None
    whitelist: list[str] = Field(default_factory=list)

    max_width: int = 3000
    max_height: int = 3000

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    uploads: UploadsConfig = Field(default_factory=UploadsConfig)
    image_sizes: ImageSizesConfig = Field(default_factory=ImageSizesConfig)


def load_config(path: Optional[str] = None) -> Settings:
    if not path:
        return Settings()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return Settings()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping: {cfg_path}")
    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {cfg_path}: {exc}") from exc
