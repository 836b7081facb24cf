from pathlib import Path

from imgswap.classifier import ImageReplacer
from imgswap.config import Settings, SizeSpec


def _settings(tmp_path: Path, **overrides) -> Settings:
    data = {
        "site_url": "https://example.com",
        "whitelist": ["https://example.com", "https://assets.partner.org"],
        "uploads": {
            "base_url": "https://example.com/wp-content/uploads",
            "directory": str(tmp_path),
        },
        "max_width": 2000,
        "max_height": 1500,
    }
    data.update(overrides)
    return Settings(**data)


def test_from_settings_builds_sources(tmp_path: Path) -> None:
    replacer = ImageReplacer.from_settings(_settings(tmp_path))
    assert "www.example.com" in replacer.sources.possible_sources
    assert "assets.partner.org" in replacer.sources.allowed_sources
    assert replacer.is_foreign_allowed is False
    assert replacer.upload_resource.base_url_without_scheme == "example.com/wp-content/uploads"


def test_prepare_rejects_foreign_urls(tmp_path: Path) -> None:
    replacer = ImageReplacer.from_settings(_settings(tmp_path))
    assert replacer.prepare("https://stranger.net/photo-300x200.jpg") is None
    assert replacer.prepare("/relative/photo.jpg") is None


def test_prepare_strips_suffix_and_reports_dimensions(tmp_path: Path) -> None:
    (tmp_path / "photo.jpg").write_bytes(b"")
    replacer = ImageReplacer.from_settings(_settings(tmp_path))
    candidate = replacer.prepare("https://example.com/wp-content/uploads/photo-150x150.jpg")
    assert candidate is not None
    assert candidate.url == "https://example.com/wp-content/uploads/photo.jpg"
    assert (candidate.width, candidate.height) == (150, 150)
    assert candidate.crop is True
    assert (candidate.max_width, candidate.max_height) == (2000, 1500)


def test_prepare_without_suffix(tmp_path: Path) -> None:
    replacer = ImageReplacer.from_settings(_settings(tmp_path))
    candidate = replacer.prepare("https://assets.partner.org/banner.png")
    assert candidate is not None
    assert candidate.url == "https://assets.partner.org/banner.png"
    assert candidate.width is False
    assert candidate.height is False
    assert candidate.crop is False


def test_prepare_uses_additional_size_crop(tmp_path: Path) -> None:
    settings = _settings(tmp_path)
    settings.image_sizes.additional["hero"] = SizeSpec(width=1200, height=600, crop=["center", "top"])
    replacer = ImageReplacer.from_settings(settings)
    candidate = replacer.prepare("https://example.com/wp-content/uploads/hero-1200x600.jpg")
    assert candidate is not None
    assert candidate.crop == ["center", "top"]
    assert candidate.url.endswith("hero-1200x600.jpg")


def test_extensions_are_case_insensitive(tmp_path: Path) -> None:
    replacer = ImageReplacer.from_settings(_settings(tmp_path, extensions=["JPG"]))
    assert replacer.parse_dimensions_from_filename("https://example.com/a-10x20.jpg") == (10, 20)
