from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional

_SCHEMES = ("https://", "http://")


@dataclass(frozen=True)
class UploadResource:
    """Public uploads URL prefix (scheme removed) and the directory behind it."""

    base_url_without_scheme: str
    base_url_length: int
    base_directory: Path

    @classmethod
    def from_upload_dir(cls, base_url: str, base_directory: str) -> "UploadResource":
        stripped = base_url or ""
        for scheme in _SCHEMES:
            stripped = stripped.replace(scheme, "")
        return cls(
            base_url_without_scheme=stripped,
            base_url_length=len(stripped),
            base_directory=Path(base_directory) if base_directory else Path(),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url_without_scheme) and self.base_directory != Path()

    def local_path(self, url: str) -> Optional[Path]:
        """Map an uploads URL onto the filesystem, or None when it is not one."""
        if not self.is_configured:
            return None
        idx = url.find(self.base_url_without_scheme)
        if idx == -1:
            return None
        remainder = url[idx + self.base_url_length :]
        if remainder and not remainder.startswith("/"):
            return None
        relative = PurePosixPath(remainder.lstrip("/"))
        if ".." in relative.parts:
            return None
        return self.base_directory.joinpath(*relative.parts)
