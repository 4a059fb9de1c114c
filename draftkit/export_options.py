"""Export Options Dataclass

Configuration options for a single export action.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import (
    DEFAULT_COMPRESSION,
    DEFAULT_EXPORT_QUALITY,
    DEFAULT_EXPORT_TITLE,
    DEFAULT_INCLUDE_METADATA,
    DEFAULT_WATERMARK,
    MAX_TITLE_LENGTH,
)
from .exceptions import InvalidConfigurationError


@dataclass
class ExportOptions:
    """Configuration options for exporting a document.

    Constructed fresh for each export action; carries no lifecycle.

    Attributes:
        title: Document title shown in the output and used for the file name
        quality: Export quality from 0 to 100
        compression: If True, the user asked for a compressed output
        include_metadata: If True, print a metadata line under the title
        watermark: If True, overlay a "Draft" watermark on printed pages
    """

    title: Optional[str] = None
    quality: int = DEFAULT_EXPORT_QUALITY
    compression: bool = DEFAULT_COMPRESSION
    include_metadata: bool = DEFAULT_INCLUDE_METADATA
    watermark: bool = DEFAULT_WATERMARK

    def __post_init__(self):
        """Validate configuration options after initialization."""
        if isinstance(self.quality, bool) or not isinstance(self.quality, (int, float)):
            raise InvalidConfigurationError(
                f"quality must be a number, got {type(self.quality).__name__}"
            )
        if not (0 <= self.quality <= 100):
            raise InvalidConfigurationError(
                f"quality must be between 0-100, got {self.quality}"
            )
        if self.title is not None and not isinstance(self.title, str):
            raise InvalidConfigurationError(
                f"title must be a string, got {type(self.title).__name__}"
            )

    def resolved_title(self) -> str:
        """Trimmed title, or the default title when empty."""
        title = (self.title or "").strip() or DEFAULT_EXPORT_TITLE
        return title[:MAX_TITLE_LENGTH]

    @property
    def quality_hint(self) -> str:
        if self.quality >= 85:
            return "high"
        if self.quality >= 60:
            return "medium"
        return "draft"

    @property
    def compression_hint(self) -> str:
        return "enabled" if self.compression else "disabled"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire field names shared with share links."""
        data: Dict[str, Any] = {
            "quality": self.quality,
            "compression": self.compression,
            "includeMetadata": self.include_metadata,
            "watermark": self.watermark,
        }
        if self.title is not None:
            data["title"] = self.title
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportOptions":
        """Build options from wire field names; missing keys use defaults.

        Raises:
            InvalidConfigurationError: If a value has the wrong type or range
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError("options must be an object")

        def flag(key: str, default: bool) -> bool:
            value = data.get(key, default)
            if not isinstance(value, bool):
                raise InvalidConfigurationError(f"{key} must be a boolean")
            return value

        return cls(
            title=data.get("title"),
            quality=data.get("quality", DEFAULT_EXPORT_QUALITY),
            compression=flag("compression", DEFAULT_COMPRESSION),
            include_metadata=flag("includeMetadata", DEFAULT_INCLUDE_METADATA),
            watermark=flag("watermark", DEFAULT_WATERMARK),
        )
