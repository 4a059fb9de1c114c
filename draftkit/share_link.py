"""Share Link Codec

Packs an export payload into a URL-safe query parameter and back.

A share URL carries two query parameters on the app URL:
    view=pdf            marks the URL as a share view
    share=<base64url>   JSON payload, UTF-8, base64url without padding
"""
import base64
import binascii
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from .config import (
    DEFAULT_SHARE_BASE_URL,
    SHARE_PAYLOAD_PARAM,
    SHARE_URL_MAX_LENGTH,
    SHARE_VIEW_PARAM,
    SHARE_VIEW_VALUE,
)
from .exceptions import (
    InvalidConfigurationError,
    ShareLinkDecodeError,
    ShareLinkError,
    ShareLinkTooLongError,
)
from .export_options import ExportOptions


@dataclass
class SharePayload:
    """Everything needed to re-render an export elsewhere."""
    title: str
    content: str
    options: ExportOptions = field(default_factory=ExportOptions)
    created_at: str = ""

    @classmethod
    def create(cls, title: str, content: str, options: Optional[ExportOptions] = None) -> "SharePayload":
        """New payload stamped with the current UTC time."""
        created_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return cls(title=title, content=content, options=options or ExportOptions(), created_at=created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "content": self.content,
            "options": self.options.to_dict(),
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "SharePayload":
        """
        Rebuild a payload from decoded JSON.

        Raises:
            ShareLinkDecodeError: If the data does not have the payload shape
        """
        if not isinstance(data, dict):
            raise ShareLinkDecodeError("payload is not an object")
        if not isinstance(data.get("title"), str) or not isinstance(data.get("content"), str):
            raise ShareLinkDecodeError("title and content must be strings")

        raw_options = data.get("options")
        try:
            options = ExportOptions.from_dict(raw_options) if raw_options is not None else ExportOptions()
        except InvalidConfigurationError as e:
            raise ShareLinkDecodeError(f"bad options: {e}") from e

        created_at = data.get("createdAt", "")
        return cls(
            title=data["title"],
            content=data["content"],
            options=options,
            created_at=created_at if isinstance(created_at, str) else "",
        )


def encode_base64url(value: str) -> str:
    """UTF-8 encode and base64url encode without '=' padding."""
    return base64.urlsafe_b64encode(value.encode("utf-8")).decode("ascii").rstrip("=")


def decode_base64url(value: str) -> str:
    """
    Reverse encode_base64url.

    Raises:
        ShareLinkDecodeError: If the value is not valid base64url UTF-8
    """
    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.b64decode(padded, altchars=b"-_", validate=True)
        return raw.decode("utf-8")
    except (binascii.Error, ValueError) as e:
        raise ShareLinkDecodeError(f"bad base64url: {e}") from e


def encode_share_payload(payload: SharePayload, base_url: str = DEFAULT_SHARE_BASE_URL) -> str:
    """
    Build a share URL, keeping any other query parameters of the base URL.

    Raises:
        ShareLinkTooLongError: If the URL exceeds the length ceiling
    """
    encoded = encode_base64url(json.dumps(payload.to_dict(), ensure_ascii=False, separators=(",", ":")))

    parts = urlsplit(base_url)
    query = {
        key: values
        for key, values in parse_qs(parts.query, keep_blank_values=True).items()
        if key not in (SHARE_VIEW_PARAM, SHARE_PAYLOAD_PARAM)
    }
    query[SHARE_VIEW_PARAM] = [SHARE_VIEW_VALUE]
    query[SHARE_PAYLOAD_PARAM] = [encoded]

    url = urlunsplit(parts._replace(query=urlencode(query, doseq=True)))
    if len(url) > SHARE_URL_MAX_LENGTH:
        raise ShareLinkTooLongError(len(url), SHARE_URL_MAX_LENGTH)
    return url


def decode_share_payload(url: str) -> Optional[SharePayload]:
    """
    Read the payload from a share URL.

    Returns:
        The payload, or None if the URL is not a share view

    Raises:
        ShareLinkDecodeError: If the URL is a share view with a bad payload
    """
    params = parse_qs(urlsplit(url).query, keep_blank_values=True)
    if params.get(SHARE_VIEW_PARAM, [None])[0] != SHARE_VIEW_VALUE:
        return None

    share = params.get(SHARE_PAYLOAD_PARAM, [""])[0]
    if not share:
        return None

    try:
        data = json.loads(decode_base64url(share))
    except json.JSONDecodeError as e:
        raise ShareLinkDecodeError(f"bad JSON: {e}") from e
    return SharePayload.from_dict(data)


def build_share_url(payload: SharePayload, base_url: str = DEFAULT_SHARE_BASE_URL) -> Optional[str]:
    """
    Share URL for a payload.

    Returns:
        The URL, or None if it would be too long or cannot be built
        (documents that large must be downloaded instead)
    """
    try:
        return encode_share_payload(payload, base_url)
    except (ShareLinkError, ValueError, TypeError):
        return None


def read_share_payload(url: str) -> Optional[SharePayload]:
    """Payload of a share URL, or None for non-share URLs and bad payloads."""
    try:
        return decode_share_payload(url or "")
    except (ShareLinkError, ValueError, TypeError, RecursionError):
        return None


def strip_share_params(url: str) -> str:
    """The same URL with the share view parameters removed."""
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, values in parse_qs(parts.query, keep_blank_values=True).items()
        for value in values
        if key not in (SHARE_VIEW_PARAM, SHARE_PAYLOAD_PARAM)
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))
