"""Tests for share link encoding and decoding."""
import json

import pytest

from draftkit.exceptions import ShareLinkDecodeError, ShareLinkTooLongError
from draftkit.export_options import ExportOptions
from draftkit.share_link import (
    SharePayload,
    build_share_url,
    decode_base64url,
    decode_share_payload,
    encode_base64url,
    encode_share_payload,
    read_share_payload,
    strip_share_params,
)

BASE_URL = "https://app.example/editor?theme=dark"


@pytest.fixture
def payload():
    return SharePayload(
        title="Notes",
        content="# Hi\n\nCafé ✓ (draft)",
        options=ExportOptions(title="Notes", quality=90, watermark=True),
        created_at="2026-01-01T00:00:00.000Z",
    )


def share_url_with(raw: str) -> str:
    return f"https://app.example/?view=pdf&share={raw}"


class TestRoundTrip:
    def test_payload_survives_round_trip(self, payload):
        url = build_share_url(payload, BASE_URL)

        assert url is not None
        assert "view=pdf" in url
        assert read_share_payload(url) == payload

    def test_other_query_parameters_kept(self, payload):
        url = build_share_url(payload, BASE_URL)
        assert "theme=dark" in url
        assert strip_share_params(url) == BASE_URL

    def test_default_options_round_trip(self):
        original = SharePayload.create("T", "body")
        assert original.created_at.endswith("Z")
        assert read_share_payload(build_share_url(original)) == original

    def test_too_long_returns_none(self):
        big = SharePayload(title="Big", content="x" * 8000)
        assert build_share_url(big, BASE_URL) is None

    def test_too_long_strict_raises(self):
        big = SharePayload(title="Big", content="x" * 8000)
        with pytest.raises(ShareLinkTooLongError):
            encode_share_payload(big, BASE_URL)


class TestBase64Url:
    def test_url_safe_alphabet_without_padding(self):
        assert encode_base64url("??>>") == "Pz8-Pg"
        assert decode_base64url("Pz8-Pg") == "??>>"

    def test_utf8(self):
        assert decode_base64url(encode_base64url("Grüße ✓")) == "Grüße ✓"

    def test_bad_input_raises(self):
        with pytest.raises(ShareLinkDecodeError):
            decode_base64url("%%%")


class TestDecodeFailures:
    @pytest.mark.parametrize(
        "url",
        ["https://app.example/", "https://app.example/?share=abc", "https://app.example/?view=edit&share=abc", ""],
    )
    def test_not_a_share_view(self, url):
        assert read_share_payload(url) is None

    def test_marker_without_payload(self):
        assert read_share_payload("https://app.example/?view=pdf") is None

    @pytest.mark.parametrize(
        "raw",
        [
            "%%%",
            "abc",
            encode_base64url("not json"),
            encode_base64url(json.dumps({"title": 1, "content": "x"})),
            encode_base64url(json.dumps(["title", "content"])),
            encode_base64url(json.dumps({"title": "t", "content": "c", "options": {"quality": 500}})),
        ],
    )
    def test_corrupted_payload_returns_none(self, raw):
        assert read_share_payload(share_url_with(raw)) is None

    def test_corrupted_payload_strict_raises(self):
        with pytest.raises(ShareLinkDecodeError):
            decode_share_payload(share_url_with(encode_base64url("not json")))

    def test_missing_options_use_defaults(self):
        raw = encode_base64url(json.dumps({"title": "t", "content": "c"}))
        decoded = read_share_payload(share_url_with(raw))
        assert decoded.options == ExportOptions()
        assert decoded.created_at == ""
