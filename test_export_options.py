"""Tests for export options."""
import pytest

from draftkit.exceptions import InvalidConfigurationError
from draftkit.export_options import ExportOptions


def test_defaults():
    options = ExportOptions()
    assert options.quality == 80
    assert options.compression is True
    assert options.include_metadata is True
    assert options.watermark is False


@pytest.mark.parametrize("quality", [-1, 101, "high", True])
def test_invalid_quality(quality):
    with pytest.raises(InvalidConfigurationError):
        ExportOptions(quality=quality)


def test_resolved_title():
    assert ExportOptions().resolved_title() == "Draft Export"
    assert ExportOptions(title="   ").resolved_title() == "Draft Export"
    assert ExportOptions(title="  Notes ").resolved_title() == "Notes"
    assert len(ExportOptions(title="t" * 300).resolved_title()) == 120


@pytest.mark.parametrize("quality,hint", [(100, "high"), (85, "high"), (60, "medium"), (59, "draft")])
def test_quality_hint(quality, hint):
    assert ExportOptions(quality=quality).quality_hint == hint


def test_compression_hint():
    assert ExportOptions(compression=False).compression_hint == "disabled"


def test_dict_round_trip_uses_wire_names():
    options = ExportOptions(title="T", quality=70, include_metadata=False)
    data = options.to_dict()
    assert data["includeMetadata"] is False
    assert ExportOptions.from_dict(data) == options


def test_from_dict_rejects_wrong_types():
    with pytest.raises(InvalidConfigurationError):
        ExportOptions.from_dict({"compression": "yes"})
    with pytest.raises(InvalidConfigurationError):
        ExportOptions.from_dict("not a dict")
