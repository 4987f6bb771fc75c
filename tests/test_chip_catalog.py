"""Unit tests for the chip catalog loader and lookups."""

import json
from pathlib import Path

import pytest

from app.core.errors import ConfigurationAppError, NotFoundAppError
from app.services.chip_catalog import CHIP_NOT_FOUND_MESSAGE, ChipCatalog, load_chip_catalog


def test_load_preserves_file_order(tmp_path: Path) -> None:
    path = tmp_path / "chips.json"
    path.write_text('{"zeta": 1, "alpha": 2, "mid": 3}', encoding="utf-8")

    catalog = load_chip_catalog(path)

    assert catalog.ids == ["zeta", "alpha", "mid"]
    assert list(catalog.as_dict()) == ["zeta", "alpha", "mid"]
    assert catalog.source == path


def test_get_chip_returns_stored_record() -> None:
    catalog = ChipCatalog({"gNB-mmWave": {"band": "FR2"}})

    assert catalog.get_chip("gNB-mmWave") == {"band": "FR2"}


@pytest.mark.parametrize("value", [None, False, 0, "", []])
def test_falsy_records_count_as_present(value) -> None:
    catalog = ChipCatalog({"chip": value})

    assert catalog.get_chip("chip") == value


def test_get_chip_unknown_id_raises_not_found() -> None:
    catalog = ChipCatalog({"a": 1, "b": 2})

    with pytest.raises(NotFoundAppError) as exc_info:
        catalog.get_chip("unknown-chip")

    err = exc_info.value
    assert err.code == "chip_not_found"
    assert err.message == CHIP_NOT_FOUND_MESSAGE
    assert err.details == {"requested": "unknown-chip", "available": ["a", "b"]}


def test_catalog_is_read_only() -> None:
    catalog = ChipCatalog({"a": 1})

    with pytest.raises(TypeError):
        catalog["b"] = 2  # type: ignore[index]


def test_as_dict_returns_a_copy() -> None:
    source = {"a": {"x": 1}}
    catalog = ChipCatalog(source)

    snapshot = catalog.as_dict()
    snapshot["b"] = 2
    source["c"] = 3

    assert catalog.ids == ["a"]


def test_missing_file_is_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationAppError) as exc_info:
        load_chip_catalog(tmp_path / "missing.json")

    assert exc_info.value.code == "chips_file_unreadable"
    assert exc_info.value.http_status == 500


def test_invalid_json_is_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "chips.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationAppError) as exc_info:
        load_chip_catalog(path)

    assert exc_info.value.code == "chips_file_invalid_json"
    assert "line 1" in exc_info.value.details["hint"]


def test_top_level_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "chips.json"
    path.write_text(json.dumps(["gNB-mmWave"]), encoding="utf-8")

    with pytest.raises(ConfigurationAppError) as exc_info:
        load_chip_catalog(path)

    assert exc_info.value.code == "chips_file_not_object"
