from pathlib import Path

import pytest

from search_index.indexing.normalizer import (
    normalize_array,
    normalize_record,
    parse_int_safe,
    to_lower_str,
    to_str,
)
from search_index.schemas import SourceRecord

from conftest import FULL_PROJECT


def _record(data, name="some-project.json"):
    return SourceRecord(path=Path("/data/projects") / name, data=data)


@pytest.mark.parametrize("value, expected", [
    (None, None),
    ("", None),
    ("   ", None),
    (0, 0),
    ("0", 0),
    (42, 42),
    ("  42 ", 42),
    ("AED 1,250,000", 1250000),
    ("-5", -5),
    ("2,500 sqft", 2500),
    (3.0, 3),
    ("abc", None),
    ("-", None),
    ("--5", None),
    ("12-3", 12),
    (True, None),
    ("٣", None),  # non-ASCII digits are stripped
    ("9" * 5000, None),  # beyond the int-string digit limit
])
def test_parse_int_safe(value, expected):
    assert parse_int_safe(value) == expected


def test_to_str_helpers():
    assert to_str(None) == ""
    assert to_str("  x ") == "x"
    assert to_str(12) == "12"
    assert to_lower_str(" Dubai Marina ") == "dubai marina"
    assert to_str(True) == "true"
    assert to_str(3.0) == "3"
    assert to_str(2.5) == "2.5"


def test_normalize_array():
    assert normalize_array(["Villa", " TOWNHOUSE ", "", None, "villa"]) == ["villa", "townhouse"]
    assert normalize_array("Villa") == []
    assert normalize_array(None) == []


def test_full_record():
    entry, diags = normalize_record(_record(FULL_PROJECT))

    assert entry.key == "Marina-Vista"
    assert entry.slug == "marina-vista"
    assert entry.emirate == "dubai"
    assert entry.city == "dubai"
    assert entry.area == "dubai marina"
    assert entry.developer == "emaar"
    assert entry.property_types == ["apartment", "penthouse"]
    assert (entry.bedrooms_min, entry.bedrooms_max) == (1, 3)
    assert entry.handover_year == 2027
    assert entry.price_from_aed == 1250000
    assert entry.size_from_sqft == 650
    assert entry.tokens == []
    assert diags == []


def test_missing_metadata_block():
    entry, diags = normalize_record(_record({}, name="palm-residences.json"))

    assert entry.slug == "palm-residences"
    assert entry.key == "palm-residences"
    for name in ("emirate", "city", "area", "developer"):
        assert getattr(entry, name) == ""
    assert entry.property_types == []
    for name in ("bedrooms_min", "bedrooms_max", "handover_year", "price_from_aed", "size_from_sqft"):
        assert getattr(entry, name) is None

    assert len(diags) == 1
    d = diags[0]
    assert d.level == "warning"
    assert d.source == "palm-residences.json"
    assert "slug (fallback used)" in d.fields
    assert "project_key (fallback used)" in d.fields
    assert "_search.price_from_aed" in d.fields
    assert "_search.size_from_sqft" not in d.fields


def test_non_object_metadata_is_ignored():
    entry, _ = normalize_record(_record({"slug": "x", "_search": ["dubai"]}))
    assert entry.emirate == ""


def test_key_falls_back_to_slug():
    data = dict(FULL_PROJECT, project_key="   ")
    entry, diags = normalize_record(_record(data))

    assert entry.key == "marina-vista"
    assert len(diags) == 1
    assert diags[0].level == "info"
    assert diags[0].fields == ["project_key (fallback used)"]


def test_missing_size_is_not_reported():
    data = {**FULL_PROJECT, "_search": {**FULL_PROJECT["_search"], "size_from_sqft": None}}
    entry, diags = normalize_record(_record(data))

    assert entry.size_from_sqft is None
    assert diags == []


def test_oversized_number_degrades_to_absent():
    data = {**FULL_PROJECT, "_search": {**FULL_PROJECT["_search"], "price_from_aed": "9" * 5000}}
    entry, diags = normalize_record(_record(data))

    assert entry.price_from_aed is None
    assert "_search.price_from_aed" in diags[0].fields
