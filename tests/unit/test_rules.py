import pytest

from vaketracker.geo.rules import (
    COUNTRY_RULES,
    REGION_CATALOG,
    REGION_RULESETS,
    SUPPORTED_COUNTRIES,
    BoundingBox,
)


def test_bounding_box_rejects_inverted_ranges():
    with pytest.raises(ValueError):
        BoundingBox(min_lat=15.0, max_lat=14.0, min_lng=-91.0, max_lng=-90.0)
    with pytest.raises(ValueError):
        BoundingBox(min_lat=14.0, max_lat=15.0, min_lng=-90.0, max_lng=-91.0)


def test_bounding_box_contains_is_inclusive_on_every_edge():
    box = BoundingBox(14.5, 14.7, -90.7, -90.4)
    assert box.contains(14.5, -90.7)
    assert box.contains(14.7, -90.4)
    assert not box.contains(14.71, -90.5)
    assert not box.contains(14.6, -90.39)


def test_country_rules_keep_central_america_ahead_of_mexico():
    assert SUPPORTED_COUNTRIES == (
        "Guatemala",
        "El Salvador",
        "Honduras",
        "Costa Rica",
        "Panamá",
        "Colombia",
        "México",
        "Estados Unidos",
        "Canadá",
    )
    assert len(COUNTRY_RULES) == 9


def test_rulesets_have_expected_sizes_and_defaults():
    assert len(REGION_RULESETS["Guatemala"].rules) == 21
    assert REGION_RULESETS["Guatemala"].default_label == "Guatemala (Capital)"
    assert len(REGION_RULESETS["México"].rules) == 32
    assert REGION_RULESETS["México"].default_label == "Otra región"
    assert len(REGION_RULESETS["El Salvador"].rules) == 3
    assert len(REGION_RULESETS["Honduras"].rules) == 3


def test_every_label_is_non_empty_and_unique_per_country():
    for country, ruleset in REGION_RULESETS.items():
        labels = [rule.label for rule in ruleset.rules]
        assert all(labels), country
        assert ruleset.default_label
        assert len(labels) == len(set(labels)), country


def test_catalog_extends_rules_with_unmapped_departments():
    assert len(REGION_CATALOG["Guatemala"]) == 22
    assert "Chiquimula" in REGION_CATALOG["Guatemala"]
    assert len(REGION_CATALOG["El Salvador"]) == 14
    assert len(REGION_CATALOG["Honduras"]) == 18
    assert list(REGION_CATALOG["México"]) == sorted(REGION_CATALOG["México"])
