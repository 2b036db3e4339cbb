import pytest

from vaketracker.common.models import LocatedRecord
from vaketracker.geo.classifier import (
    RegionClassifier,
    canonical_country,
    classify_country,
    classify_region,
    resolve_country,
    resolve_region,
)
from vaketracker.geo.rules import COUNTRY_RULES, BoundingBox, RegionRule, RegionRuleSet


def test_classify_country_first_match_wins_on_overlap():
    # Inside both the Guatemala and México boxes.
    assert classify_country(15.0, -90.0) == "Guatemala"
    assert classify_country(14.6, -90.5) == "Guatemala"


def test_classify_country_across_the_table():
    assert classify_country(19.4, -99.1) == "México"
    assert classify_country(9.9, -84.1) == "Costa Rica"
    assert classify_country(8.9, -79.5) == "Panamá"
    assert classify_country(4.6, -74.1) == "Colombia"
    assert classify_country(40.7, -74.0) == "Estados Unidos"
    assert classify_country(53.5, -113.5) == "Canadá"


def test_classify_country_returns_empty_when_unmatched():
    assert classify_country(0.0, 0.0) == ""
    assert classify_country(-33.9, 151.2) == ""


def test_classify_region_guatemala_departments():
    assert classify_region(14.6, -90.5, "Guatemala") == "Guatemala (Capital)"
    assert classify_region(15.6, -91.0, "Guatemala") == "Alta Verapaz"
    assert classify_region(16.9, -89.9, "Guatemala") == "Petén"


def test_classify_region_mexico_states_and_alias():
    assert classify_region(19.4, -99.1, "México") == "Ciudad de México"
    assert classify_region(19.4, -99.1, "Mexico") == "Ciudad de México"
    assert classify_region(0.0, 0.0, "México") == "Otra región"


def test_classify_region_smaller_tables():
    assert classify_region(13.7, -89.2, "El Salvador") == "San Salvador"
    assert classify_region(14.1, -87.2, "Honduras") == "Francisco Morazán"
    assert classify_region(10.5, -85.5, "Costa Rica") == "Guanacaste"


def test_classify_region_fallbacks_are_never_empty():
    assert classify_region(0.0, 0.0, "Guatemala") == "Guatemala (Capital)"
    assert classify_region(0.0, 0.0, "El Salvador") == "El Salvador"
    assert classify_region(0.0, 0.0, "Honduras") == "Honduras"
    assert classify_region(8.9, -79.5, "Panamá") == "Panamá"
    assert classify_region(0.0, 0.0, "Brasil") == "Brasil"
    assert classify_region(0.0, 0.0, "") == "Región detectada"
    assert classify_region(0.0, 0.0, None) == "Región detectada"


def test_canonical_country_applies_aliases_and_trims():
    assert canonical_country("Mexico") == "México"
    assert canonical_country(" Panama ") == "Panamá"
    assert canonical_country("Guatemala") == "Guatemala"
    assert canonical_country(None) == ""


def test_resolve_prefers_stored_labels():
    stored = LocatedRecord(latitude=0.0, longitude=0.0, country="Mexico", region="Jalisco")
    assert resolve_country(stored) == "México"
    assert resolve_region(stored, "México") == "Jalisco"

    bare = LocatedRecord(latitude=15.6, longitude=-91.0)
    assert resolve_country(bare) == "Guatemala"
    assert resolve_region(bare, "Guatemala") == "Alta Verapaz"


def test_custom_tables_are_honoured():
    box = BoundingBox(0.0, 1.0, 0.0, 1.0)
    classifier = RegionClassifier(
        country_rules=[RegionRule("Atlantis", box)],
        region_rulesets={"Atlantis": RegionRuleSet(rules=(RegionRule("Core", box),), default_label="Atlantis")},
        aliases={},
    )
    assert classifier.classify_country(0.5, 0.5) == "Atlantis"
    assert classifier.classify_region(0.5, 0.5, "Atlantis") == "Core"
    assert classifier.classify_region(5.0, 5.0, "Atlantis") == "Atlantis"
    assert classifier.classify_country(14.6, -90.5) == ""


def test_classification_is_deterministic():
    first = [classify_region(lat / 10, -90.5, "Guatemala") for lat in range(130, 180)]
    second = [classify_region(lat / 10, -90.5, "Guatemala") for lat in range(130, 180)]
    assert first == second


def _grid(box, steps=12):
    for i in range(steps + 1):
        lat = min(box.max_lat, box.min_lat + (box.max_lat - box.min_lat) * i / steps)
        for j in range(steps + 1):
            yield lat, min(box.max_lng, box.min_lng + (box.max_lng - box.min_lng) * j / steps)


@pytest.mark.parametrize("rule", COUNTRY_RULES, ids=lambda rule: rule.label)
def test_every_point_in_a_country_box_gets_a_region(rule):
    for lat, lng in _grid(rule.box):
        assert classify_region(lat, lng, rule.label), (lat, lng)
        detected = classify_country(lat, lng)
        assert detected
        assert classify_region(lat, lng, detected), (lat, lng, detected)
