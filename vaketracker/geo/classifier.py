"""Country and region detection from latitude/longitude."""

from __future__ import annotations

from typing import Iterable, Mapping

from vaketracker.common.models import LocatedRecord
from vaketracker.geo.rules import (
    COUNTRY_ALIASES,
    COUNTRY_RULES,
    REGION_RULESETS,
    UNKNOWN_REGION_LABEL,
    RegionRule,
    RegionRuleSet,
)


def _first_match(rules: Iterable[RegionRule], lat: float, lng: float) -> str | None:
    for rule in rules:
        if rule.box.contains(lat, lng):
            return rule.label
    return None


class RegionClassifier:
    """First-match bounding-box classifier over a set of rule tables.

    The default instance uses the tables in ``vaketracker.geo.rules``; tests
    and alternate deployments can pass their own.
    """

    def __init__(
        self,
        country_rules: Iterable[RegionRule] = COUNTRY_RULES,
        region_rulesets: Mapping[str, RegionRuleSet] | None = None,
        aliases: Mapping[str, str] | None = None,
        unknown_label: str = UNKNOWN_REGION_LABEL,
    ) -> None:
        self.country_rules = tuple(country_rules)
        self.region_rulesets = dict(REGION_RULESETS if region_rulesets is None else region_rulesets)
        self.aliases = dict(COUNTRY_ALIASES if aliases is None else aliases)
        self.unknown_label = unknown_label

    def canonical_country(self, name: str | None) -> str:
        if not name:
            return ""
        stripped = name.strip()
        return self.aliases.get(stripped, stripped)

    def classify_country(self, lat: float, lng: float) -> str:
        return _first_match(self.country_rules, lat, lng) or ""

    def classify_region(self, lat: float, lng: float, country: str | None) -> str:
        canonical = self.canonical_country(country)
        ruleset = self.region_rulesets.get(canonical)
        if ruleset is None:
            return canonical or self.unknown_label
        return _first_match(ruleset.rules, lat, lng) or ruleset.default_label

    def resolve_country(self, record: LocatedRecord) -> str:
        if record.country:
            return self.canonical_country(record.country)
        return self.classify_country(record.latitude, record.longitude)

    def resolve_region(self, record: LocatedRecord, country: str) -> str:
        if record.region:
            return record.region
        return self.classify_region(record.latitude, record.longitude, country)


DEFAULT_CLASSIFIER = RegionClassifier()


def canonical_country(name: str | None) -> str:
    return DEFAULT_CLASSIFIER.canonical_country(name)


def classify_country(lat: float, lng: float) -> str:
    """Return the first country whose box contains the point, or ``""``."""
    return DEFAULT_CLASSIFIER.classify_country(lat, lng)


def classify_region(lat: float, lng: float, country: str | None) -> str:
    """Return the region label for a point within ``country``; never empty."""
    return DEFAULT_CLASSIFIER.classify_region(lat, lng, country)


def resolve_country(record: LocatedRecord) -> str:
    return DEFAULT_CLASSIFIER.resolve_country(record)


def resolve_region(record: LocatedRecord, country: str) -> str:
    return DEFAULT_CLASSIFIER.resolve_region(record, country)
