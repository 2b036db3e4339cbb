"""Ordered bounding-box rule tables for country and region detection.

Every table is scanned top to bottom and the first box containing the point
wins, so the order of declaration is part of the data. Country boxes overlap
heavily (Guatemala sits inside the México box); the smaller Central American
boxes are therefore declared first.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def __post_init__(self) -> None:
        if self.min_lat > self.max_lat:
            raise ValueError(f"min_lat {self.min_lat} exceeds max_lat {self.max_lat}")
        if self.min_lng > self.max_lng:
            raise ValueError(f"min_lng {self.min_lng} exceeds max_lng {self.max_lng}")

    def contains(self, lat: float, lng: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


@dataclass(frozen=True)
class RegionRule:
    label: str
    box: BoundingBox


@dataclass(frozen=True)
class RegionRuleSet:
    rules: tuple[RegionRule, ...]
    default_label: str


def _rule(label: str, min_lat: float, max_lat: float, min_lng: float, max_lng: float) -> RegionRule:
    return RegionRule(label, BoundingBox(min_lat, max_lat, min_lng, max_lng))


UNKNOWN_REGION_LABEL = "Región detectada"

COUNTRY_RULES: tuple[RegionRule, ...] = (
    _rule("Guatemala", 13.0, 17.8, -92.5, -88.0),
    _rule("El Salvador", 12.0, 14.5, -90.5, -87.0),
    _rule("Honduras", 12.5, 16.5, -89.5, -83.0),
    _rule("Costa Rica", 8.0, 11.5, -86.0, -82.5),
    _rule("Panamá", 7.0, 9.7, -83.0, -77.0),
    _rule("Colombia", -4.5, 13.5, -82.0, -66.0),
    _rule("México", 14.5, 32.7, -118.4, -86.7),
    _rule("Estados Unidos", 24.0, 50.0, -130.0, -65.0),
    _rule("Canadá", 42.0, 70.0, -140.0, -52.0),
)

SUPPORTED_COUNTRIES: tuple[str, ...] = tuple(rule.label for rule in COUNTRY_RULES)

# Stored rows and older clients spell some countries without accents.
COUNTRY_ALIASES: dict[str, str] = {
    "Mexico": "México",
    "Panama": "Panamá",
    "Canada": "Canadá",
}

_GUATEMALA = RegionRuleSet(
    rules=(
        _rule("Guatemala (Capital)", 14.5, 14.7, -90.7, -90.4),
        _rule("Petén", 16.0, 17.8, -92.3, -88.3),
        _rule("Alta Verapaz", 15.5, 16.0, -91.5, -90.5),
        _rule("Baja Verapaz", 15.0, 15.8, -90.8, -90.0),
        _rule("Quiché", 14.8, 15.8, -92.0, -91.0),
        _rule("Chimaltenango", 14.2, 15.0, -91.8, -90.8),
        _rule("Sacatepéquez", 14.3, 14.8, -91.0, -90.5),
        _rule("Jalapa", 13.8, 14.5, -90.5, -89.5),
        _rule("Jutiapa", 13.5, 14.3, -90.2, -89.2),
        _rule("Izabal", 15.2, 15.9, -89.5, -88.1),
        _rule("Zacapa", 14.6, 15.2, -90.0, -89.0),
        _rule("El Progreso", 14.8, 15.1, -90.2, -89.8),
        _rule("Escuintla", 13.8, 14.5, -91.3, -90.3),
        _rule("Santa Rosa", 13.8, 14.3, -90.8, -89.8),
        _rule("Sololá", 14.4, 14.9, -91.5, -90.8),
        _rule("Retalhuleu", 14.2, 14.7, -92.0, -91.2),
        _rule("San Marcos", 14.8, 15.3, -92.3, -91.6),
        _rule("Huehuetenango", 15.2, 16.0, -92.2, -91.2),
        _rule("Quetzaltenango", 14.6, 15.0, -91.8, -91.2),
        _rule("Totonicapán", 14.7, 15.1, -91.6, -91.1),
        _rule("Suchitepéquez", 14.2, 14.6, -91.7, -91.0),
    ),
    default_label="Guatemala (Capital)",
)

_MEXICO = RegionRuleSet(
    rules=(
        _rule("Aguascalientes", 21.7, 22.3, -102.5, -102.0),
        _rule("Baja California", 32.0, 32.7, -117.1, -114.1),
        _rule("Baja California Sur", 23.0, 28.0, -115.0, -109.4),
        _rule("Campeche", 17.8, 20.7, -92.5, -89.1),
        _rule("Chiapas", 14.5, 17.5, -94.5, -90.2),
        _rule("Chihuahua", 25.5, 31.8, -109.1, -103.2),
        _rule("Ciudad de México", 19.1, 19.6, -99.4, -98.9),
        _rule("Coahuila", 25.0, 29.9, -105.7, -99.8),
        _rule("Colima", 18.6, 19.6, -104.8, -103.5),
        _rule("Durango", 22.3, 26.9, -107.1, -102.5),
        _rule("Estado de México", 18.9, 20.4, -100.5, -98.6),
        _rule("Guanajuato", 19.9, 21.7, -102.1, -99.6),
        _rule("Guerrero", 16.6, 18.9, -102.2, -98.0),
        _rule("Hidalgo", 19.6, 21.4, -99.9, -97.9),
        _rule("Jalisco", 18.9, 22.8, -105.7, -101.5),
        _rule("Michoacán", 17.9, 20.4, -103.7, -100.0),
        _rule("Morelos", 18.3, 19.1, -99.6, -98.6),
        _rule("Nayarit", 20.6, 23.1, -105.8, -103.7),
        _rule("Nuevo León", 23.1, 27.8, -101.6, -98.8),
        _rule("Oaxaca", 15.6, 18.7, -98.8, -93.5),
        _rule("Puebla", 17.5, 20.9, -99.0, -96.4),
        _rule("Querétaro", 20.1, 21.7, -100.9, -99.0),
        _rule("Quintana Roo", 17.8, 21.6, -89.2, -86.7),
        _rule("San Luis Potosí", 21.1, 24.5, -102.0, -98.3),
        _rule("Sinaloa", 22.5, 26.9, -109.5, -105.4),
        _rule("Sonora", 26.0, 32.5, -115.0, -108.4),
        _rule("Tabasco", 17.3, 18.7, -94.8, -91.4),
        _rule("Tamaulipas", 22.2, 27.7, -100.2, -97.1),
        _rule("Tlaxcala", 19.1, 19.9, -98.8, -97.7),
        _rule("Veracruz", 17.1, 22.5, -98.6, -93.6),
        _rule("Yucatán", 19.5, 21.6, -90.5, -87.5),
        _rule("Zacatecas", 21.0, 25.1, -104.4, -101.0),
    ),
    default_label="Otra región",
)

_EL_SALVADOR = RegionRuleSet(
    rules=(
        _rule("San Salvador", 13.5, 14.5, -89.5, -88.8),
        _rule("Santa Ana", 13.8, 14.2, -89.8, -89.2),
        _rule("La Libertad", 13.0, 13.8, -89.5, -88.8),
    ),
    default_label="El Salvador",
)

_HONDURAS = RegionRuleSet(
    rules=(
        _rule("Francisco Morazán", 14.0, 14.3, -87.5, -86.8),
        _rule("Cortés", 15.3, 15.8, -88.2, -87.5),
        _rule("Atlántida", 15.0, 15.5, -87.8, -87.0),
    ),
    default_label="Honduras",
)

_COSTA_RICA = RegionRuleSet(
    rules=(
        _rule("Cartago", 9.6, 10.1, -84.2, -83.7),
        _rule("Guanacaste", 10.0, 11.2, -86.2, -85.0),
        _rule("Heredia", 9.9, 10.3, -84.4, -83.9),
        _rule("Limón", 9.0, 10.8, -83.8, -82.5),
        _rule("Puntarenas", 8.4, 11.2, -85.4, -82.8),
        _rule("San José", 9.5, 10.2, -84.4, -83.7),
    ),
    default_label="Costa Rica",
)

# Nicaragua has no country box; these rules apply to rows stored with that country.
_NICARAGUA = RegionRuleSet(
    rules=(
        _rule("Boaco", 12.2, 12.8, -85.8, -85.2),
        _rule("Carazo", 11.4, 12.0, -86.8, -86.2),
        _rule("Chinandega", 12.4, 13.4, -87.8, -86.8),
        _rule("Chontales", 11.8, 12.6, -85.6, -84.8),
        _rule("Costa Caribe Norte", 13.5, 15.1, -85.0, -83.2),
        _rule("Costa Caribe Sur", 11.0, 13.5, -85.0, -82.8),
        _rule("Estelí", 13.0, 13.6, -86.8, -86.0),
        _rule("Granada", 11.7, 12.1, -86.2, -85.8),
        _rule("Jinotega", 13.0, 13.8, -86.4, -85.4),
        _rule("León", 12.2, 12.8, -87.2, -86.4),
        _rule("Madriz", 13.3, 13.7, -86.8, -86.2),
        _rule("Managua", 11.8, 12.4, -86.6, -85.8),
        _rule("Masaya", 11.8, 12.2, -86.4, -85.8),
        _rule("Matagalpa", 12.8, 13.6, -86.2, -85.2),
        _rule("Nueva Segovia", 13.6, 14.0, -86.8, -86.0),
        _rule("Río San Juan", 10.8, 11.6, -85.4, -83.8),
        _rule("Rivas", 11.0, 11.8, -86.0, -85.4),
    ),
    default_label="Nicaragua",
)

REGION_RULESETS: dict[str, RegionRuleSet] = {
    "Guatemala": _GUATEMALA,
    "México": _MEXICO,
    "El Salvador": _EL_SALVADOR,
    "Honduras": _HONDURAS,
    "Costa Rica": _COSTA_RICA,
    "Nicaragua": _NICARAGUA,
}

_CATALOG_EXTRAS: dict[str, tuple[str, ...]] = {
    "Guatemala": ("Chiquimula",),
    "El Salvador": (
        "Ahuachapán",
        "Cabañas",
        "Chalatenango",
        "Cuscatlán",
        "La Paz",
        "La Unión",
        "Morazán",
        "San Miguel",
        "San Vicente",
        "Sonsonate",
        "Usulután",
    ),
    "Honduras": (
        "Choluteca",
        "Colón",
        "Comayagua",
        "Copán",
        "El Paraíso",
        "Gracias a Dios",
        "Intibucá",
        "Islas de la Bahía",
        "La Paz",
        "Lempira",
        "Ocotepeque",
        "Olancho",
        "Santa Bárbara",
        "Valle",
        "Yoro",
    ),
}


def _build_catalog() -> dict[str, tuple[str, ...]]:
    catalog: dict[str, tuple[str, ...]] = {}
    for country, ruleset in REGION_RULESETS.items():
        names = {rule.label for rule in ruleset.rules}
        names.update(_CATALOG_EXTRAS.get(country, ()))
        catalog[country] = tuple(sorted(names))
    return catalog


# Every administrative region the dashboard knows about, per country.
REGION_CATALOG: dict[str, tuple[str, ...]] = _build_catalog()
