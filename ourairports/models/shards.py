"""
Row types for the five airport shards.

The OurAirports dataset is split by concern into five tables that share the
integer ``id`` of the airport. Each row type knows how to parse itself from
the JSON object stored in its shard file.
"""

import enum
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping, Optional


class AirportType(str, enum.Enum):
    SMALL_AIRPORT = "small_airport"
    MEDIUM_AIRPORT = "medium_airport"
    LARGE_AIRPORT = "large_airport"
    HELIPORT = "heliport"
    SEAPLANE_BASE = "seaplane_base"
    CLOSED = "closed"
    BALLOONPORT = "balloonport"


SCHEDULED_SERVICE_VALUES = ("yes", "no")


def _parse_id(data: Mapping[str, Any]) -> int:
    value = data.get("id")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"'id' must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"'id' must be non-negative, got {value}")
    return value


def _required_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string or null, got {value!r}")
    return value


def _required_float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    return float(value)


def _optional_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    if data.get(key) is None:
        return None
    return _required_float(data, key)


@dataclass(frozen=True)
class BasicInfo:
    """Primary identity and display record of an airport."""

    id: int
    name: str
    type: AirportType
    iata_code: Optional[str] = None
    ident: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'BasicInfo':
        raw_type = _required_str(data, "type")
        try:
            airport_type = AirportType(raw_type)
        except ValueError:
            raise ValueError(f"'type' is not a known airport type: {raw_type!r}") from None
        return cls(
            id=_parse_id(data),
            name=_required_str(data, "name"),
            type=airport_type,
            iata_code=_optional_str(data, "iata_code"),
            ident=_optional_str(data, "ident"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result["type"] = self.type.value
        return result


@dataclass(frozen=True)
class Codes:
    """Airport codes. The ICAO code lives in ``ident``."""

    id: int
    ident: str
    gps_code: Optional[str] = None
    iata_code: Optional[str] = None
    local_code: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Codes':
        return cls(
            id=_parse_id(data),
            ident=_required_str(data, "ident"),
            gps_code=_optional_str(data, "gps_code"),
            iata_code=_optional_str(data, "iata_code"),
            local_code=_optional_str(data, "local_code"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Coordinates:
    """Position of an airport. Latitude and longitude are always both present."""

    id: int
    latitude_deg: float
    longitude_deg: float
    elevation_ft: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Coordinates':
        return cls(
            id=_parse_id(data),
            latitude_deg=_required_float(data, "latitude_deg"),
            longitude_deg=_required_float(data, "longitude_deg"),
            elevation_ft=_optional_float(data, "elevation_ft"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Region:
    id: int
    iso_country: str
    iso_region: str
    continent: Optional[str] = None
    municipality: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Region':
        return cls(
            id=_parse_id(data),
            iso_country=_required_str(data, "iso_country"),
            iso_region=_required_str(data, "iso_region"),
            continent=_optional_str(data, "continent"),
            municipality=_optional_str(data, "municipality"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class References:
    """External links, keywords and the scheduled service flag."""

    id: int
    home_link: Optional[str] = None
    wikipedia_link: Optional[str] = None
    keywords: Optional[str] = None
    scheduled_service: str = "no"

    @property
    def has_scheduled_service(self) -> bool:
        return self.scheduled_service == "yes"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'References':
        scheduled_service = data.get("scheduled_service")
        if scheduled_service is None:
            scheduled_service = "no"
        if scheduled_service not in SCHEDULED_SERVICE_VALUES:
            raise ValueError(f"'scheduled_service' must be 'yes' or 'no', got {scheduled_service!r}")
        return cls(
            id=_parse_id(data),
            home_link=_optional_str(data, "home_link"),
            wikipedia_link=_optional_str(data, "wikipedia_link"),
            keywords=_optional_str(data, "keywords"),
            scheduled_service=scheduled_service,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Shard name -> row type, in the order the shards are loaded
SHARD_TYPES = {
    "basic_info": BasicInfo,
    "codes": Codes,
    "coordinates": Coordinates,
    "region": Region,
    "references": References,
}

# Fields written to each shard by the CSV ingestion, besides 'id'
SHARD_FIELDS = {
    "basic_info": ["name", "type", "iata_code"],
    "codes": ["gps_code", "iata_code", "local_code", "ident"],
    "coordinates": ["latitude_deg", "longitude_deg", "elevation_ft"],
    "region": ["continent", "iso_country", "iso_region", "municipality"],
    "references": ["home_link", "wikipedia_link", "keywords", "scheduled_service"],
}
