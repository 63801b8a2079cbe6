from dataclasses import dataclass, fields
from typing import Optional, Any, Dict, Mapping

from .shards import AirportType, BasicInfo, Codes, Coordinates, Region, References
from .navpoint import NavPoint
from .validation import ValidationError


@dataclass(frozen=True)
class Airport:
    """
    Data class joining the five shards of one airport into a single record.

    Only ``id``, ``name`` and ``type`` are guaranteed; every other attribute
    is None when the corresponding shard has no row for the airport.
    """

    id: int
    name: str
    type: AirportType
    ident: Optional[str] = None  # ICAO code
    iata_code: Optional[str] = None
    gps_code: Optional[str] = None
    local_code: Optional[str] = None
    latitude_deg: Optional[float] = None
    longitude_deg: Optional[float] = None
    elevation_ft: Optional[float] = None
    continent: Optional[str] = None
    iso_country: Optional[str] = None
    iso_region: Optional[str] = None
    municipality: Optional[str] = None
    home_link: Optional[str] = None
    wikipedia_link: Optional[str] = None
    keywords: Optional[str] = None
    scheduled_service: Optional[str] = None

    @classmethod
    def from_rows(
        cls,
        info: BasicInfo,
        codes: Optional[Codes] = None,
        coordinates: Optional[Coordinates] = None,
        region: Optional[Region] = None,
        references: Optional[References] = None,
    ) -> 'Airport':
        """Join the rows of one airport; missing shards leave their fields unset."""
        values: Dict[str, Any] = {
            'id': info.id,
            'name': info.name,
            'type': info.type,
            'ident': info.ident,
            'iata_code': info.iata_code,
        }
        for row in (codes, coordinates, region, references):
            if row is None:
                continue
            for key, value in row.to_dict().items():
                # codes carry the authoritative ident/iata_code
                if key != 'id':
                    values[key] = value
        return cls(**values)

    @property
    def navpoint(self) -> Optional[NavPoint]:
        """Get NavPoint representation of this airport."""
        if self.latitude_deg is None or self.longitude_deg is None:
            return None
        return NavPoint(
            latitude=self.latitude_deg,
            longitude=self.longitude_deg,
            name=self.ident,
        )

    @property
    def has_iata_code(self) -> bool:
        return bool(self.iata_code and self.iata_code.strip())

    @property
    def has_scheduled_service(self) -> bool:
        return self.scheduled_service == 'yes'

    def to_dict(self) -> Dict[str, Any]:
        result = {f.name: getattr(self, f.name) for f in fields(self)}
        result['type'] = self.type.value
        return result


@dataclass(frozen=True)
class AirportFilter:
    """
    Conjunction of optional search predicates.

    A predicate left as None is not applied, so ``AirportFilter()`` matches
    every airport.
    """

    type: Optional[AirportType] = None
    country: Optional[str] = None
    continent: Optional[str] = None
    has_iata_code: Optional[bool] = None
    has_scheduled_service: Optional[bool] = None

    ALIASES = {
        'hasIataCode': 'has_iata_code',
        'hasScheduledService': 'has_scheduled_service',
    }

    def __post_init__(self):
        # An empty string predicate is treated as not set
        for name in ('type', 'country', 'continent'):
            if getattr(self, name) == '':
                object.__setattr__(self, name, None)
        if self.type is not None:
            try:
                object.__setattr__(self, 'type', AirportType(self.type))
            except ValueError:
                raise ValidationError('type', 'Unknown airport type', self.type) from None
        for name in ('country', 'continent'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValidationError(name, 'Must be a string', value)
        for name in ('has_iata_code', 'has_scheduled_service'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, bool):
                raise ValidationError(name, 'Must be a boolean', value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'AirportFilter':
        """
        Build a filter from a dictionary.

        Accepts both snake_case keys and the camelCase ``hasIataCode`` /
        ``hasScheduledService`` spellings.

        Raises:
            ValidationError: if a key is not a known predicate
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = cls.ALIASES.get(key, key)
            if name not in known:
                raise ValidationError('filter', 'Unknown filter key', key)
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))
