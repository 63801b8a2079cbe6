"""
Specialized queryable collection for joined Airport records.

Provides the same predicates as the search service as chainable methods,
so that queries can be composed with the generic collection operations.
"""

from typing import List, Optional, Union, TYPE_CHECKING

from .queryable_collection import QueryableCollection
from .navpoint import NavPoint, calculate_distance
from .shards import AirportType
from .validation import ValidationError

if TYPE_CHECKING:
    from .airport import Airport


def _equals_ignore_case(value: Optional[str], expected: str) -> bool:
    return bool(value) and value.lower() == expected.lower()


class AirportCollection(QueryableCollection['Airport']):
    """
    Collection of airports with domain-specific filters.

    Examples:
        # Large Chinese airports with scheduled service
        airports.by_country("CN").by_type("large_airport").with_scheduled_service()

        # Airports with an IATA code within 50km of Beijing
        airports.within_radius(39.9, 116.4, 50).with_iata_code().all()
    """

    def by_country(self, country_code: str) -> 'AirportCollection':
        """
        Filter airports by ISO country code (case insensitive).

        Args:
            country_code: ISO country code (e.g., "CN", "FR")
        """
        return AirportCollection([
            a for a in self._items
            if _equals_ignore_case(a.iso_country, country_code)
        ])

    def by_countries(self, country_codes: List[str]) -> 'AirportCollection':
        """Filter airports in any of the given ISO country codes."""
        country_set = {code.lower() for code in country_codes}
        return AirportCollection([
            a for a in self._items
            if a.iso_country and a.iso_country.lower() in country_set
        ])

    def by_continent(self, continent: str) -> 'AirportCollection':
        """
        Filter airports by continent code (case insensitive).

        Args:
            continent: Continent code (e.g., "EU", "NA", "AS")
        """
        return AirportCollection([
            a for a in self._items
            if _equals_ignore_case(a.continent, continent)
        ])

    def in_region(self, region_code: str) -> 'AirportCollection':
        """
        Filter airports by ISO region code.

        Args:
            region_code: ISO region code (e.g., "CN-11", "GB-ENG")
        """
        return AirportCollection([
            a for a in self._items
            if _equals_ignore_case(a.iso_region, region_code)
        ])

    def by_type(self, airport_type: Union[str, AirportType]) -> 'AirportCollection':
        """
        Filter airports by type.

        Raises:
            ValidationError: if the type is not a known airport type
        """
        try:
            wanted = AirportType(airport_type)
        except ValueError:
            raise ValidationError('type', 'Unknown airport type', airport_type) from None
        return AirportCollection([a for a in self._items if a.type == wanted])

    def with_iata_code(self, present: bool = True) -> 'AirportCollection':
        """Filter to airports with (or, with present=False, without) a non-blank IATA code."""
        return AirportCollection([a for a in self._items if a.has_iata_code == present])

    def with_scheduled_service(self, present: bool = True) -> 'AirportCollection':
        """Filter to airports with (or without) scheduled airline service."""
        return AirportCollection([a for a in self._items if a.has_scheduled_service == present])

    def with_coordinates(self) -> 'AirportCollection':
        return AirportCollection([
            a for a in self._items
            if a.latitude_deg is not None and a.longitude_deg is not None
        ])

    def within_radius(self, lat: float, lon: float, radius_km: float) -> 'AirportCollection':
        """
        Filter to airports within radius_km of a point (boundary included).

        Raises:
            ValidationError: if latitude, longitude or radius is out of range
        """
        center = NavPoint(lat, lon)
        if not radius_km > 0:
            raise ValidationError("radius_km", "Radius must be greater than 0", radius_km)
        return AirportCollection([
            a for a in self.with_coordinates()
            if calculate_distance(center.latitude, center.longitude, a.latitude_deg, a.longitude_deg) <= radius_km
        ])

    def nearest_to(self, lat: float, lon: float) -> 'AirportCollection':
        """Sort airports with coordinates by distance to a point, closest first."""
        center = NavPoint(lat, lon)
        return self.with_coordinates().order_by(
            lambda a: calculate_distance(center.latitude, center.longitude, a.latitude_deg, a.longitude_deg)
        )

    def group_by_country(self) -> dict:
        """Group airports by country, 'unknown' when the region is missing."""
        return self.group_by(lambda a: a.iso_country or 'unknown')

    def group_by_continent(self) -> dict:
        return self.group_by(lambda a: a.continent or 'unknown')

    def group_by_type(self) -> dict:
        return self.group_by(lambda a: a.type.value)
