"""
Query engine over the five airport shards.

All queries are answered by scanning the relevant shard and joining back to
``basic_info`` by airport id. Results always come back in ``basic_info``
table order. The radius search is a full linear scan of the coordinates
shard; the dataset is a few tens of thousands of rows so no spatial index
is kept.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from .airport import AirportFilter
from .airport_tables import AirportTables
from .navpoint import NavPoint, calculate_distance
from .shards import BasicInfo
from .validation import ValidationError

logger = logging.getLogger(__name__)

FilterLike = Union[AirportFilter, Mapping[str, Any], None]


def _same_code(value: Optional[str], code: str) -> bool:
    return bool(value) and value.lower() == code.lower()


class SearchService:
    """
    Answers point, categorical and radius queries over AirportTables.

    The service keeps a reference to the tables and never modifies them, so
    one instance can serve concurrent callers.
    """

    def __init__(self, tables: AirportTables):
        self.tables = tables

    def find_by_iata_code(self, iata_code: str) -> Optional[BasicInfo]:
        """
        Find airport by IATA code (case insensitive).

        Args:
            iata_code: IATA airport code (e.g., 'PEK')

        Returns:
            The BasicInfo of the first matching airport in table order, or None
        """
        code = next((c for c in self.tables.codes if _same_code(c.iata_code, iata_code)), None)
        if code is None:
            return None
        return self.tables.basic_info_for(code.id)

    def find_by_icao_code(self, icao_code: str) -> Optional[BasicInfo]:
        """
        Find airport by ICAO code (case insensitive).

        Args:
            icao_code: ICAO airport code (e.g., 'ZBAA'), stored as ``ident``

        Returns:
            The BasicInfo of the first matching airport in table order, or None
        """
        code = next((c for c in self.tables.codes if _same_code(c.ident, icao_code)), None)
        if code is None:
            return None
        return self.tables.basic_info_for(code.id)

    def find_by_country(self, country_code: str) -> List[BasicInfo]:
        """
        Find airports by ISO country code (case insensitive).

        Args:
            country_code: ISO country code (e.g., 'CN')
        """
        region_ids = {
            r.id for r in self.tables.region
            if _same_code(r.iso_country, country_code)
        }
        return [info for info in self.tables.basic_info if info.id in region_ids]

    def search_airports(self, airport_filter: FilterLike = None) -> List[BasicInfo]:
        """
        Search airports matching every predicate of a filter.

        Args:
            airport_filter: AirportFilter, or a dictionary with the same keys.
                An empty or missing filter returns every airport.

        Returns:
            Matching BasicInfo rows in table order

        Raises:
            ValidationError: if the filter has unknown keys or bad values.
                An unknown airport type or an unrecognised key is rejected
                instead of silently matching nothing (or being ignored), so
                a misspelt filter never passes for an empty result.
        """
        if airport_filter is None:
            return list(self.tables.basic_info)
        if not isinstance(airport_filter, AirportFilter):
            airport_filter = AirportFilter.from_mapping(airport_filter)
        if airport_filter.is_empty:
            return list(self.tables.basic_info)

        return [info for info in self.tables.basic_info if self._matches(info, airport_filter)]

    def _matches(self, info: BasicInfo, airport_filter: AirportFilter) -> bool:
        if airport_filter.type is not None and info.type != airport_filter.type:
            return False

        if airport_filter.country is not None or airport_filter.continent is not None:
            region = self.tables.region_for(info.id)
            if region is None:
                return False
            if airport_filter.country is not None and not _same_code(region.iso_country, airport_filter.country):
                return False
            if airport_filter.continent is not None and not _same_code(region.continent, airport_filter.continent):
                return False

        if airport_filter.has_iata_code is not None:
            codes = self.tables.codes_for(info.id)
            if codes is None:
                return False
            has_iata = bool(codes.iata_code and codes.iata_code.strip())
            if has_iata != airport_filter.has_iata_code:
                return False

        if airport_filter.has_scheduled_service is not None:
            references = self.tables.references_for(info.id)
            if references is None:
                return False
            if references.has_scheduled_service != airport_filter.has_scheduled_service:
                return False

        return True

    def find_airports_in_radius(self, lat: float, lon: float, radius_km: float) -> List[BasicInfo]:
        """
        Find airports within a great circle radius of a point.

        Args:
            lat: Latitude in degrees, -90 to 90
            lon: Longitude in degrees, -180 to 180
            radius_km: Radius in kilometers, must be positive. Airports exactly
                on the boundary are included.

        Returns:
            Matching BasicInfo rows in table order

        Raises:
            ValidationError: if latitude, longitude or radius is out of range
        """
        center = NavPoint(lat, lon)
        if not radius_km > 0:
            raise ValidationError("radius_km", "Radius must be greater than 0", radius_km)

        matching_ids = set()
        for coord in self.tables.coordinates:
            if coord.latitude_deg is None or coord.longitude_deg is None:
                continue
            distance = calculate_distance(center.latitude, center.longitude, coord.latitude_deg, coord.longitude_deg)
            if distance <= radius_km:
                matching_ids.add(coord.id)

        logger.debug(f"{len(matching_ids)} airports within {radius_km}km of {center}")
        return [info for info in self.tables.basic_info if info.id in matching_ids]
