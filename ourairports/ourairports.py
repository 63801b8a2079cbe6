import logging
from pathlib import Path
from typing import List, Optional, Union

from .models.airport import Airport, AirportFilter
from .models.airport_collection import AirportCollection
from .models.airport_tables import AirportTables
from .models.search_service import SearchService, FilterLike
from .models.shards import BasicInfo
from .models.validation import NotInitializedError
from .sources.base import ShardSource
from .sources.cdn import CdnShardSource, DEFAULT_CDN_BASE_URL
from .sources.filesystem import FileShardSource, DEFAULT_DATA_DIR
from .sources.loader import ShardLoader

logger = logging.getLogger(__name__)


class OurAirports:
    """
    Entry point to the airport dataset.

    Nothing is loaded at construction; call ``init()`` once, then query.
    The data source is chosen once, on the first ``init()``:

    1. the ``source`` given to the constructor,
    2. shard files in ``data_dir`` (or in ``./data`` when it holds shards),
    3. the CDN at ``base_url``.

    Example:
        airports = OurAirports(data_dir="data")
        airports.init()
        airports.find_by_iata_code("PEK")
        airports.find_airports_in_radius(40.08, 116.60, 10)
    """

    def __init__(
        self,
        source: Optional[ShardSource] = None,
        data_dir: Optional[Union[str, Path]] = None,
        base_url: str = DEFAULT_CDN_BASE_URL,
        cache_dir: Optional[str] = None,
    ):
        """
        Args:
            source: Explicit shard source, overrides data_dir and base_url
            data_dir: Directory holding the shard files
            base_url: CDN directory used when no local shards are found
            cache_dir: Directory caching CDN downloads, None to disable
        """
        self._source = source
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.base_url = base_url
        self.cache_dir = cache_dir

        self._tables: Optional[AirportTables] = None
        self._search_service: Optional[SearchService] = None
        self._airports: Optional[AirportCollection] = None

    @classmethod
    def from_tables(cls, tables: AirportTables) -> 'OurAirports':
        """Create an initialized instance over already loaded tables."""
        instance = cls()
        instance._set_tables(tables)
        return instance

    def _select_source(self) -> ShardSource:
        if self._source is not None:
            return self._source
        if self.data_dir is not None:
            return FileShardSource(self.data_dir)
        if FileShardSource.has_shards(DEFAULT_DATA_DIR):
            return FileShardSource(DEFAULT_DATA_DIR)
        return CdnShardSource(self.base_url, cache_dir=self.cache_dir)

    def _set_tables(self, tables: AirportTables) -> None:
        self._tables = tables
        self._search_service = SearchService(tables)
        self._airports = None

    def init(self) -> None:
        """
        Load the dataset.

        Calling init() on an initialized instance does nothing.

        Raises:
            ShardLoadError: if the shards cannot be loaded
        """
        if self.is_initialized:
            return

        source = self._select_source()
        self._source = source
        logger.info(f"Loading airport data from {source!r}")
        try:
            tables = ShardLoader(source).load_tables()
        except Exception as e:
            logger.error(f"Failed to load airport data: {e}")
            raise
        self._set_tables(tables)
        logger.info(f"Loaded {len(tables)} airports")

    initialize = init

    def _ensure_initialized(self) -> SearchService:
        if self._search_service is None:
            raise NotInitializedError("OurAirports is not initialized. Please call init() first.")
        return self._search_service

    def find_by_iata_code(self, iata_code: str) -> Optional[BasicInfo]:
        """
        Find airport by IATA code.

        Args:
            iata_code: IATA airport code (e.g., 'PEK')
        """
        return self._ensure_initialized().find_by_iata_code(iata_code)

    def find_by_icao_code(self, icao_code: str) -> Optional[BasicInfo]:
        """
        Find airport by ICAO code.

        Args:
            icao_code: ICAO airport code (e.g., 'ZBAA')
        """
        return self._ensure_initialized().find_by_icao_code(icao_code)

    def find_by_country(self, country_code: str) -> List[BasicInfo]:
        """
        Find airports by country code.

        Args:
            country_code: ISO country code (e.g., 'CN')
        """
        return self._ensure_initialized().find_by_country(country_code)

    def search_airports(self, airport_filter: FilterLike = None) -> List[BasicInfo]:
        """
        Search airports by filter conditions.

        Args:
            airport_filter: AirportFilter or dictionary of search criteria
        """
        return self._ensure_initialized().search_airports(airport_filter)

    def find_airports_in_radius(self, lat: float, lon: float, radius_km: float) -> List[BasicInfo]:
        """
        Get airports within a specified radius.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees
            radius_km: Radius in kilometers
        """
        return self._ensure_initialized().find_airports_in_radius(lat, lon, radius_km)

    @property
    def airports(self) -> AirportCollection:
        """
        Queryable collection of joined Airport records, in table order.

        Examples:
            airports.airports.by_country("CN").with_scheduled_service().all()
        """
        self._ensure_initialized()
        if self._airports is None:
            self._airports = AirportCollection([self._join(info) for info in self._tables.basic_info])
        return self._airports

    def get_airport(self, airport_id: int) -> Optional[Airport]:
        """Get the joined record of one airport by id."""
        self._ensure_initialized()
        info = self._tables.basic_info_for(airport_id)
        if info is None:
            return None
        return self._join(info)

    def _join(self, info: BasicInfo) -> Airport:
        return Airport.from_rows(
            info,
            self._tables.codes_for(info.id),
            self._tables.coordinates_for(info.id),
            self._tables.region_for(info.id),
            self._tables.references_for(info.id),
        )

    @property
    def data(self) -> AirportTables:
        """Raw tables for advanced usage."""
        self._ensure_initialized()
        return self._tables

    @property
    def is_initialized(self) -> bool:
        return self._tables is not None

    @property
    def source(self) -> Optional[ShardSource]:
        return self._source

    def __repr__(self) -> str:
        if not self.is_initialized:
            return "OurAirports(not initialized)"
        return f"OurAirports({len(self._tables)} airports)"
