import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd
import requests

from .cached import CachedSource
from ..utils.name_cleaner import AirportNameCleaner
from ..utils.shard_writer import write_shards

logger = logging.getLogger(__name__)

AIRPORTS_CSV_URL = "https://davidmegginson.github.io/ourairports-data/airports.csv"

NULLABLE_TEXT_FIELDS = [
    'continent', 'municipality', 'gps_code', 'iata_code', 'local_code',
    'home_link', 'wikipedia_link', 'keywords',
]
NUMBER_FIELDS = ['latitude_deg', 'longitude_deg', 'elevation_ft']


class OurAirportsCsvSource(CachedSource):
    """
    Source implementation for the OurAirports airports.csv export.

    Downloads the full CSV, cleans it into airport records and splits the
    records into the five shard files.
    """

    DEFAULT_TIMEOUT = 60

    def __init__(self, cache_dir: Optional[str] = None, url: str = AIRPORTS_CSV_URL,
                 session: Optional[requests.Session] = None, timeout: int = DEFAULT_TIMEOUT,
                 name_cleaner: Optional[AirportNameCleaner] = None):
        """
        Initialize the OurAirports CSV source.

        Args:
            cache_dir: Base directory for caching the CSV, None to disable
            url: URL of airports.csv
            session: Optional requests.Session for dependency injection (testing)
            timeout: HTTP request timeout in seconds
            name_cleaner: Cleaner for airport names
        """
        super().__init__(cache_dir)
        self.url = url
        self._session = session or requests.Session()
        self._timeout = timeout
        self.name_cleaner = name_cleaner or AirportNameCleaner()

    def _safe_get(self, row: pd.Series, key: str) -> Any:
        """
        Safely get a value from a pandas Series, converting nan to None.
        """
        value = row.get(key)
        if pd.isna(value):
            return None
        return value

    def _parse_number(self, value: Any) -> Optional[float]:
        """Parse a CSV cell as a number, None when empty or not numeric."""
        if value is None or value == '':
            return None
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        return None if pd.isna(number) else number

    def _parse_id(self, value: Any) -> Optional[int]:
        number = self._parse_number(value)
        if number is None or not number.is_integer():
            return None
        return int(number)

    def fetch_airports(self) -> pd.DataFrame:
        """
        Fetch airports data from OurAirports.

        Returns:
            DataFrame containing airport data, every column as text
        """
        logger.info(f"Downloading {self.url}")
        response = self._session.get(self.url, timeout=self._timeout)
        response.raise_for_status()
        return self.read_csv(response.text)

    def read_csv(self, csv_text: str) -> pd.DataFrame:
        # utf-8-sig files keep their BOM when decoded by requests
        return pd.read_csv(io.StringIO(csv_text.lstrip('\ufeff')), **self.CSV_READ_OPTIONS)

    def get_airports(self, max_age_days: int = 7) -> pd.DataFrame:
        """
        Get airports data from cache or fetch it if not available.

        Args:
            max_age_days: Maximum age of cache in days
        """
        return self.get_data('airports', 'csv', '', max_age_days=max_age_days)

    def build_records(self, airports: pd.DataFrame) -> List[Dict[str, Any]]:
        """
        Turn raw CSV rows into cleaned airport records.

        Rows with an invalid name or without a numeric id are skipped.

        Returns:
            List of records with every field of every shard
        """
        records = []
        skipped = 0
        for _, row in airports.iterrows():
            airport_id = self._parse_id(self._safe_get(row, 'id'))
            cleaned_name = self.name_cleaner.clean_name(self._safe_get(row, 'name') or '')
            if airport_id is None or not self.name_cleaner.is_valid_name(cleaned_name):
                skipped += 1
                continue

            record = {
                'id': airport_id,
                'ident': self._safe_get(row, 'ident'),
                'type': self._safe_get(row, 'type'),
                'name': cleaned_name,
                'iso_country': self._safe_get(row, 'iso_country'),
                'iso_region': self._safe_get(row, 'iso_region'),
                'scheduled_service': self._safe_get(row, 'scheduled_service') or 'no',
            }
            for field in NUMBER_FIELDS:
                record[field] = self._parse_number(self._safe_get(row, field))
            for field in NULLABLE_TEXT_FIELDS:
                record[field] = self._safe_get(row, field) or None
            records.append(record)

        logger.info(f"Built {len(records)} airport records, skipped {skipped} rows")
        return records

    def build_shards(self, data_dir: Union[str, Path], max_age_days: int = 7,
                     indent: Optional[int] = 2) -> Dict[str, Path]:
        """
        Download (or reuse the cached) CSV and write the five shard files.

        Args:
            data_dir: Directory receiving the shard files
            max_age_days: Maximum age of the cached CSV
            indent: JSON indentation, None for compact output

        Returns:
            Dictionary mapping shard name to the written file path
        """
        airports = self.get_airports(max_age_days=max_age_days)
        records = self.build_records(airports)
        return write_shards(records, data_dir, indent=indent)
