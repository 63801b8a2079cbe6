"""
Loading the five shards into validated, immutable tables.

The loader is the only place where rows are checked: every row is parsed
into its shard type, airport names are cleaned, and rows that fail are
dropped with a warning. The query engine can then trust the tables it is
given.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Tuple

from .base import ShardSource
from ..models.airport_tables import AirportTables
from ..models.shards import SHARD_TYPES
from ..models.validation import ShardLoadError, ValidationResult
from ..utils.name_cleaner import AirportNameCleaner

logger = logging.getLogger(__name__)


class ShardLoader:
    """Loads and validates the shards of a ShardSource."""

    def __init__(self, source: ShardSource, name_cleaner: Optional[AirportNameCleaner] = None,
                 max_workers: int = len(SHARD_TYPES)):
        """
        Args:
            source: Where the raw shard rows come from
            name_cleaner: Cleaner applied to the 'name' field of rows
            max_workers: Number of shards read concurrently
        """
        self.source = source
        self.name_cleaner = name_cleaner or AirportNameCleaner()
        self.max_workers = max_workers

    def process_data(self, shard: str, data: Any) -> Tuple[List[Any], ValidationResult]:
        """
        Parse the raw rows of a shard.

        Args:
            shard: Shard name
            data: Decoded JSON content of the shard

        Returns:
            Tuple of (valid rows, validation result listing the dropped rows)

        Raises:
            ShardLoadError: if data is not a list or no row is valid
        """
        if shard not in SHARD_TYPES:
            raise ShardLoadError(f"Unknown shard: {shard}", shard=shard)
        if not isinstance(data, list):
            raise ShardLoadError(f"Data for {shard} must be an array", shard=shard)

        row_type = SHARD_TYPES[shard]
        valid_items = []
        result = ValidationResult()

        for index, item in enumerate(data):
            if not isinstance(item, dict):
                result.add_error(index, f"expected an object, got {type(item).__name__}")
                continue
            try:
                row = row_type.from_dict(item)
            except ValueError as e:
                row_id = item.get('id')
                result.add_error(index, f"failed to parse: {e}", row_id if isinstance(row_id, int) else None)
                continue

            if hasattr(row, 'name'):
                cleaned_name = self.name_cleaner.clean_name(row.name)
                if not self.name_cleaner.is_valid_name(cleaned_name):
                    result.add_error(index, f"invalid airport name: {row.name!r}", row.id)
                    continue
                if cleaned_name != row.name:
                    row = row_type.from_dict({**item, 'name': cleaned_name})
            valid_items.append(row)

        if not result.is_valid:
            logger.warning(f"Found {len(result.errors)} errors while processing {shard}")
            for message in result.get_error_messages():
                logger.debug(f"{shard}: {message}")

        if not valid_items:
            raise ShardLoadError(f"No valid items found in {shard}", shard=shard, validation_result=result)

        return valid_items, result

    def load_shard(self, shard: str) -> List[Any]:
        """Read and validate one shard."""
        rows, _ = self.process_data(shard, self.source.load_shard(shard))
        logger.info(f"Loaded {len(rows)} {shard} rows from {self.source.get_source_name()}")
        return rows

    def load_tables(self) -> AirportTables:
        """
        Read the five shards concurrently and build the tables.

        Raises:
            ShardLoadError: if any shard fails to load
        """
        shards = list(SHARD_TYPES)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {shard: executor.submit(self.load_shard, shard) for shard in shards}
            loaded: Dict[str, List[Any]] = {shard: futures[shard].result() for shard in shards}

        tables = AirportTables(**loaded)

        report = tables.integrity_report()
        for shard, missing in report.items():
            logger.warning(f"{len(missing)} airport ids missing from {shard}")
        return tables
