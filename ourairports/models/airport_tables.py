"""
Immutable container for the five airport shards.

The tables are kept as separate ordered tuples, exactly as they were
loaded, with an id -> row index per table so that joins across shards are
dictionary lookups rather than scans.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, TypeVar

from .shards import BasicInfo, Codes, Coordinates, Region, References

logger = logging.getLogger(__name__)

RowT = TypeVar('RowT', BasicInfo, Codes, Coordinates, Region, References)


def _index_by_id(rows: Tuple[RowT, ...], shard: str) -> Dict[int, RowT]:
    index: Dict[int, RowT] = {}
    for row in rows:
        # Keep the first occurrence, the same row a table scan would find
        if row.id in index:
            logger.warning(f"Duplicate id {row.id} in {shard}, keeping first occurrence")
            continue
        index[row.id] = row
    return index


class AirportTables:
    """
    The five shards of the dataset, joined by airport id.

    Rows are frozen dataclasses and tables are tuples, so an instance can be
    shared freely between threads once constructed.
    """

    SHARD_NAMES = ('basic_info', 'codes', 'coordinates', 'region', 'references')

    def __init__(
        self,
        basic_info: Iterable[BasicInfo],
        codes: Iterable[Codes],
        coordinates: Iterable[Coordinates],
        region: Iterable[Region],
        references: Iterable[References],
    ):
        self.basic_info: Tuple[BasicInfo, ...] = tuple(basic_info)
        self.codes: Tuple[Codes, ...] = tuple(codes)
        self.coordinates: Tuple[Coordinates, ...] = tuple(coordinates)
        self.region: Tuple[Region, ...] = tuple(region)
        self.references: Tuple[References, ...] = tuple(references)

        self._basic_info_by_id = _index_by_id(self.basic_info, 'basic_info')
        self._codes_by_id = _index_by_id(self.codes, 'codes')
        self._coordinates_by_id = _index_by_id(self.coordinates, 'coordinates')
        self._region_by_id = _index_by_id(self.region, 'region')
        self._references_by_id = _index_by_id(self.references, 'references')

    def basic_info_for(self, airport_id: int) -> Optional[BasicInfo]:
        return self._basic_info_by_id.get(airport_id)

    def codes_for(self, airport_id: int) -> Optional[Codes]:
        return self._codes_by_id.get(airport_id)

    def coordinates_for(self, airport_id: int) -> Optional[Coordinates]:
        return self._coordinates_by_id.get(airport_id)

    def region_for(self, airport_id: int) -> Optional[Region]:
        return self._region_by_id.get(airport_id)

    def references_for(self, airport_id: int) -> Optional[References]:
        return self._references_by_id.get(airport_id)

    def shard(self, name: str) -> Tuple:
        """Get a table by its shard name (e.g. 'codes')."""
        if name not in self.SHARD_NAMES:
            raise KeyError(f"Unknown shard: {name}")
        return getattr(self, name)

    def integrity_report(self) -> Dict[str, List[int]]:
        """
        Find ids that are not present in every shard.

        Missing rows are tolerated by every query (a join miss is simply a
        non-match), this is only a diagnostic.

        Returns:
            Dictionary mapping shard name to the sorted ids missing from it.
            Shards with no missing ids are omitted.
        """
        indexes = {
            'basic_info': self._basic_info_by_id,
            'codes': self._codes_by_id,
            'coordinates': self._coordinates_by_id,
            'region': self._region_by_id,
            'references': self._references_by_id,
        }
        all_ids = set()
        for index in indexes.values():
            all_ids.update(index.keys())

        report = {}
        for name, index in indexes.items():
            missing = sorted(all_ids - index.keys())
            if missing:
                report[name] = missing
        return report

    def __len__(self) -> int:
        return len(self.basic_info)

    def __repr__(self) -> str:
        counts = ', '.join(f"{name}={len(getattr(self, name))}" for name in self.SHARD_NAMES)
        return f"AirportTables({counts})"
