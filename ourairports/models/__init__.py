"""
Data models for the ourairports library.

This package contains the row types of the five shards, the immutable
table container, the search service answering queries over it, and the
joined Airport record with its queryable collection.
"""

from .shards import AirportType, BasicInfo, Codes, Coordinates, Region, References, SHARD_TYPES
from .airport import Airport, AirportFilter
from .airport_tables import AirportTables
from .navpoint import NavPoint, calculate_distance, EARTH_RADIUS_KM
from .queryable_collection import QueryableCollection
from .airport_collection import AirportCollection
from .search_service import SearchService
from .validation import (
    ValidationError, ValidationResult, RowError, NotInitializedError, ShardLoadError
)

__all__ = [
    # Shard rows
    'AirportType',
    'BasicInfo',
    'Codes',
    'Coordinates',
    'Region',
    'References',
    'SHARD_TYPES',
    # Tables and queries
    'AirportTables',
    'SearchService',
    'AirportFilter',
    'NavPoint',
    'calculate_distance',
    'EARTH_RADIUS_KM',
    # Joined view
    'Airport',
    'QueryableCollection',
    'AirportCollection',
    # Errors
    'ValidationError',
    'ValidationResult',
    'RowError',
    'NotInitializedError',
    'ShardLoadError',
]
