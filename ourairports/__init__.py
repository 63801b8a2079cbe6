"""
OurAirports world airport dataset, queryable in memory.

This package loads the five shards of the OurAirports dataset (basic
info, codes, coordinates, region and references) and answers lookups by
IATA / ICAO code, categorical searches and great circle radius searches.

The main public API includes:
- OurAirports: Load the dataset once, then query it
- AirportFilter: Criteria for search_airports
- BasicInfo, Codes, Coordinates, Region, References: Shard rows
- Airport / AirportCollection: Joined records with chainable filters
- calculate_distance: Haversine distance in kilometers
"""

from .ourairports import OurAirports
from .models import (
    Airport, AirportCollection, AirportFilter, AirportTables, AirportType,
    BasicInfo, Codes, Coordinates, Region, References, NavPoint,
    SearchService, calculate_distance,
    ValidationError, NotInitializedError, ShardLoadError,
)
from .sources import FileShardSource, CdnShardSource, ShardLoader, ShardSource

__version__ = '0.1.0'
__all__ = [
    'OurAirports',
    'Airport',
    'AirportCollection',
    'AirportFilter',
    'AirportTables',
    'AirportType',
    'BasicInfo',
    'Codes',
    'Coordinates',
    'Region',
    'References',
    'NavPoint',
    'SearchService',
    'calculate_distance',
    'ValidationError',
    'NotInitializedError',
    'ShardLoadError',
    'ShardSource',
    'FileShardSource',
    'CdnShardSource',
    'ShardLoader',
]
