"""
Data sources for the ourairports library.

A ShardSource produces the raw rows of the five shard files, the
ShardLoader turns them into validated AirportTables. OurAirportsCsvSource
builds the shard files from the upstream CSV export.
"""

from .base import ShardSource
from .filesystem import FileShardSource, DEFAULT_DATA_DIR
from .cdn import CdnShardSource, DEFAULT_CDN_BASE_URL
from .loader import ShardLoader
from .ourairports_csv import OurAirportsCsvSource, AIRPORTS_CSV_URL

__all__ = [
    'ShardSource',
    'FileShardSource',
    'CdnShardSource',
    'ShardLoader',
    'OurAirportsCsvSource',
    'DEFAULT_DATA_DIR',
    'DEFAULT_CDN_BASE_URL',
    'AIRPORTS_CSV_URL',
]
