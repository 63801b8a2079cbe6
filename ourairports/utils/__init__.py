"""
Utilities for preparing shard data: name cleaning, shard writing and
JSON minification.
"""

from .name_cleaner import AirportNameCleaner
from .shard_writer import build_shard, write_shards, minify_json, minify_directory, MinifyStats

__all__ = [
    'AirportNameCleaner',
    'build_shard',
    'write_shards',
    'minify_json',
    'minify_directory',
    'MinifyStats',
]
