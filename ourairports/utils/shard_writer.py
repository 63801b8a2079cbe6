"""
Writing and minifying shard files.

A shard file is a JSON array of row objects, one per airport, each holding
the airport ``id`` and the fields of its shard.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..models.shards import SHARD_FIELDS

logger = logging.getLogger(__name__)


@dataclass
class MinifyStats:
    """Size of a JSON file before and after minification, in bytes."""

    name: str
    original_size: int
    minified_size: int

    @property
    def saved(self) -> int:
        return self.original_size - self.minified_size

    @property
    def saved_percent(self) -> float:
        if self.original_size == 0:
            return 0.0
        return (1 - self.minified_size / self.original_size) * 100

    def __str__(self) -> str:
        return (
            f"{self.name}: {self.original_size / 1024:.2f} KB -> {self.minified_size / 1024:.2f} KB "
            f"(saved {self.saved / 1024:.2f} KB, {self.saved_percent:.1f}%)"
        )


def build_shard(records: Iterable[Mapping[str, Any]], fields: List[str]) -> List[Dict[str, Any]]:
    """
    Project full airport records onto the fields of one shard.

    Args:
        records: Airport records holding at least 'id' and the shard fields
        fields: Fields of the shard, besides 'id'

    Returns:
        List of shard rows, in record order
    """
    shard = []
    for record in records:
        row = {'id': record['id']}
        for field in fields:
            row[field] = record.get(field)
        shard.append(row)
    return shard


def write_shards(records: List[Mapping[str, Any]], data_dir: Union[str, Path],
                 indent: Optional[int] = 2) -> Dict[str, Path]:
    """
    Split airport records into the five shard files.

    Every shard gets one row per record, so the shards stay aligned by id.

    Args:
        records: Full airport records
        data_dir: Directory to write the shard files into (created if needed)
        indent: JSON indentation, None for compact output

    Returns:
        Dictionary mapping shard name to the written file path
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    written = {}
    for shard_name, fields in SHARD_FIELDS.items():
        target = data_dir / f"{shard_name}.json"
        with open(target, 'w', encoding='utf-8') as f:
            json.dump(build_shard(records, fields), f, indent=indent, ensure_ascii=False)
        written[shard_name] = target
        logger.info(f"Wrote {len(records)} rows to {target}")
    return written


def minify_json(content: str) -> str:
    """Re-serialize JSON text without any whitespace."""
    return json.dumps(json.loads(content), separators=(',', ':'), ensure_ascii=False)


def minify_directory(source_dir: Union[str, Path], target_dir: Union[str, Path]) -> List[MinifyStats]:
    """
    Minify every JSON file of a directory into another directory.

    Args:
        source_dir: Directory with the formatted JSON files
        target_dir: Directory receiving the minified files (created if needed,
            may be the same as source_dir)

    Returns:
        Per file statistics, sorted by file name

    Raises:
        ValueError: if a file does not contain valid JSON
    """
    source_dir = Path(source_dir)
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    stats = []
    for source in sorted(source_dir.glob('*.json')):
        content = source.read_text(encoding='utf-8')
        try:
            minified = minify_json(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in file {source}: {e}") from e
        (target_dir / source.name).write_text(minified, encoding='utf-8')

        file_stats = MinifyStats(
            name=source.name,
            original_size=len(content.encode('utf-8')),
            minified_size=len(minified.encode('utf-8')),
        )
        logger.info(str(file_stats))
        stats.append(file_stats)
    return stats
