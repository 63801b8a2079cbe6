import json
import logging
from pathlib import Path
from typing import Any, List, Union

from .base import ShardSource
from ..models.validation import ShardLoadError

logger = logging.getLogger(__name__)

# Shards are looked up in ./data by default
DEFAULT_DATA_DIR = Path('data')


class FileShardSource(ShardSource):
    """Source reading shard files from a local data directory."""

    def __init__(self, data_dir: Union[str, Path] = DEFAULT_DATA_DIR):
        """
        Initialize the filesystem source.

        Args:
            data_dir: Directory holding basic_info.json, codes.json, ...

        Raises:
            ShardLoadError: if the directory does not exist
        """
        self.data_dir = Path(data_dir)
        if not self.data_dir.is_dir():
            raise ShardLoadError(f"Data directory not found at {self.data_dir}")

    @classmethod
    def has_shards(cls, data_dir: Union[str, Path]) -> bool:
        """Check whether a directory looks like a shard directory."""
        return (Path(data_dir) / 'basic_info.json').is_file()

    def load_shard(self, shard: str) -> List[Any]:
        data_path = self.data_dir / f"{shard}.json"
        if not data_path.exists():
            raise ShardLoadError(f"Data file not found at {data_path}", shard=shard)

        try:
            with open(data_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ShardLoadError(f"Invalid JSON in file {data_path}: {e}", shard=shard) from e
        except OSError as e:
            raise ShardLoadError(f"Failed to read {data_path}: {e}", shard=shard) from e

        logger.debug(f"Read {data_path}")
        return data

    def __repr__(self) -> str:
        return f"FileShardSource({str(self.data_dir)!r})"
