from abc import ABC
import json
import pandas as pd
from datetime import datetime
from typing import Any, Optional, Tuple
from pathlib import Path
import inspect
import logging

logger = logging.getLogger(__name__)


class CachedSource(ABC):
    """
    Base class for sources that cache downloaded data on disk.

    This class handles:
    - Caching data to disk as JSON or CSV
    - Checking cache validity based on age
    - Fetching and caching new data when needed

    Key Format:
    The cache key is `{base_key}_{parameter}` where `base_key` names the
    data (e.g. 'shard', 'airports') and `parameter` qualifies it (e.g. the
    shard name). The base_key must correspond to a fetch method in the
    implementing class: key 'shard_codes' is fetched by calling
    `fetch_shard('codes')`.

    With no cache directory, caching is disabled and every call fetches.
    """

    # OurAirports uses 'NA' for Namibia and North America, so only empty
    # cells are missing values
    CSV_READ_OPTIONS = {'dtype': str, 'keep_default_na': False, 'na_values': ['']}

    def __init__(self, cache_dir: Optional[str] = None):
        """
        Initialize the cached source.

        Args:
            cache_dir: Base directory for caching, None to disable caching
        """
        self.source_name = self.__class__.__name__.lower()
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        self.cache_path = self.cache_dir / self.source_name if self.cache_dir is not None else None
        if self.cache_path is not None:
            self.cache_path.mkdir(parents=True, exist_ok=True)
        self._force_refresh = False
        self._never_refresh = False

    def set_force_refresh(self, force_refresh: bool = True) -> None:
        """Set whether to ignore cached data and always fetch."""
        self._force_refresh = force_refresh

    def set_never_refresh(self, never_refresh: bool = True) -> None:
        """
        Set whether to never refresh cached data.
        If set to True, will use cached data if it exists, regardless of age.
        """
        self._never_refresh = never_refresh

    def _get_cache_file(self, key: str, ext: str) -> Path:
        """Get the cache file path for a given key and extension."""
        return self.cache_path / f"{key}.{ext}"

    def _is_cache_valid(self, cache_file: Path, max_age_days: Optional[int] = None) -> Tuple[bool, Optional[str]]:
        """
        Check if the cache file is valid (exists and not too old).

        Returns:
            Tuple[bool, Optional[str]]: (is_valid, reason if invalid)
        """
        if self._force_refresh:
            return False, "force refresh"
        if not cache_file.exists():
            return False, "missing"
        if self._never_refresh:
            return True, None
        if max_age_days is None:
            return True, None
        file_age = datetime.now() - datetime.fromtimestamp(cache_file.stat().st_mtime)
        if file_age.days <= max_age_days:
            return True, None
        return False, "expired"

    def _save_to_cache(self, data: Any, key: str, ext: str) -> None:
        """Save data to cache with the specified extension."""
        cache_file = self._get_cache_file(key, ext)
        if ext == 'json':
            with open(cache_file, 'w', encoding='utf-8') as f:
                json.dump(data, f)
        elif ext == 'csv':
            if isinstance(data, pd.DataFrame):
                data.to_csv(cache_file, index=False)
            else:
                pd.DataFrame(data).to_csv(cache_file, index=False)
        else:
            raise ValueError(f"Unsupported file extension: {ext}")

    def _load_from_cache(self, key: str, ext: str) -> Any:
        """Load data from cache with the specified extension."""
        cache_file = self._get_cache_file(key, ext)
        if ext == 'json':
            with open(cache_file, 'r', encoding='utf-8') as f:
                return json.load(f)
        elif ext == 'csv':
            return pd.read_csv(cache_file, **self.CSV_READ_OPTIONS)
        else:
            raise ValueError(f"Unsupported file extension: {ext}")

    def _validate_fetch_method(self, base_key: str) -> None:
        """
        Validate that the fetch method exists for the given base key.

        Raises:
            NotImplementedError: If the fetch method doesn't exist
        """
        method_name = f"fetch_{base_key}"
        if not hasattr(self, method_name):
            raise NotImplementedError(
                f"No fetch method found for key '{base_key}'. "
                f"Class {self.__class__.__name__} must implement a method named '{method_name}'."
            )

    def get_data(self, key: str, ext: str, param: str, max_age_days: Optional[int] = None, **kwargs) -> Any:
        """
        Get data from cache or fetch it if not available.

        Args:
            key: Base key for the data type (e.g., 'shard', 'airports')
            ext: File extension (json or csv)
            param: Parameter passed to the fetch method (ignored if the fetch
                method takes no arguments)
            max_age_days: Maximum age of cache in days (None for no limit)
            **kwargs: Additional arguments to pass to the fetch method

        Returns:
            The requested data

        Raises:
            NotImplementedError: If the fetch method doesn't exist
            ValueError: If the file extension is not supported
        """
        self._validate_fetch_method(key)
        fetch_method = getattr(self, f"fetch_{key}")

        cache_file = None
        reason = "no cache"
        if self.cache_path is not None:
            cache_key = f"{key}_{param}"
            cache_file = self._get_cache_file(cache_key, ext)
            is_valid, reason = self._is_cache_valid(cache_file, max_age_days)
            if is_valid:
                try:
                    data = self._load_from_cache(cache_key, ext)
                except (ValueError, OSError) as e:
                    # Truncated or corrupt cache file, fetch it again
                    logger.warning(f"Ignoring unreadable cache file {cache_file}: {e}")
                    reason = "corrupt"
                else:
                    logger.debug(f"{cache_file.name} retrieved from cache {self.source_name}")
                    return data

        # Fetch methods may take no parameters at all
        if len(inspect.signature(fetch_method).parameters) == 0:
            data = fetch_method()
        else:
            data = fetch_method(param, **kwargs)

        if cache_file is not None:
            self._save_to_cache(data, f"{key}_{param}", ext)
            logger.info(f"{cache_file.name} [{reason}] fetched using {fetch_method.__name__}")
        return data
