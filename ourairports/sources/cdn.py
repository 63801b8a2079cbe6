"""CDN source fetching the published shard files over HTTP."""

import logging
from typing import Any, List, Optional

import requests

from .base import ShardSource
from .cached import CachedSource
from ..models.validation import ShardLoadError

logger = logging.getLogger(__name__)

DEFAULT_CDN_BASE_URL = "https://cdn.jsdelivr.net/npm/ourairports-data-js@latest/data/"


class CdnShardSource(CachedSource, ShardSource):
    """
    Fetch shard files from a CDN.

    Downloads are optionally cached on disk, see CachedSource.

    Example:
        source = CdnShardSource(cache_dir="cache")
        rows = source.load_shard("codes")
    """

    DEFAULT_TIMEOUT = 30
    USER_AGENT = "ourairports/0.1 (python)"

    def __init__(
        self,
        base_url: str = DEFAULT_CDN_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: int = DEFAULT_TIMEOUT,
        cache_dir: Optional[str] = None,
        max_age_days: Optional[int] = 7,
    ):
        """
        Args:
            base_url: URL of the directory holding the shard files.
            session: Optional requests.Session for dependency injection (testing).
            timeout: HTTP request timeout in seconds.
            cache_dir: Directory to cache downloaded shards, None to disable.
            max_age_days: Maximum age of cached shards.
        """
        super().__init__(cache_dir)
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.max_age_days = max_age_days
        self._session = session or requests.Session()
        self._timeout = timeout
        self._session.headers.setdefault("User-Agent", self.USER_AGENT)

    def shard_url(self, shard: str) -> str:
        return f"{self.base_url}{shard}.json"

    def fetch_shard(self, shard: str) -> List[Any]:
        """
        Download one shard file.

        Only a JSON array is returned, so an error body served with a 200
        status never reaches the cache.

        Raises:
            ShardLoadError: on HTTP errors, an undecodable body or a body
                that is not a JSON array
        """
        url = self.shard_url(shard)
        logger.info(f"Fetching {url}")
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ShardLoadError(f"Failed to load {shard} data from {url}: {e}", shard=shard) from e

        try:
            data = response.json()
        except ValueError as e:
            raise ShardLoadError(f"Invalid JSON from {url}: {e}", shard=shard) from e

        if not isinstance(data, list):
            raise ShardLoadError(f"Data for {shard} from {url} must be an array", shard=shard)
        return data

    def load_shard(self, shard: str) -> List[Any]:
        """
        Load one shard from the cache, or from the CDN when the cache is
        missing, expired or unreadable.

        Raises:
            ShardLoadError: if the shard cannot be fetched or cached
        """
        try:
            return self.get_data('shard', 'json', shard, max_age_days=self.max_age_days)
        except (ValueError, OSError) as e:
            raise ShardLoadError(f"Failed to load {shard} data: {e}", shard=shard) from e

    def __repr__(self) -> str:
        return f"CdnShardSource({self.base_url!r})"
