"""Tests for CdnShardSource, fetching shard files over HTTP."""

from unittest.mock import MagicMock

import pytest
import requests

from ourairports.models.validation import ShardLoadError
from ourairports.sources.cdn import CdnShardSource, DEFAULT_CDN_BASE_URL


class MockResponse:
    """Minimal mock for requests.Response."""

    def __init__(self, payload=None, status_code=200, invalid_json=False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}")

    def json(self):
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


def make_session(payload=None, status_code=200, invalid_json=False):
    """Create a mock session returning a fixed response."""
    session = MagicMock()
    session.headers = {}
    session.get.return_value = MockResponse(payload, status_code, invalid_json)
    return session


class TestFetchShard:

    def test_fetch(self, beijing_shards):
        session = make_session(beijing_shards['codes'])
        source = CdnShardSource(session=session, timeout=5)

        rows = source.load_shard('codes')

        assert rows == beijing_shards['codes']
        session.get.assert_called_once_with(DEFAULT_CDN_BASE_URL + 'codes.json', timeout=5)
        assert session.headers['User-Agent'] == CdnShardSource.USER_AGENT

    def test_base_url_gets_trailing_slash(self):
        source = CdnShardSource('https://example.com/data', session=make_session([]))
        assert source.shard_url('region') == 'https://example.com/data/region.json'

    def test_http_error(self):
        source = CdnShardSource(session=make_session(status_code=404))
        with pytest.raises(ShardLoadError) as exc_info:
            source.load_shard('basic_info')
        assert exc_info.value.shard == 'basic_info'

    def test_connection_error(self):
        session = make_session()
        session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
        source = CdnShardSource(session=session)
        with pytest.raises(ShardLoadError):
            source.load_shard('codes')

    def test_invalid_json(self):
        source = CdnShardSource(session=make_session(invalid_json=True))
        with pytest.raises(ShardLoadError) as exc_info:
            source.load_shard('codes')
        assert 'Invalid JSON' in str(exc_info.value)

    def test_body_must_be_an_array(self):
        source = CdnShardSource(session=make_session({'error': 'rate limited'}))
        with pytest.raises(ShardLoadError) as exc_info:
            source.load_shard('region')
        assert exc_info.value.shard == 'region'


class TestCaching:

    def test_download_is_cached(self, beijing_shards, test_cache_dir):
        session = make_session(beijing_shards['region'])
        source = CdnShardSource(session=session, cache_dir=str(test_cache_dir))

        first = source.load_shard('region')
        second = source.load_shard('region')

        assert first == second == beijing_shards['region']
        assert session.get.call_count == 1
        assert (test_cache_dir / 'cdnshardsource' / 'shard_region.json').exists()

    def test_force_refresh(self, beijing_shards, test_cache_dir):
        session = make_session(beijing_shards['region'])
        source = CdnShardSource(session=session, cache_dir=str(test_cache_dir))
        source.load_shard('region')

        source.set_force_refresh()
        source.load_shard('region')

        assert session.get.call_count == 2

    def test_no_cache_dir_always_fetches(self, beijing_shards):
        session = make_session(beijing_shards['region'])
        source = CdnShardSource(session=session)
        source.load_shard('region')
        source.load_shard('region')
        assert session.get.call_count == 2

    def test_error_body_is_not_cached(self, beijing_shards, test_cache_dir):
        session = make_session()
        session.get.side_effect = [
            MockResponse({'error': 'rate limited'}),
            MockResponse(beijing_shards['codes']),
        ]
        source = CdnShardSource(session=session, cache_dir=str(test_cache_dir))

        with pytest.raises(ShardLoadError) as exc_info:
            source.load_shard('codes')
        assert 'must be an array' in str(exc_info.value)
        assert not (test_cache_dir / 'cdnshardsource' / 'shard_codes.json').exists()

        assert source.load_shard('codes') == beijing_shards['codes']
        assert session.get.call_count == 2

    def test_corrupt_cache_is_fetched_again(self, beijing_shards, test_cache_dir):
        session = make_session(beijing_shards['codes'])
        source = CdnShardSource(session=session, cache_dir=str(test_cache_dir))
        cache_file = test_cache_dir / 'cdnshardsource' / 'shard_codes.json'
        cache_file.write_text('[{"id": 1,', encoding='utf-8')

        assert source.load_shard('codes') == beijing_shards['codes']
        assert session.get.call_count == 1
        # The refetched shard replaced the broken file
        assert source.load_shard('codes') == beijing_shards['codes']
        assert session.get.call_count == 1

    def test_unwritable_cache_raises_load_error(self, beijing_shards, test_cache_dir):
        session = make_session(beijing_shards['codes'])
        source = CdnShardSource(session=session, cache_dir=str(test_cache_dir))
        # A directory in place of the cache file can be neither read nor written
        (test_cache_dir / 'cdnshardsource' / 'shard_codes.json').mkdir()

        with pytest.raises(ShardLoadError) as exc_info:
            source.load_shard('codes')
        assert exc_info.value.shard == 'codes'
