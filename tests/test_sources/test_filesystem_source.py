import pytest

from ourairports.models.validation import ShardLoadError
from ourairports.sources.filesystem import FileShardSource


def test_load_shard(shard_dir):
    source = FileShardSource(shard_dir)
    rows = source.load_shard('codes')
    assert [row['ident'] for row in rows] == ['ZBAA', 'ZBAD', 'LFPG', 'LFPN', 'XX01']
    assert source.get_source_name() == 'fileshardsource'


def test_missing_directory(tmp_path):
    with pytest.raises(ShardLoadError):
        FileShardSource(tmp_path / 'nowhere')


def test_missing_file(shard_dir):
    (shard_dir / 'region.json').unlink()
    source = FileShardSource(shard_dir)
    with pytest.raises(ShardLoadError) as exc_info:
        source.load_shard('region')
    assert exc_info.value.shard == 'region'
    assert 'Data file not found' in str(exc_info.value)


def test_invalid_json(shard_dir):
    (shard_dir / 'codes.json').write_text('[{"id": 1,', encoding='utf-8')
    with pytest.raises(ShardLoadError) as exc_info:
        FileShardSource(shard_dir).load_shard('codes')
    assert 'Invalid JSON' in str(exc_info.value)


def test_has_shards(shard_dir, tmp_path):
    assert FileShardSource.has_shards(shard_dir)
    assert not FileShardSource.has_shards(tmp_path)
