import json

import pytest

from ourairports.cli import build_parser, main
from ourairports.sources.ourairports_csv import OurAirportsCsvSource

CSV_TEXT = (
    'id,ident,type,name,latitude_deg,longitude_deg,elevation_ft,continent,iso_country,iso_region,'
    'municipality,scheduled_service,gps_code,iata_code,local_code,home_link,wikipedia_link,keywords\n'
    '3406,ZBAA,large_airport,Beijing Capital International Airport,40.0801,116.585,116,AS,CN,CN-11,'
    'Beijing,yes,ZBAA,PEK,,,,\n'
    '4185,LFPG,large_airport,Paris Charles de Gaulle Airport,49.012798,2.55,392,EU,FR,FR-IDF,'
    'Paris,yes,LFPG,CDG,,,,\n'
)


def run_search(capsys, *args):
    code = main(['search', *args])
    return code, json.loads(capsys.readouterr().out)


def test_search_by_iata(shard_dir, capsys):
    code, results = run_search(capsys, '-d', str(shard_dir), '--iata', 'pek')
    assert code == 0
    assert len(results) == 1
    assert results[0]['name'] == 'Beijing Capital International Airport'
    assert results[0]['type'] == 'large_airport'


def test_search_by_filter(shard_dir, capsys):
    code, results = run_search(capsys, '-d', str(shard_dir), '--continent', 'EU', '--has-iata')
    assert code == 0
    assert [r['id'] for r in results] == [3]


def test_search_near(shard_dir, capsys):
    code, results = run_search(capsys, '-d', str(shard_dir), '--near', '40.0799', '116.6031', '--radius', '100',
                               '--limit', '1')
    assert code == 0
    assert [r['id'] for r in results] == [1]


def test_search_not_found(shard_dir, capsys):
    code, results = run_search(capsys, '-d', str(shard_dir), '--icao', 'XXXX')
    assert code == 0
    assert results == []


def test_invalid_query(shard_dir):
    assert main(['search', '-d', str(shard_dir), '--near', '0', '0', '--radius', '-1']) == 2
    assert main(['search', '-d', str(shard_dir), '--type', 'spaceport']) == 2


def test_missing_data_dir(tmp_path):
    assert main(['search', '-d', str(tmp_path / 'missing'), '--iata', 'PEK']) == 1


def test_fetch_and_minify(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(OurAirportsCsvSource, 'fetch_airports', lambda self: self.read_csv(CSV_TEXT))
    data_dir = tmp_path / 'data'

    assert main(['fetch', '-d', str(data_dir)]) == 0
    assert (data_dir / 'references.json').exists()

    dist = tmp_path / 'dist'
    assert main(['minify', '-d', str(data_dir), '-o', str(dist)]) == 0
    assert '\n' not in (dist / 'codes.json').read_text(encoding='utf-8')

    code, results = run_search(capsys, '-d', str(dist), '--country', 'fr')
    assert code == 0
    assert [r['iata_code'] for r in results] == ['CDG']


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
