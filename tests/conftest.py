import json
from pathlib import Path
from typing import Dict, List

import pytest

from ourairports.models.airport_tables import AirportTables
from ourairports.models.shards import SHARD_TYPES

BEIJING = {
    'basic_info': {'id': 1, 'name': 'Beijing Capital International Airport', 'type': 'large_airport',
                   'ident': 'ZBAA', 'iata_code': 'PEK'},
    'codes': {'id': 1, 'ident': 'ZBAA', 'iata_code': 'PEK', 'gps_code': 'ZBAA', 'local_code': None},
    'coordinates': {'id': 1, 'latitude_deg': 40.0799, 'longitude_deg': 116.6031, 'elevation_ft': 116},
    'region': {'id': 1, 'iso_country': 'CN', 'iso_region': 'CN-11', 'continent': 'AS', 'municipality': 'Beijing'},
    'references': {'id': 1, 'scheduled_service': 'yes', 'home_link': None,
                   'wikipedia_link': 'https://en.wikipedia.org/wiki/Beijing_Capital_International_Airport',
                   'keywords': None},
}


def make_shards(*airports: Dict[str, dict]) -> Dict[str, List[dict]]:
    """Collect per-airport shard rows into one list per shard."""
    shards = {name: [] for name in SHARD_TYPES}
    for airport in airports:
        for name, row in airport.items():
            shards[name].append(row)
    return shards


def make_tables(shards: Dict[str, List[dict]]) -> AirportTables:
    return AirportTables(**{
        name: [SHARD_TYPES[name].from_dict(row) for row in shards.get(name, [])]
        for name in SHARD_TYPES
    })


def write_shard_dir(directory: Path, shards: Dict[str, List[dict]]) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    for name, rows in shards.items():
        (directory / f"{name}.json").write_text(json.dumps(rows), encoding='utf-8')
    return directory


@pytest.fixture
def beijing_shards() -> Dict[str, List[dict]]:
    return make_shards(BEIJING)


@pytest.fixture
def beijing_tables(beijing_shards) -> AirportTables:
    return make_tables(beijing_shards)


@pytest.fixture
def beijing_airport() -> Dict[str, dict]:
    """Shard rows of Beijing Capital, one row per shard."""
    return {name: dict(row) for name, row in BEIJING.items()}


@pytest.fixture
def tables_from():
    """Build AirportTables from per-airport shard rows."""
    def build(*airports: Dict[str, dict]) -> AirportTables:
        return make_tables(make_shards(*airports))
    return build


@pytest.fixture
def sample_shards() -> Dict[str, List[dict]]:
    """
    A handful of airports around Beijing, Paris and London.

    Airport 5 (a heliport) has no region, codes or references row.
    """
    return make_shards(
        BEIJING,
        {
            'basic_info': {'id': 2, 'name': 'Beijing Daxing International Airport', 'type': 'large_airport',
                           'iata_code': 'PKX'},
            'codes': {'id': 2, 'ident': 'ZBAD', 'iata_code': 'PKX'},
            'coordinates': {'id': 2, 'latitude_deg': 39.509945, 'longitude_deg': 116.41092},
            'region': {'id': 2, 'iso_country': 'CN', 'iso_region': 'CN-11', 'continent': 'AS'},
            'references': {'id': 2, 'scheduled_service': 'yes'},
        },
        {
            'basic_info': {'id': 3, 'name': 'Paris Charles de Gaulle Airport', 'type': 'large_airport',
                           'iata_code': 'CDG'},
            'codes': {'id': 3, 'ident': 'LFPG', 'iata_code': 'CDG'},
            'coordinates': {'id': 3, 'latitude_deg': 49.012798, 'longitude_deg': 2.55},
            'region': {'id': 3, 'iso_country': 'FR', 'iso_region': 'FR-IDF', 'continent': 'EU'},
            'references': {'id': 3, 'scheduled_service': 'yes'},
        },
        {
            'basic_info': {'id': 4, 'name': 'Toussus-le-Noble Airport', 'type': 'medium_airport',
                           'iata_code': None},
            'codes': {'id': 4, 'ident': 'LFPN', 'iata_code': '  '},
            'coordinates': {'id': 4, 'latitude_deg': 48.751922, 'longitude_deg': 2.106189},
            'region': {'id': 4, 'iso_country': 'FR', 'iso_region': 'FR-IDF', 'continent': 'EU'},
            'references': {'id': 4, 'scheduled_service': 'no'},
        },
        {
            'basic_info': {'id': 5, 'name': 'London Heliport', 'type': 'heliport', 'iata_code': None},
            'coordinates': {'id': 5, 'latitude_deg': 51.470001, 'longitude_deg': -0.179444},
        },
        {
            'basic_info': {'id': 6, 'name': 'Unknown Continent Field', 'type': 'small_airport',
                           'iata_code': None},
            'codes': {'id': 6, 'ident': 'XX01'},
            'coordinates': {'id': 6, 'latitude_deg': 10.0, 'longitude_deg': 10.0},
            'region': {'id': 6, 'iso_country': 'XA', 'iso_region': 'XA-U-A', 'continent': None},
            'references': {'id': 6},
        },
    )


@pytest.fixture
def sample_tables(sample_shards) -> AirportTables:
    return make_tables(sample_shards)


@pytest.fixture
def shard_dir(tmp_path, sample_shards) -> Path:
    """Directory holding the sample shards as JSON files."""
    return write_shard_dir(tmp_path / 'data', sample_shards)


@pytest.fixture
def test_cache_dir(tmp_path) -> Path:
    """Return a temporary directory for cache testing."""
    return tmp_path / 'cache'
