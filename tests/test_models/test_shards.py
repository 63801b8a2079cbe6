import pytest

from ourairports.models.shards import (
    AirportType, BasicInfo, Codes, Coordinates, Region, References, SHARD_TYPES, SHARD_FIELDS
)


class TestBasicInfo:

    def test_from_dict(self):
        info = BasicInfo.from_dict({'id': 1, 'name': 'Beijing Capital International Airport',
                                    'type': 'large_airport', 'iata_code': 'PEK'})
        assert info.id == 1
        assert info.type == AirportType.LARGE_AIRPORT
        assert info.type == 'large_airport'
        assert info.iata_code == 'PEK'
        assert info.ident is None

    def test_missing_iata_code_is_none(self):
        info = BasicInfo.from_dict({'id': 1, 'name': 'Somewhere', 'type': 'heliport'})
        assert info.iata_code is None

    @pytest.mark.parametrize("data", [
        {'name': 'No id', 'type': 'heliport'},
        {'id': -1, 'name': 'Negative', 'type': 'heliport'},
        {'id': 'x', 'name': 'Text id', 'type': 'heliport'},
        {'id': True, 'name': 'Bool id', 'type': 'heliport'},
        {'id': 1, 'type': 'heliport'},
        {'id': 1, 'name': 'Bad type', 'type': 'spaceport'},
        {'id': 1, 'name': 'Bad iata', 'type': 'heliport', 'iata_code': 12},
    ])
    def test_invalid_rows(self, data):
        with pytest.raises(ValueError):
            BasicInfo.from_dict(data)

    def test_integral_float_id(self):
        assert BasicInfo.from_dict({'id': 7.0, 'name': 'Float id', 'type': 'closed'}).id == 7

    def test_to_dict(self):
        info = BasicInfo(id=1, name='Field', type=AirportType.CLOSED)
        assert info.to_dict() == {'id': 1, 'name': 'Field', 'type': 'closed', 'iata_code': None, 'ident': None}


class TestOtherShards:

    def test_codes_require_ident(self):
        with pytest.raises(ValueError):
            Codes.from_dict({'id': 1, 'iata_code': 'PEK'})
        codes = Codes.from_dict({'id': 1, 'ident': 'ZBAA'})
        assert codes.iata_code is None
        assert codes.gps_code is None

    def test_coordinates_require_both(self):
        with pytest.raises(ValueError):
            Coordinates.from_dict({'id': 1, 'latitude_deg': 40.0})
        with pytest.raises(ValueError):
            Coordinates.from_dict({'id': 1, 'latitude_deg': None, 'longitude_deg': 116.6})
        coords = Coordinates.from_dict({'id': 1, 'latitude_deg': 40, 'longitude_deg': 116.6})
        assert coords.latitude_deg == 40.0
        assert coords.elevation_ft is None

    def test_region_requires_country_and_region(self):
        with pytest.raises(ValueError):
            Region.from_dict({'id': 1, 'iso_country': 'CN'})
        region = Region.from_dict({'id': 1, 'iso_country': 'CN', 'iso_region': 'CN-11'})
        assert region.continent is None

    def test_scheduled_service_defaults_to_no(self):
        assert References.from_dict({'id': 1}).scheduled_service == 'no'
        assert References.from_dict({'id': 1, 'scheduled_service': None}).scheduled_service == 'no'
        assert References.from_dict({'id': 1, 'scheduled_service': 'yes'}).has_scheduled_service

    def test_scheduled_service_rejects_other_values(self):
        with pytest.raises(ValueError):
            References.from_dict({'id': 1, 'scheduled_service': 'maybe'})

    def test_rows_are_frozen(self):
        codes = Codes(id=1, ident='ZBAA')
        with pytest.raises(AttributeError):
            codes.ident = 'ZBAD'


def test_shard_registry_is_consistent():
    assert list(SHARD_TYPES) == list(SHARD_FIELDS)
    assert list(SHARD_TYPES) == ['basic_info', 'codes', 'coordinates', 'region', 'references']
