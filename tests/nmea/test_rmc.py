"""Tests for RMC sentence decoding and formatting."""

import pytest

from gpsfix import FixState, SentenceType
from gpsfix.errors import InsufficientFieldsError
from gpsfix.nmea.fields import split_sentence
from gpsfix.nmea.rmc import decode_rmc, format_rmc

RMC_VALID = "$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*2D"
RMC_VOID = "$GPRMC,080701.00,V,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*3A"
RMC_WEST_VARIATION = "$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,W,A*3F"
RMC_NO_DATE = "$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,000000,,,A*7D"


def _decode(sentence: str, fix: FixState) -> None:
    fields = split_sentence(sentence)
    assert fields is not None
    decode_rmc(fields, fix)


class TestDecodeRMC:
    """Tests for decode_rmc function."""

    def test_valid_rmc(self):
        fix = FixState()
        assert fix.parse(RMC_VALID) is True
        assert fix.is_valid_gps is True
        assert fix.latitude == pytest.approx(31.47923, abs=1e-5)
        assert fix.longitude == pytest.approx(-142.96119, abs=1e-5)
        assert fix.speed_knots == pytest.approx(27.6)
        assert fix.heading == pytest.approx(107.5)
        assert fix.ddmmyy == 180607
        assert fix.hhmmss == 80701
        assert fix.magnetic_variation == pytest.approx(13.1)
        assert fix.has_type(SentenceType.RMC)
        assert fix.last_type == "GPRMC"

    def test_fixtime_from_date_and_time(self):
        fix = FixState()
        fix.parse(RMC_VALID)
        assert fix.has_fixtime() is True
        assert fix.get_fixtime() == 1182154021

    def test_west_magnetic_variation_is_negative(self):
        fix = FixState()
        assert fix.parse(RMC_WEST_VARIATION) is True
        assert fix.magnetic_variation == pytest.approx(-13.1)

    def test_blank_magnetic_variation_clears(self):
        fix = FixState()
        fix.parse(RMC_VALID)
        _decode("$GPRMC,080702.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,,,A", fix)
        assert fix.magnetic_variation is None

    def test_void_fix(self):
        fix = FixState()
        assert fix.parse(RMC_VOID) is True
        assert fix.is_valid_gps is False
        assert fix.latitude is None
        assert fix.longitude is None
        assert fix.speed_knots is None
        assert fix.heading is None
        assert fix.geo_point is None
        assert fix.ddmmyy == 180607

    def test_void_fix_with_ignore_flag(self):
        fix = FixState(ignore_invalid_gps_flag=True)
        assert fix.parse(RMC_VOID) is True
        assert fix.is_valid_gps is True
        assert fix.did_ignore_invalid_gps() is True
        assert fix.latitude == pytest.approx(31.47923, abs=1e-5)

    def test_stale_indicator_treated_as_valid(self, caplog):
        fix = FixState()
        _decode("$GPRMC,080701.00,L,3128.7540,N,14257.6714,W,27.6,107.5,180607", fix)
        assert fix.is_valid_gps is True
        assert "Unexpected valid GPS fix indicator" in caplog.text

    def test_unparseable_coordinates_invalidate_fix(self):
        fix = FixState()
        _decode("$GPRMC,080701.00,A,,N,,W,27.6,107.5,180607", fix)
        assert fix.is_valid_gps is False
        assert fix.latitude is None
        assert fix.speed_knots is None

    def test_zero_date_is_absent(self):
        fix = FixState()
        assert fix.parse(RMC_NO_DATE) is True
        assert fix.ddmmyy is None
        assert fix.hhmmss == 80701

    def test_zero_date_keeps_previous_date(self):
        fix = FixState()
        fix.parse(RMC_VALID)
        fix.parse(RMC_NO_DATE)
        assert fix.ddmmyy == 180607

    def test_zero_date_and_time_records_neither(self):
        fix = FixState()
        _decode("$GPRMC,000000.000,V,,,,,,,000000", fix)
        assert fix.ddmmyy is None
        assert fix.hhmmss is None

    def test_extra_data(self):
        fix = FixState()
        assert fix.parse(RMC_VALID + ",E1,E2") is True
        assert fix.extra_data == ("E1", "E2")

    def test_extra_data_reset_by_next_sentence(self):
        fix = FixState()
        fix.parse(RMC_VALID + ",E1")
        fix.parse(RMC_VALID)
        assert fix.extra_data is None

    def test_too_few_fields_changes_nothing(self):
        fix = FixState()
        with pytest.raises(InsufficientFieldsError):
            _decode("$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5", fix)
        assert fix.present_fields == frozenset()
        assert fix.has_parsed_types() is False

    def test_reparse_overwrites_previous_values(self):
        fix = FixState()
        fix.parse(RMC_VALID)
        fix.parse(RMC_WEST_VARIATION)
        assert fix.magnetic_variation == pytest.approx(-13.1)
        assert fix.type_names() == "GPRMC"


class TestFormatRMC:
    """Tests for format_rmc function."""

    def test_reproduces_source_sentence(self):
        fix = FixState()
        fix.parse(RMC_VALID)
        assert format_rmc(fix) == (
            "$GPRMC,080701.00,A,3128.75400,N,14257.67140,W,27.6,107.5,180607,13.1,E,A*2D"
        )

    def test_output_parses_back(self):
        fix = FixState()
        fix.parse(RMC_WEST_VARIATION)
        copy = FixState()
        assert copy.parse(format_rmc(fix)) is True
        assert copy.latitude == pytest.approx(fix.latitude, abs=1e-4)
        assert copy.longitude == pytest.approx(fix.longitude, abs=1e-4)
        assert copy.magnetic_variation == pytest.approx(-13.1)
        assert copy.get_fixtime() == fix.get_fixtime()

    def test_void_fix_without_variation(self):
        fix = FixState(clock=lambda: 1182154021.0)
        fix.parse(RMC_VOID)
        fix.set_magnetic_variation(None)
        sentence = format_rmc(fix)
        assert sentence.startswith(
            "$GPRMC,080701.00,V,0000.00000,N,00000.00000,E,0.0,0.0,180607,,,A*"
        )
