"""Tests for ZDA sentence decoding."""

import pytest

from gpsfix import FixState, SentenceType
from gpsfix.errors import InsufficientFieldsError
from gpsfix.nmea.fields import split_sentence
from gpsfix.nmea.zda import decode_zda

ZDA_VALID = "$GPZDA,125653.00,13,09,2007,00,00*6E"


class TestDecodeZDA:
    """Tests for decode_zda function."""

    def test_date_and_time(self):
        fix = FixState()
        assert fix.parse(ZDA_VALID) is True
        assert fix.ddmmyy == 130907
        assert fix.hhmmss == 125653
        assert fix.get_fixtime() == 1189688213  # 2007-09-13T12:56:53Z
        assert fix.has_type(SentenceType.ZDA)

    def test_zone_fields_optional(self):
        fix = FixState()
        fields = split_sentence("$GPZDA,000102,01,01,2000")
        assert fields is not None
        decode_zda(fields, fix)
        assert fix.ddmmyy == 10100
        assert fix.hhmmss == 102

    def test_does_not_touch_position(self):
        fix = FixState()
        fix.parse("$GPGGA,025425.494,3509.0743,N,14207.6314,W,1,04,2.3,530.3,M,-21.9,M,0.0,0000*45")
        fix.parse(ZDA_VALID)
        assert fix.latitude == pytest.approx(35.15123833, abs=1e-7)
        assert fix.hhmmss == 125653

    def test_too_few_fields(self):
        fields = split_sentence("$GPZDA,125653.00,13,09")
        assert fields is not None
        with pytest.raises(InsufficientFieldsError):
            decode_zda(fields, FixState())
