"""Tests for NMEA checksum calculation and validation."""

import pytest

from gpsfix.nmea.checksum import (
    calc_xor_checksum,
    format_checksum,
    has_valid_checksum,
    validate_checksum,
)

RMC_VALID = "$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*2D"
ZDA_VALID = "$GPZDA,125653.00,13,09,2007,00,00*6E"
VTG_VALID = "$GPVTG,229.86,T,,M,0.00,N,0.0046,K*55"


class TestCalcXorChecksum:
    """Tests for calc_xor_checksum function."""

    def test_full_sentence(self):
        assert calc_xor_checksum(ZDA_VALID) == 0x6E

    def test_payload_without_marker(self):
        assert calc_xor_checksum("GPZDA,125653.00,13,09,2007,00,00") == 0x6E

    def test_bytes_input(self):
        assert calc_xor_checksum(ZDA_VALID.encode("ascii")) == 0x6E

    def test_stops_at_line_ending(self):
        assert calc_xor_checksum("$GPZDA,125653.00,13,09,2007,00,00\r\nGARBAGE") == 0x6E

    def test_include_all_covers_marker_and_star(self):
        expected = 0x6E ^ ord("$") ^ ord("*")
        assert calc_xor_checksum("$GPZDA,125653.00,13,09,2007,00,00*", include_all=True) == expected

    def test_empty(self):
        assert calc_xor_checksum("") == 0

    def test_non_ascii_bytes_included(self):
        assert calc_xor_checksum("\u00e9") == 0xC3 ^ 0xA9
        assert calc_xor_checksum("GPTXT,\u00e9") != calc_xor_checksum("GPTXT,?")


class TestFormatChecksum:
    """Tests for format_checksum function."""

    def test_two_uppercase_digits(self):
        assert format_checksum(0x2D) == "2D"
        assert format_checksum(0x0A) == "0A"

    def test_masks_to_one_byte(self):
        assert format_checksum(0x1FF) == "FF"


class TestHasValidChecksum:
    """Tests for has_valid_checksum function."""

    def test_valid_sentences(self):
        assert has_valid_checksum(RMC_VALID) is True
        assert has_valid_checksum(VTG_VALID) is True

    def test_lowercase_hex_accepted(self):
        assert has_valid_checksum(ZDA_VALID[:-2] + "6e") is True

    def test_mismatch(self):
        assert has_valid_checksum(RMC_VALID[:-2] + "2E") is False

    def test_missing_checksum_mandatory(self):
        assert has_valid_checksum("$GTSTC,0xF021") is False

    def test_missing_checksum_optional(self):
        assert has_valid_checksum("$GTSTC,0xF021", checksum_optional=True) is True

    def test_present_checksum_verified_even_when_optional(self):
        assert has_valid_checksum("$GTSTC,0xF021*00", checksum_optional=True) is False
        assert has_valid_checksum("$GTSTC,0xF021*46", checksum_optional=True) is True

    def test_truncated_checksum(self):
        assert has_valid_checksum(RMC_VALID[:-1]) is False

    def test_non_hex_checksum(self):
        assert has_valid_checksum(RMC_VALID[:-2] + "ZZ") is False

    def test_extra_data_after_checksum(self):
        assert has_valid_checksum(RMC_VALID + ",E1,E2") is True

    @pytest.mark.parametrize("index", range(1, RMC_VALID.index("*")))
    def test_single_payload_byte_flip_detected(self, index):
        flipped = RMC_VALID[:index] + chr(ord(RMC_VALID[index]) ^ 1) + RMC_VALID[index + 1 :]
        assert has_valid_checksum(flipped) is False


class TestValidateChecksum:
    """Tests for validate_checksum function."""

    def test_valid(self):
        assert validate_checksum(ZDA_VALID) is True

    def test_valid_checksum_with_newline(self):
        assert validate_checksum(ZDA_VALID + "\r\n") is True

    def test_missing_dollar_sign(self):
        assert validate_checksum(ZDA_VALID[1:]) is False

    def test_missing_asterisk(self):
        assert validate_checksum(ZDA_VALID.replace("*", "")) is False

    def test_empty_string(self):
        assert validate_checksum("") is False
