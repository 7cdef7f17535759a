"""NMEA 0183 framing: checksums, field parsing, and sentence identifiers."""

from gpsfix.nmea.checksum import calc_xor_checksum, has_valid_checksum, validate_checksum
from gpsfix.nmea.fields import SentenceFields, parse_latitude, parse_longitude, split_sentence
from gpsfix.nmea.types import FixField, SentenceType

__all__ = [
    "FixField",
    "SentenceFields",
    "SentenceType",
    "calc_xor_checksum",
    "has_valid_checksum",
    "parse_latitude",
    "parse_longitude",
    "split_sentence",
    "validate_checksum",
]
