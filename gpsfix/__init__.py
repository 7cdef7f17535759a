"""Decoder for NMEA 0183 GPS sentences merged into a single fix record."""

from gpsfix.dispatcher import (
    CustomSentenceRegistry,
    SentenceDecoder,
    SentenceDispatcher,
)
from gpsfix.errors import (
    ChecksumMismatchError,
    DecoderError,
    InsufficientFieldsError,
    MalformedSentenceError,
    NmeaError,
    UnsupportedSentenceTypeError,
)
from gpsfix.fix import FixState, parse_fixtime, resolve_fixtime
from gpsfix.geo import GeoFix, is_valid_point
from gpsfix.nmea import FixField, SentenceType, calc_xor_checksum, validate_checksum
from gpsfix.nmea.rmc import format_rmc

__all__ = [
    "ChecksumMismatchError",
    "CustomSentenceRegistry",
    "DecoderError",
    "FixField",
    "FixState",
    "GeoFix",
    "InsufficientFieldsError",
    "MalformedSentenceError",
    "NmeaError",
    "SentenceDecoder",
    "SentenceDispatcher",
    "SentenceType",
    "UnsupportedSentenceTypeError",
    "calc_xor_checksum",
    "format_rmc",
    "is_valid_point",
    "parse_fixtime",
    "resolve_fixtime",
    "validate_checksum",
]
