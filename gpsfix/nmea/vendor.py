"""Decoders for the GT vendor extension sentences.

These sentences reuse the NMEA framing to carry device data that has no
standard sentence: a unit identifier, a status code, and a self-contained
event record. Devices often send them without a checksum, so they are
registered as checksum-optional.

Sentence Formats:
    $GTUID,1234567890
           +-- Unique (mobile) ID

    $GTSTC,0xF021
           +-- Status code (hex with 0x prefix, or decimal)

    $GTEVT,1311546722,0xF022,39.1234,-142.1234,45.0,121.0,1008,5,1.1,6
           |          |      |       |         |    |     |    | |   |
           |          |      |       |         |    |     |    | |   +-- Satellites
           |          |      |       |         |    |     |    | +-- HDOP
           |          |      |       |         |    |     |    +-- GPS age (seconds)
           |          |      |       |         |    |     +-- Altitude (meters)
           |          |      |       |         |    +-- Heading (degrees)
           |          |      |       |         +-- Speed (km/h)
           |          |      |       +-- Longitude (decimal degrees)
           |          |      +-- Latitude (decimal degrees)
           |          +-- Status code
           +-- Fix time (epoch seconds)

Unlike the standard sentences, GTEVT coordinates are plain decimal
degrees, not DDMM.MMMM.
"""

from gpsfix.fix.state import KNOTS_PER_KILOMETER, STATUS_NONE, FixState
from gpsfix.nmea.fields import (
    SentenceFields,
    field_at,
    parse_float_field,
    parse_int_field,
    require_field_count,
)

_UID_MINIMUM_FIELD_COUNT = 2
_STC_MINIMUM_FIELD_COUNT = 2
# Time, status, latitude, and longitude are required
_EVT_MINIMUM_FIELD_COUNT = 5


def decode_gtuid(sentence: SentenceFields, state: FixState) -> None:
    """Set the mobile ID; a blank ID clears it."""
    require_field_count(sentence, _UID_MINIMUM_FIELD_COUNT)
    state.set_mobile_id(sentence.fields[1])


def decode_gtstc(sentence: SentenceFields, state: FixState) -> None:
    """Set the status code, masked to 16 bits; zero or negative means no status."""
    require_field_count(sentence, _STC_MINIMUM_FIELD_COUNT)
    state.set_status_code(parse_int_field(sentence.fields[1], STATUS_NONE))


def decode_gtevt(sentence: SentenceFields, state: FixState) -> None:
    """Merge a GTEVT event record into ``state``.

    The epoch time becomes an explicit fix time, overriding anything derived
    from date and time fields. Optional trailing fields that are missing or
    blank leave the corresponding values as they were.

    Raises:
        InsufficientFieldsError: Fewer than 5 fields (nothing is changed)
    """
    require_field_count(sentence, _EVT_MINIMUM_FIELD_COUNT)
    fields = sentence.fields

    state.set_fixtime(parse_int_field(fields[1], 0))
    state.set_status_code(parse_int_field(fields[2], STATUS_NONE))

    latitude = parse_float_field(fields[3], 0.0)
    longitude = parse_float_field(fields[4], 0.0)
    state.set_valid_gps(state.set_geo_point(latitude, longitude))

    speed_kph = field_at(fields, 5)
    if speed_kph.strip():
        kph = parse_float_field(speed_kph, -1.0)
        state.set_speed_knots(kph * KNOTS_PER_KILOMETER if kph >= 0.0 else None)

    heading = field_at(fields, 6)
    if heading.strip():
        state.set_heading(parse_float_field(heading, -1.0))

    altitude = field_at(fields, 7)
    if altitude.strip():
        state.set_altitude_meters(parse_float_field(altitude, 0.0))

    gps_age = field_at(fields, 8)
    if gps_age.strip():
        state.set_gps_age(parse_int_field(gps_age, -1))

    hdop = field_at(fields, 9)
    if hdop.strip():
        state.set_hdop(parse_float_field(hdop, -1.0))

    satellites = field_at(fields, 10)
    if satellites.strip():
        state.set_num_satellites(parse_int_field(satellites, 0))
