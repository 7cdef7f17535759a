"""GGA sentence decoder.

GGA (Global Positioning System Fix Data) provides position fix information
including coordinates, altitude, fix quality, and satellite/accuracy
metrics. It carries a time of day but no date; the date has to come from
an RMC or ZDA sentence merged into the same fix.

GGA Sentence Format:
    $GPGGA,025425.494,3509.0743,N,14207.6314,W,1,04,2.3,530.3,M,-21.9,M,0.0,0000*45
           |          |         | |          | | |  |   |     | |     | |   |
           |          |         | |          | | |  |   |     | |     | |   +-- DGPS station ID (ignored)
           |          |         | |          | | |  |   |     | |     | +-- DGPS age (ignored)
           |          |         | |          | | |  |   |     | +-----+-- Geoid separation (ignored)
           |          |         | |          | | |  |   +-----+-- Altitude above MSL + unit
           |          |         | |          | | |  +-- HDOP (horizontal dilution)
           |          |         | |          | | +-- Number of satellites
           |          |         | |          | +-- Fix quality (0-6)
           |          |         | +----------+-- Longitude + E/W
           |          +---------+-- Latitude + N/S
           +-- UTC time (HHMMSS.ss)

Fix Quality Values:
    0 = Invalid (no fix)
    1 = GPS fix (SPS - Standard Positioning Service)
    2 = DGPS fix (Differential GPS)
    3 = PPS fix
    6 = Dead reckoning mode
"""

from gpsfix.fix.state import FixState
from gpsfix.nmea.fields import (
    SentenceFields,
    parse_float_field,
    parse_int_field,
    parse_latitude,
    parse_longitude,
    require_field_count,
)

# GGA sentences have 14 standard fields (indices 0-13); the station ID may
# be cut off by some receivers
_MINIMUM_FIELD_COUNT = 14

_NO_FIX = "0"


def decode_gga(sentence: SentenceFields, state: FixState) -> None:
    """Merge a GGA sentence into ``state``.

    Maps NMEA field indices to fix values:
        fields[1] -> time (HHMMSS.ss)
        fields[2] -> latitude (DDMM.MMMM), fields[3] -> N/S
        fields[4] -> longitude (DDDMM.MMMM), fields[5] -> E/W
        fields[6] -> fix quality; "0" means no fix
        fields[7] -> number of satellites
        fields[8] -> HDOP
        fields[9] -> altitude (meters)

    A fix quality of exactly "0" makes the fix invalid whatever the
    coordinates say, and clears fix type, satellites, HDOP, and altitude.
    A blank fix quality on a valid fix is recorded as 1 (GPS).

    Raises:
        InsufficientFieldsError: Fewer than 14 fields (nothing is changed)
    """
    require_field_count(sentence, _MINIMUM_FIELD_COUNT)
    fields = sentence.fields

    valid = fields[6].strip() != _NO_FIX

    state.set_hhmmss(parse_int_field(fields[1], 0))

    if valid:
        latitude = parse_latitude(fields[2], fields[3])
        longitude = parse_longitude(fields[4], fields[5])
        valid = state.set_geo_point(latitude, longitude)
        if valid:
            state.set_fix_type(parse_int_field(fields[6], 1))
            state.set_num_satellites(parse_int_field(fields[7], -1))
            state.set_hdop(parse_float_field(fields[8], -1.0))
            state.set_altitude_meters(parse_float_field(fields[9], 0.0))
    else:
        state.set_geo_point(0.0, 0.0)
        state.set_fix_type(None)
        state.set_num_satellites(None)
        state.set_hdop(None)
        state.set_altitude_meters(None)
    state.set_valid_gps(valid)

    state.set_extra_data(sentence.extra_data)
