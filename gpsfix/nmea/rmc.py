"""RMC sentence decoder and encoder.

RMC (Recommended Minimum Specific GNSS Data) carries the minimum fix: date,
time, validity, position, speed over ground, course, and magnetic variation.
It is the only standard sentence with a date, so fix times usually come
from here.

RMC Sentence Format:
    $GPRMC,080701.00,A,3128.7540,N,14257.6714,W,27.6,107.5,180607,13.1,E,A*2D,E1
           |         | |         | |          | |    |     |      |    | | |   |
           |         | |         | |          | |    |     |      |    | | |   +-- Extra data (optional)
           |         | |         | |          | |    |     |      |    | | +-- Checksum
           |         | |         | |          | |    |     |      |    | +-- Mode indicator (optional)
           |         | |         | |          | |    |     |      +----+-- Magnetic variation + E/W
           |         | |         | |          | |    |     +-- UTC date (DDMMYY)
           |         | |         | |          | |    +-- Course over ground (degrees true)
           |         | |         | |          | +-- Speed over ground (knots)
           |         | |         | +----------+-- Longitude + E/W
           |         | +---------+-- Latitude + N/S
           |         +-- Validity (A=valid, V=void)
           +-- UTC time (HHMMSS.ss)

Validity Indicator:
    A = Valid fix
    V = Void (no fix), unless the fix is set to ignore the void flag
    L = Stale; treated as valid with a warning
    blank or anything else = treated as valid with a warning, then checked
        against the coordinates
"""

import logging
import time

from gpsfix.fix.state import FixState
from gpsfix.geo import format_latitude, format_longitude
from gpsfix.nmea.checksum import calc_xor_checksum, format_checksum
from gpsfix.nmea.fields import (
    SentenceFields,
    parse_float_field,
    parse_int_field,
    parse_latitude,
    parse_longitude,
    require_field_count,
)

logger = logging.getLogger(__name__)

# Tag + 9 fields up to and including the date
_MINIMUM_FIELD_COUNT = 10

# Receivers emit these when they have no date/time yet
_NO_DATE = "000000"
_NO_TIME = "000000.000"


def parse_valid_indicator(indicator: str, state: FixState) -> bool:
    """Interpret the RMC A/V validity letter.

    Args:
        indicator: Raw validity field
        state: Fix whose ignore-invalid setting applies; records when a
            void flag was overridden

    Returns:
        True if the fix should be treated as valid (before the coordinate check)
    """
    indicator = indicator.strip()
    if not indicator:
        logger.warning("Unexpected valid GPS fix indicator: %r", indicator)
        return True
    if indicator == "A":
        return True
    if state.ignore_invalid_gps_flag:
        state.mark_ignored_invalid_gps()
        return True
    if indicator == "V":
        return False
    # "L" (stale) and unknown letters are assumed valid
    logger.warning("Unexpected valid GPS fix indicator: %r", indicator)
    return True


def decode_rmc(sentence: SentenceFields, state: FixState) -> None:
    """Merge an RMC sentence into ``state``.

    Maps NMEA field indices to fix values:
        fields[1]  -> time (HHMMSS.ss), recorded if a date is present or the
                      time is not "000000.000"
        fields[2]  -> validity (A/V)
        fields[3]  -> latitude (DDMM.MMMM), fields[4] -> N/S
        fields[5]  -> longitude (DDDMM.MMMM), fields[6] -> E/W
        fields[7]  -> speed (knots)
        fields[8]  -> heading (degrees)
        fields[9]  -> date (DDMMYY); "000000" means no date
        fields[10] -> magnetic variation, fields[11] -> E/W

    On an invalid fix the position, speed, and heading are cleared.

    Raises:
        InsufficientFieldsError: Fewer than 10 fields (nothing is changed)
    """
    require_field_count(sentence, _MINIMUM_FIELD_COUNT)
    fields = sentence.fields

    valid = parse_valid_indicator(fields[2], state)

    has_date = fields[9].strip() != _NO_DATE
    if has_date:
        state.set_ddmmyy(parse_int_field(fields[9]))
    if has_date or fields[1].strip() != _NO_TIME:
        state.set_hhmmss(parse_int_field(fields[1], 0))

    if valid:
        latitude = parse_latitude(fields[3], fields[4])
        longitude = parse_longitude(fields[5], fields[6])
        valid = state.set_geo_point(latitude, longitude)
    else:
        state.set_geo_point(0.0, 0.0)

    if valid:
        state.set_speed_knots(parse_float_field(fields[7], -1.0))
        state.set_heading(parse_float_field(fields[8], -1.0))
    else:
        state.set_speed_knots(None)
        state.set_heading(None)
    state.set_valid_gps(valid)

    if len(fields) > 11:
        variation = parse_float_field(fields[10])
        if variation is not None and fields[11].strip().upper() == "W":
            variation = -variation
        state.set_magnetic_variation(variation)

    state.set_extra_data(sentence.extra_data)


def format_rmc(state: FixState) -> str:
    """Render the fix as a ``$GPRMC`` sentence with checksum.

    Time and date come from the resolved fix time. Missing position, speed,
    or heading are written as zero; a zero magnetic variation is left blank.

    Example:
        >>> fix = FixState()
        >>> fix.parse("$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,"
        ...           "27.6,107.5,180607,13.1,E,A*2D")
        True
        >>> format_rmc(fix)
        '$GPRMC,080701.00,A,3128.75400,N,14257.67140,W,27.6,107.5,180607,13.1,E,A*2D'
    """
    utc = time.gmtime(state.get_fixtime())
    latitude = state.latitude if state.latitude is not None else 0.0
    longitude = state.longitude if state.longitude is not None else 0.0
    speed = state.speed_knots or 0.0
    heading = state.heading or 0.0
    variation = state.magnetic_variation or 0.0

    parts = [
        "$GPRMC",
        time.strftime("%H%M%S", utc) + ".00",
        "A" if state.is_valid_gps else "V",
        format_latitude(latitude),
        format_longitude(longitude),
        f"{speed:.1f}",
        f"{heading:.1f}",
        time.strftime("%d%m%y", utc),
    ]
    if variation != 0.0:
        parts.append(f"{abs(variation):.1f},{'E' if variation >= 0.0 else 'W'}")
    else:
        parts.append(",")
    parts.append("A")

    body = ",".join(parts)
    return f"{body}*{format_checksum(calc_xor_checksum(body))}"
