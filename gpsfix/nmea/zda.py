"""ZDA sentence decoder.

ZDA (Time & Date) carries the UTC time and a full calendar date, which
completes the fix time for receivers that report position through GGA.

ZDA Sentence Format:
    $GPZDA,125653.00,13,09,2007,00,00*6E
           |         |  |  |    |  |
           |         |  |  |    |  +-- Local zone minutes (ignored)
           |         |  |  |    +-- Local zone hours (ignored)
           |         |  |  +-- Year (4 digits)
           |         |  +-- Month (01-12)
           |         +-- Day (01-31)
           +-- UTC time (HHMMSS.ss)
"""

from gpsfix.fix.state import FixState
from gpsfix.nmea.fields import SentenceFields, parse_int_field, require_field_count

# Tag, time, day, month, year; the zone fields are optional
_MINIMUM_FIELD_COUNT = 5


def decode_zda(sentence: SentenceFields, state: FixState) -> None:
    """Merge a ZDA sentence's date and time into ``state``.

    The day and month are taken modulo 100 and the 4-digit year is reduced
    to two digits, giving the same DDMMYY date code RMC uses.

    Raises:
        InsufficientFieldsError: Fewer than 5 fields (nothing is changed)
    """
    require_field_count(sentence, _MINIMUM_FIELD_COUNT)
    fields = sentence.fields

    day = parse_int_field(fields[2], 0) % 100
    month = parse_int_field(fields[3], 0) % 100
    year = parse_int_field(fields[4], 0) % 10000
    state.set_ddmmyy(day * 10000 + month * 100 + year % 100)
    state.set_hhmmss(parse_int_field(fields[1], 0))
