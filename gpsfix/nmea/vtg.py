"""VTG sentence decoder.

VTG (Track Made Good and Ground Speed) provides course and speed over
ground. Its fields come in (value, unit) pairs, so the decoder walks the
pairs and dispatches on the unit letter rather than on fixed positions.

VTG Sentence Format:
    $GPVTG,229.86,T,,M,0.00,N,0.0046,K*55
           |      | | | |    | |      |
           |      | | | |    | +------+-- Speed in km/h
           |      | | | +----+-- Speed in knots
           |      | +-+-- Track (magnetic north, ignored)
           +------+-- Track (true north, degrees)

Note: When stationary, the track angle may be empty (no heading when not
moving); an empty value clears the heading.
"""

from gpsfix.fix.state import KNOTS_PER_KILOMETER, FixState
from gpsfix.nmea.fields import SentenceFields, parse_float_field, require_field_count

# Tag plus at least one (value, unit) pair
_MINIMUM_FIELD_COUNT = 3

_TRUE_COURSE = "T"
_KNOTS = "N"
_KILOMETERS_PER_HOUR = "K"


def decode_vtg(sentence: SentenceFields, state: FixState) -> None:
    """Merge a VTG sentence into ``state``.

    Unit letters:
        "T" -> heading (degrees true)
        "N" -> speed in knots
        "K" -> speed in km/h, stored as knots
        "M" and anything else -> ignored

    When the same quantity appears more than once the last one wins, so a
    trailing km/h value overrides the knots value before it.

    Raises:
        InsufficientFieldsError: Fewer than 3 fields (nothing is changed)
    """
    require_field_count(sentence, _MINIMUM_FIELD_COUNT)
    fields = sentence.fields

    for index in range(1, len(fields) - 1, 2):
        value = parse_float_field(fields[index], -1.0)
        unit = fields[index + 1].strip()
        if unit == _TRUE_COURSE:
            state.set_heading(value)
        elif unit == _KNOTS:
            state.set_speed_knots(value)
        elif unit == _KILOMETERS_PER_HOUR:
            state.set_speed_knots(value * KNOTS_PER_KILOMETER if value >= 0.0 else None)
