"""NMEA field tokenizing and parsing utilities.

This module splits a sentence into its comma-separated fields and parses
individual fields. NMEA fields may be empty (consecutive commas indicate
missing data), and receivers occasionally emit garbage in a numeric field.
Neither case is an error here: the parsing helpers return a caller-supplied
default, so one bad sub-field degrades a value instead of rejecting the
whole sentence.
"""

import math
from dataclasses import dataclass, field

from gpsfix.errors import InsufficientFieldsError

# Raw degree-minute values at or above this are treated as unparseable.
COORDINATE_SENTINEL = 99999.0

DEFAULT_LATITUDE = 90.0
DEFAULT_LONGITUDE = 180.0


@dataclass
class SentenceFields:
    """A sentence split into its position-preserving fields.

    Attributes:
        fields: Payload fields in order. ``fields[0]`` is the tag without the
            leading '$' (e.g. "GPRMC"). Empty fields are kept as "" so that
            index N always exists for a sentence with more than N fields.

        checksum: The text following '*' up to the next comma, or None if
            the sentence carries no '*'.

        extra_data: Comma-fields that follow the checksum token, verbatim.
            Empty when nothing follows the checksum.
    """

    fields: list[str]
    checksum: str | None = None
    extra_data: list[str] = field(default_factory=list)

    @property
    def tag(self) -> str:
        return self.fields[0]

    def __len__(self) -> int:
        return len(self.fields)


def sentence_tag(sentence: str) -> str:
    """Return the tag of a sentence without '$' (e.g. "GPGGA").

    Example:
        >>> sentence_tag("$GPGGA,123519,...*47")
        'GPGGA'
    """
    payload = sentence[1:] if sentence.startswith("$") else sentence
    return payload.split("*", 1)[0].split(",", 1)[0].strip()


def split_sentence(sentence: str) -> SentenceFields | None:
    """Split a sentence into payload fields, checksum, and extra data.

    The payload (text between '$' and '*') is split on commas. The token
    after '*' is the checksum; anything after a further comma is extra data.

    Args:
        sentence: Raw sentence, with or without trailing CR/LF.

    Returns:
        SentenceFields, or None if the sentence has no tag field at all.

    Example:
        Input: "$GPGGA,025425.494,...,0000*45,E1"
        Output: SentenceFields(fields=["GPGGA", "025425.494", ..., "0000"],
                               checksum="45", extra_data=["E1"])
    """
    sentence = sentence.strip()
    if sentence.startswith("$"):
        sentence = sentence[1:]

    payload, star, trailer = sentence.partition("*")
    fields = payload.split(",")
    if len(fields) < 1 or not fields[0]:
        return None

    checksum: str | None = None
    extra_data: list[str] = []
    if star:
        checksum, *extra_data = trailer.split(",")

    return SentenceFields(fields=fields, checksum=checksum, extra_data=extra_data)


def parse_float_field(value: str, default: float | None = None) -> float | None:
    """Parse a string field to float, returning ``default`` if empty or invalid.

    Args:
        value: String value from an NMEA field
        default: Value returned for an empty or unparseable field

    Returns:
        Parsed float value, or ``default``

    Example:
        >>> parse_float_field("545.4")
        545.4
        >>> parse_float_field("", -1.0)
        -1.0
    """
    value = value.strip()
    if not value:
        return default
    try:
        result = float(value)
    except ValueError:
        return default
    if not math.isfinite(result):
        return default
    return result


def parse_int_field(value: str, default: int | None = None) -> int | None:
    """Parse a string field to int, returning ``default`` if empty or invalid.

    Accepts decimal, a ``0x``-prefixed hex form (used by vendor status
    codes), and decimal with a fractional part, which is truncated (used
    by ``HHMMSS.ss`` time codes).

    Args:
        value: String value from an NMEA field
        default: Value returned for an empty or unparseable field

    Returns:
        Parsed integer value, or ``default``

    Example:
        >>> parse_int_field("0xF021")
        61473
        >>> parse_int_field("080701.00")
        80701
        >>> parse_int_field("", 0)
        0
    """
    value = value.strip()
    if not value:
        return default

    sign = 1
    digits = value
    if digits[0] in "+-":
        sign = -1 if digits[0] == "-" else 1
        digits = digits[1:]

    try:
        if digits[:2].lower() == "0x":
            return sign * int(digits[2:], 16)
        if "." in digits:
            return sign * int(float(digits))
        return sign * int(digits)
    except (ValueError, OverflowError):
        return default


def parse_string_field(value: str) -> str | None:
    """Parse a string field, returning None if blank; otherwise trimmed.

    Example:
        >>> parse_string_field(" 1234567890 ")
        '1234567890'
        >>> parse_string_field("")
        None
    """
    value = value.strip()
    if not value:
        return None
    return value


def field_at(fields: list[str], index: int) -> str:
    """Return ``fields[index]``, or "" when the sentence is shorter."""
    if index < len(fields):
        return fields[index]
    return ""


def parse_coordinate(value: str, hemisphere: str, default: float) -> float:
    """Convert an NMEA degree-minute coordinate to signed decimal degrees.

    NMEA coordinates use DDMM.MMMM (latitude) or DDDMM.MMMM (longitude)
    format where the last two digits before the decimal point and the
    fraction are minutes. Splitting the raw number at hundreds therefore
    yields degrees for both axes:

        decimal_degrees = int(raw / 100) + (raw - 100 * int(raw / 100)) / 60

    The sign convention is:
    - North/East = positive
    - South/West = negative

    Args:
        value: Coordinate in DDMM.MMMM or DDDMM.MMMM format (e.g. "4807.038")
        hemisphere: Hemisphere indicator ("N", "S", "E", or "W"; any case)
        default: Returned unchanged when the value is empty, unparseable,
            or at/above ``COORDINATE_SENTINEL``

    Returns:
        Decimal degrees (negative for S/W), or ``default``

    Example:
        >>> parse_coordinate("4807.038", "N", 90.0)
        48.1173  # 48° + 7.038'/60
        >>> parse_coordinate("01131.000", "W", 180.0)
        -11.5166667  # negative for West
    """
    raw = parse_float_field(value, COORDINATE_SENTINEL)
    if raw is None or raw >= COORDINATE_SENTINEL:
        return default

    degrees = float(int(raw / 100))
    degrees += (raw - degrees * 100.0) / 60.0

    if hemisphere.strip().upper() in ("S", "W"):
        return -degrees
    return degrees


def parse_latitude(value: str, hemisphere: str, default: float = DEFAULT_LATITUDE) -> float:
    """Parse a DDMM.MMMM latitude; ``default`` (90.0) marks it unparseable."""
    return parse_coordinate(value, hemisphere, default)


def parse_longitude(
    value: str,
    hemisphere: str,
    default: float = DEFAULT_LONGITUDE,
) -> float:
    """Parse a DDDMM.MMMM longitude; ``default`` (180.0) marks it unparseable."""
    return parse_coordinate(value, hemisphere, default)


def require_field_count(sentence: SentenceFields, minimum: int) -> None:
    """Raise ``InsufficientFieldsError`` if the sentence is too short.

    Decoders call this before touching the fix so that a truncated
    sentence never partially applies.
    """
    if len(sentence) < minimum:
        raise InsufficientFieldsError(sentence.tag, minimum, len(sentence))
