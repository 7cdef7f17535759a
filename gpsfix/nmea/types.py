"""Field and sentence-type identifiers for an accumulated fix.

Design Decisions:
    1. Two separate identifier sets: ``FixField`` names a value slot in a
       ``FixState`` (presence follows the value, so it can be cleared), while
       ``SentenceType`` names a sentence family that has been decoded into
       that state (only ever grows). Keeping them apart prevents a re-parse
       that clears a field from also "forgetting" which sentences were seen.

    2. ``SentenceType`` is a ``Flag`` so the parsed-type set can be held in a
       single value and combined with ``|``. ``FixField`` is a plain ``Enum``
       held in a ``set``; fields are never combined arithmetically.

    3. Eight custom slots are reserved for caller-registered sentence tags.
"""

import enum


class FixField(enum.Enum):
    """One logical value slot of a ``FixState``."""

    RECORD_TYPE = "record_type"
    VALID_FIX = "valid_fix"
    DATE = "date"
    TIME = "time"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"
    SPEED = "speed"
    HEADING = "heading"
    HDOP = "hdop"
    NUM_SATELLITES = "num_satellites"
    ALTITUDE = "altitude"
    FIX_TYPE = "fix_type"
    MAGNETIC_VARIATION = "magnetic_variation"
    RECORD_VERSION = "record_version"
    MOBILE_ID = "mobile_id"
    EVENT_CODE = "event_code"
    STATUS_CODE = "status_code"
    GPS_AGE = "gps_age"


class SentenceType(enum.Flag):
    """Sentence families that can be decoded into a ``FixState``.

    Standard NMEA 0183 types:
        RMC = Recommended minimum specific GPS data (minimum fix)
        GGA = Global positioning system fix data
        VTG = Track made good and ground speed
        ZDA = UTC date and time

    Vendor extension types (``$GT`` family):
        GTUID = Unique device identifier
        GTSTC = Status code
        GTEVT = Event record with plain decimal coordinates
    """

    NONE = 0
    RMC = enum.auto()
    GGA = enum.auto()
    VTG = enum.auto()
    ZDA = enum.auto()
    GTUID = enum.auto()
    GTSTC = enum.auto()
    GTEVT = enum.auto()
    CUSTOM_1 = enum.auto()
    CUSTOM_2 = enum.auto()
    CUSTOM_3 = enum.auto()
    CUSTOM_4 = enum.auto()
    CUSTOM_5 = enum.auto()
    CUSTOM_6 = enum.auto()
    CUSTOM_7 = enum.auto()
    CUSTOM_8 = enum.auto()


# Slots handed out, in order, to caller-registered sentence tags.
CUSTOM_SLOTS = (
    SentenceType.CUSTOM_1,
    SentenceType.CUSTOM_2,
    SentenceType.CUSTOM_3,
    SentenceType.CUSTOM_4,
    SentenceType.CUSTOM_5,
    SentenceType.CUSTOM_6,
    SentenceType.CUSTOM_7,
    SentenceType.CUSTOM_8,
)
