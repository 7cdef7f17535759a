"""FixState: the mutable record that successive sentences are merged into.

A GPS receiver spreads one fix across several sentences: RMC carries the
date, GGA the altitude and satellite count, VTG the speed, and so on. A
``FixState`` accumulates them. Every successful parse overwrites the fields
that sentence carries (last write wins) and leaves the others alone.

Two pieces of bookkeeping are kept apart:

* Field presence: a set of ``FixField``. A getter returns ``None`` unless
  its field is present. Setters reject out-of-domain values by clearing the
  field rather than storing them.
* Parsed sentence types: a ``SentenceType`` flag that only ever grows. A
  later sentence may clear a field, but never un-records a sentence type.

A ``FixState`` is not reset between sentences; create a new one per fix
when fixes must not bleed into each other. It is not safe for concurrent
mutation: callers sharing one across threads must serialize ``parse``.
"""

import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gpsfix.fix.fixtime import Clock, resolve_fixtime
from gpsfix.geo import GeoFix, PointValidator, is_valid_point
from gpsfix.nmea.types import FixField, SentenceType

if TYPE_CHECKING:
    from gpsfix.dispatcher import SentenceDispatcher

logger = logging.getLogger(__name__)

KILOMETERS_PER_KNOT = 1.852
KNOTS_PER_KILOMETER = 1.0 / KILOMETERS_PER_KNOT

STATUS_NONE = 0
STATUS_CODE_MASK = 0xFFFF

_MIN_DDMMYY = 10100  # 01/01/00: day and month must be specified
_MAX_DDMMYY = 311299
_MAX_HHMMSS = 240000
_MIN_ALTITUDE_METERS = -20000.0
_MAX_ALTITUDE_METERS = 50000.0
_MAX_MAGNETIC_VARIATION = 180.0

_NO_TYPES = "NONE"


class FixState:
    """Accumulated position, motion, time, and status from parsed sentences.

    Args:
        is_valid_point: Predicate deciding whether a (lat, lon) pair is a
            usable position. Every coordinate assignment goes through it.
        dispatcher: Dispatcher used by ``parse``. Defaults to a shared
            dispatcher that knows only the built-in sentence types.
        ignore_invalid_gps_flag: Treat an RMC "V" (void) flag as valid and
            record that the override happened.
        clock: Source of the current epoch time, used when the fix time has
            to be derived without a date or time.

    Example:
        >>> fix = FixState()
        >>> fix.parse("$GPRMC,080701.00,A,3128.7540,N,14257.6714,W,"
        ...           "27.6,107.5,180607,13.1,E,A*2D")
        True
        >>> round(fix.latitude, 5), fix.speed_knots
        (31.47923, 27.6)
        >>> fix.has_type(SentenceType.RMC)
        True
    """

    def __init__(
        self,
        is_valid_point: PointValidator = is_valid_point,
        dispatcher: "SentenceDispatcher | None" = None,
        ignore_invalid_gps_flag: bool = False,
        clock: Clock = time.time,
    ) -> None:
        self._is_valid_point = is_valid_point
        self._dispatcher = dispatcher
        self._clock = clock

        self._present: set[FixField] = set()
        self._parsed_types = SentenceType.NONE
        self._type_tags: dict[SentenceType, str] = {}
        self._last_type = ""
        self._checksum_ok = False

        self._ignore_invalid_gps_flag = ignore_invalid_gps_flag
        self._ignored_invalid_gps = False
        self._valid_gps = False

        self._ddmmyy = 0
        self._hhmmss = 0
        self._fixtime = 0
        self._fixtime_explicit = False

        self._latitude = 0.0
        self._longitude = 0.0
        self._speed_knots = 0.0
        self._heading = 0.0
        self._hdop = 0.0
        self._num_satellites = 0
        self._altitude_meters = 0.0
        self._fix_type = 0
        self._magnetic_variation = 0.0
        self._gps_age = 0

        self._record_version: str | None = None
        self._mobile_id: str | None = None
        self._event_code: Any = None
        self._status_code = STATUS_NONE

        self._extra_data: tuple[str, ...] | None = None

    # --- parsing --------------------------------------------------------------

    def parse(self, sentences: str | Iterable[str], ignore_checksum: bool = False) -> bool:
        """Merge one sentence, or each of a sequence of sentences, into this fix.

        A batch is a sequential fold: every sentence is attempted, a failure
        does not stop the rest, and the result is True only if all succeeded
        (and the batch was not empty).

        Returns:
            True if the sentence (every sentence) was decoded.
        """
        dispatcher = self._dispatcher
        if dispatcher is None:
            from gpsfix.dispatcher import default_dispatcher

            dispatcher = default_dispatcher()
        if isinstance(sentences, str):
            return dispatcher.parse(self, sentences, ignore_checksum)
        return dispatcher.parse_all(self, sentences, ignore_checksum)

    # --- field presence -------------------------------------------------------

    def has(self, fix_field: FixField) -> bool:
        """Return True if ``fix_field`` currently holds a defined value."""
        return fix_field in self._present

    @property
    def present_fields(self) -> frozenset[FixField]:
        return frozenset(self._present)

    def _set(self, fix_field: FixField) -> None:
        self._present.add(fix_field)

    def _clear(self, fix_field: FixField) -> None:
        self._present.discard(fix_field)

    # --- parsed sentence types ------------------------------------------------

    def mark_parsed(self, kind: SentenceType, tag: str, checksum_ok: bool = True) -> None:
        """Record that a sentence of ``kind`` (tagged ``tag``) was decoded.

        The parsed-type set only grows; this never removes a type.
        """
        self._parsed_types |= kind
        self._type_tags.setdefault(kind, tag)
        self._last_type = tag
        self._checksum_ok = checksum_ok
        self._set(FixField.RECORD_TYPE)

    @property
    def parsed_types(self) -> SentenceType:
        return self._parsed_types

    def has_parsed_types(self) -> bool:
        return self._parsed_types != SentenceType.NONE

    def has_type(self, kind: SentenceType | str) -> bool:
        """Return True if a sentence of ``kind`` has ever been decoded here.

        Args:
            kind: A ``SentenceType``, or a tag such as "GPRMC" or "$GPRMC".
        """
        if isinstance(kind, str):
            return kind.lstrip("$") in self._type_tags.values()
        return kind != SentenceType.NONE and (self._parsed_types & kind) == kind

    @property
    def parsed_tags(self) -> list[str]:
        """Tags of the decoded sentence types, built-ins first, in type order."""
        order = list(SentenceType)
        kinds = sorted(self._type_tags, key=order.index)
        return [self._type_tags[kind] for kind in kinds]

    def type_names(self) -> str:
        """Return the decoded tags as "GPRMC,GPGGA,...", or "NONE"."""
        return ",".join(self.parsed_tags) or _NO_TYPES

    @property
    def last_type(self) -> str:
        """Tag of the most recently decoded sentence ("" if none)."""
        return self._last_type

    @property
    def checksum_ok(self) -> bool:
        """False if the last decoded sentence was accepted despite a bad checksum."""
        return self._checksum_ok

    # --- date / time ----------------------------------------------------------

    @property
    def ddmmyy(self) -> int | None:
        return self._ddmmyy if self.has(FixField.DATE) else None

    def set_ddmmyy(self, ddmmyy: int | None) -> None:
        self._invalidate_fixtime()
        if ddmmyy is not None and _MIN_DDMMYY <= ddmmyy <= _MAX_DDMMYY:
            self._ddmmyy = ddmmyy
            self._set(FixField.DATE)
        else:
            self._ddmmyy = 0
            self._clear(FixField.DATE)

    @property
    def hhmmss(self) -> int | None:
        return self._hhmmss if self.has(FixField.TIME) else None

    def set_hhmmss(self, hhmmss: int | None) -> None:
        self._invalidate_fixtime()
        if hhmmss is not None and 0 <= hhmmss < _MAX_HHMMSS:
            self._hhmmss = hhmmss
            self._set(FixField.TIME)
        else:
            self._hhmmss = 0
            self._clear(FixField.TIME)

    def _invalidate_fixtime(self) -> None:
        self._fixtime = 0
        self._fixtime_explicit = False

    def has_fixtime(self) -> bool:
        """True if an explicit fix time was set, or both date and time are present."""
        if self._fixtime_explicit:
            return True
        return self.has(FixField.DATE) and self.has(FixField.TIME)

    def get_fixtime(self, default_to_current_tod: bool = False) -> int:
        """Return the fix time in epoch seconds, resolving it on first use.

        Without a date the current UTC day is assumed (see
        ``gpsfix.fix.fixtime``); without either, the current time.
        """
        if self._fixtime > 0:
            return self._fixtime
        fixtime = resolve_fixtime(
            self.ddmmyy,
            self.hhmmss,
            default_to_current_tod,
            self._clock,
        )
        # the current time is a fallback, not a property of this fix
        if self.has(FixField.DATE) or self.has(FixField.TIME):
            self._fixtime = fixtime
        return fixtime

    @property
    def fixtime(self) -> int:
        return self.get_fixtime()

    def set_fixtime(self, timestamp: int | None) -> None:
        """Set an explicit epoch fix time and back-fill the date and time fields.

        A value that is not positive, or too large to convert, clears both.
        """
        if timestamp is None or timestamp <= 0:
            self.set_hhmmss(None)
            self.set_ddmmyy(None)
            return
        try:
            utc = time.gmtime(timestamp)
        except (OverflowError, OSError, ValueError):
            logger.warning("Fix time out of range: %r", timestamp)
            self.set_hhmmss(None)
            self.set_ddmmyy(None)
            return
        self.set_hhmmss(utc.tm_hour * 10000 + utc.tm_min * 100 + utc.tm_sec)
        self.set_ddmmyy(utc.tm_mday * 10000 + utc.tm_mon * 100 + utc.tm_year % 100)
        self._fixtime = timestamp
        self._fixtime_explicit = True

    # --- validity / position --------------------------------------------------

    @property
    def ignore_invalid_gps_flag(self) -> bool:
        return self._ignore_invalid_gps_flag

    @ignore_invalid_gps_flag.setter
    def ignore_invalid_gps_flag(self, ignore: bool) -> None:
        self._ignore_invalid_gps_flag = ignore
        self._ignored_invalid_gps = False

    def mark_ignored_invalid_gps(self) -> None:
        """Record that a void validity flag was overridden to valid."""
        self._ignored_invalid_gps = True

    @property
    def is_valid_gps(self) -> bool:
        return self.has(FixField.VALID_FIX) and self._valid_gps

    def set_valid_gps(self, valid: bool) -> None:
        self._valid_gps = valid
        self._set(FixField.VALID_FIX)

    def did_ignore_invalid_gps(self) -> bool:
        """True if the fix is valid only because a void flag was overridden."""
        return self._valid_gps and self._ignored_invalid_gps

    @property
    def latitude(self) -> float | None:
        return self._latitude if self.has(FixField.LATITUDE) else None

    @property
    def longitude(self) -> float | None:
        return self._longitude if self.has(FixField.LONGITUDE) else None

    def has_geo_point(self) -> bool:
        if not (self.has(FixField.LATITUDE) and self.has(FixField.LONGITUDE)):
            return False
        return self._is_valid_point(self._latitude, self._longitude)

    @property
    def geo_point(self) -> GeoFix | None:
        if not self.has_geo_point():
            return None
        return GeoFix(self._latitude, self._longitude)

    def is_valid_point(self, latitude: float, longitude: float) -> bool:
        return self._is_valid_point(latitude, longitude)

    def set_geo_point(self, latitude: float, longitude: float) -> bool:
        """Store a position if the validity predicate accepts it.

        A rejected pair zeroes and clears both coordinates and marks the fix
        invalid.

        Returns:
            True if the position was accepted.
        """
        if self._is_valid_point(latitude, longitude):
            self._latitude = latitude
            self._longitude = longitude
            self._set(FixField.LATITUDE)
            self._set(FixField.LONGITUDE)
            self._valid_gps = True
            self._set(FixField.VALID_FIX)
            return True
        self._latitude = 0.0
        self._longitude = 0.0
        self._clear(FixField.LATITUDE)
        self._clear(FixField.LONGITUDE)
        self._valid_gps = False
        self._set(FixField.VALID_FIX)
        self._ignored_invalid_gps = False
        return False

    # --- motion ---------------------------------------------------------------

    @property
    def speed_knots(self) -> float | None:
        return self._speed_knots if self.has(FixField.SPEED) else None

    @property
    def speed_kph(self) -> float | None:
        if not self.has(FixField.SPEED):
            return None
        return self._speed_knots * KILOMETERS_PER_KNOT

    def set_speed_knots(self, knots: float | None) -> None:
        if knots is not None and knots >= 0.0:
            self._speed_knots = knots
            self._set(FixField.SPEED)
        else:
            self._speed_knots = 0.0
            self._clear(FixField.SPEED)

    def set_speed_kph(self, kph: float | None) -> None:
        if kph is None or kph < 0.0:
            self.set_speed_knots(None)
        else:
            self.set_speed_knots(kph * KNOTS_PER_KILOMETER)

    @property
    def heading(self) -> float | None:
        return self._heading if self.has(FixField.HEADING) else None

    def set_heading(self, degrees: float | None) -> None:
        if degrees is not None and degrees >= 0.0:
            self._heading = degrees
            self._set(FixField.HEADING)
        else:
            self._heading = 0.0
            self._clear(FixField.HEADING)

    # --- fix quality ----------------------------------------------------------

    @property
    def fix_type(self) -> int | None:
        """GGA fix quality (1=GPS, 2=DGPS, 3=PPS, 6=dead reckoning, ...)."""
        return self._fix_type if self.has(FixField.FIX_TYPE) else None

    def set_fix_type(self, fix_type: int | None) -> None:
        if fix_type is not None and fix_type > 0:
            self._fix_type = fix_type
            self._set(FixField.FIX_TYPE)
        else:
            self._fix_type = 0
            self._clear(FixField.FIX_TYPE)

    @property
    def num_satellites(self) -> int | None:
        return self._num_satellites if self.has(FixField.NUM_SATELLITES) else None

    def set_num_satellites(self, count: int | None) -> None:
        if count is not None and count > 0:
            self._num_satellites = count
            self._set(FixField.NUM_SATELLITES)
        else:
            self._num_satellites = 0
            self._clear(FixField.NUM_SATELLITES)

    @property
    def hdop(self) -> float | None:
        return self._hdop if self.has(FixField.HDOP) else None

    def set_hdop(self, hdop: float | None) -> None:
        if hdop is not None and hdop >= 0.0:
            self._hdop = hdop
            self._set(FixField.HDOP)
        else:
            self._hdop = 0.0
            self._clear(FixField.HDOP)

    @property
    def altitude_meters(self) -> float | None:
        return self._altitude_meters if self.has(FixField.ALTITUDE) else None

    def set_altitude_meters(self, meters: float | None) -> None:
        if meters is not None and _MIN_ALTITUDE_METERS < meters < _MAX_ALTITUDE_METERS:
            self._altitude_meters = meters
            self._set(FixField.ALTITUDE)
        else:
            self._altitude_meters = 0.0
            self._clear(FixField.ALTITUDE)

    @property
    def magnetic_variation(self) -> float | None:
        """Magnetic variation in degrees, West negative."""
        if not self.has(FixField.MAGNETIC_VARIATION):
            return None
        return self._magnetic_variation

    def set_magnetic_variation(self, degrees: float | None) -> None:
        if degrees is not None and abs(degrees) < _MAX_MAGNETIC_VARIATION:
            self._magnetic_variation = degrees
            self._set(FixField.MAGNETIC_VARIATION)
        else:
            self._magnetic_variation = 0.0
            self._clear(FixField.MAGNETIC_VARIATION)

    @property
    def gps_age(self) -> int | None:
        """Age of the GPS fix in seconds."""
        return self._gps_age if self.has(FixField.GPS_AGE) else None

    def set_gps_age(self, seconds: int | None) -> None:
        if seconds is not None and seconds >= 0:
            self._gps_age = seconds
            self._set(FixField.GPS_AGE)
        else:
            self._gps_age = 0
            self._clear(FixField.GPS_AGE)

    # --- identity / status ----------------------------------------------------

    @property
    def record_version(self) -> str | None:
        return self._record_version if self.has(FixField.RECORD_VERSION) else None

    def set_record_version(self, version: str | None) -> None:
        self._record_version = _trimmed(version)
        if self._record_version is None:
            self._clear(FixField.RECORD_VERSION)
        else:
            self._set(FixField.RECORD_VERSION)

    @property
    def mobile_id(self) -> str | None:
        return self._mobile_id if self.has(FixField.MOBILE_ID) else None

    def set_mobile_id(self, mobile_id: str | None) -> None:
        self._mobile_id = _trimmed(mobile_id)
        if self._mobile_id is None:
            self._clear(FixField.MOBILE_ID)
        else:
            self._set(FixField.MOBILE_ID)

    @staticmethod
    def is_event_code(code: Any) -> bool:
        """Return True unless ``code`` is None or a blank string."""
        if code is None:
            return False
        if isinstance(code, str) and not code.strip():
            return False
        return True

    @property
    def event_code(self) -> Any:
        return self._event_code if self.has(FixField.EVENT_CODE) else None

    def set_event_code(self, code: Any) -> None:
        if self.is_event_code(code):
            self._event_code = code.strip() if isinstance(code, str) else code
            self._set(FixField.EVENT_CODE)
        else:
            self._event_code = None
            self._clear(FixField.EVENT_CODE)

    @property
    def status_code(self) -> int | None:
        """16-bit status code, or None when there is no status."""
        return self._status_code if self.has(FixField.STATUS_CODE) else None

    def has_status_code(self) -> bool:
        return self.has(FixField.STATUS_CODE)

    def set_status_code(self, code: int | None) -> None:
        """Store ``code`` masked to 16 bits; zero or negative means no status."""
        masked = (code & STATUS_CODE_MASK) if code is not None and code > 0 else STATUS_NONE
        if masked > 0:
            self._status_code = masked
            self._set(FixField.STATUS_CODE)
        else:
            self._status_code = STATUS_NONE
            self._clear(FixField.STATUS_CODE)

    def translate_event_code_to_status_code(self, event_codes: Mapping[Any, int]) -> int:
        """Translate the event code into a status code using ``event_codes``.

        An existing status code is returned as-is without consulting the
        table. Otherwise the event code is looked up once; a hit is stored
        as the status code.

        Returns:
            The status code, or ``STATUS_NONE`` if there is none.
        """
        if self.has_status_code():
            return self._status_code
        code = self.event_code
        if not self.is_event_code(code) or not event_codes:
            return STATUS_NONE
        status = event_codes.get(code)
        if status is None:
            return STATUS_NONE
        self.set_status_code(status)
        return self._status_code

    # --- extra data -----------------------------------------------------------

    @property
    def extra_data(self) -> tuple[str, ...] | None:
        """Fields that followed the checksum of the last RMC/GGA sentence."""
        return self._extra_data

    def has_extra_data(self) -> bool:
        return bool(self._extra_data)

    def set_extra_data(self, fields: Sequence[str] | None) -> None:
        self._extra_data = tuple(fields) if fields else None

    # --- presentation ---------------------------------------------------------

    def describe(self) -> str:
        """Return a multi-line, human-readable summary of the defined fields."""
        lines = [f"RcdTypes : {self.type_names()}"]
        if self.has_parsed_types() and not self._checksum_ok:
            lines.append("Checksum : failed")
        if self.mobile_id is not None:
            lines.append(f"MobileID : {self.mobile_id}")
        if self.event_code is not None:
            lines.append(f"EventCode: {self.event_code}")
        if self.status_code is not None:
            lines.append(f"Status   : 0x{self.status_code:04X}")
        if self.has_fixtime():
            fixtime = self.get_fixtime()
            stamp = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(fixtime))
            lines.append(f"Fixtime  : {fixtime} [{stamp}]")
        if self.has(FixField.LATITUDE) and self.has(FixField.LONGITUDE):
            validity = "valid" if self._valid_gps else "invalid"
            lines.append(f"GPS      : {validity} {self._latitude:.5f}/{self._longitude:.5f}")
        if self.speed_kph is not None:
            speed = f"SpeedKPH : {self.speed_kph:.1f} kph"
            if self.heading is not None:
                speed += f", heading {self.heading:.1f}"
            lines.append(speed)
        if self.altitude_meters is not None:
            lines.append(f"Altitude : {self.altitude_meters} meters")
        if self.magnetic_variation is not None:
            lines.append(f"MagVar   : {self.magnetic_variation}")
        if self.record_version is not None:
            lines.append(f"RVersion : {self.record_version}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()


def _trimmed(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
