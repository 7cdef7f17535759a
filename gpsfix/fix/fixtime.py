"""Fix-time resolution from NMEA date and time codes.

NMEA carries the date (DDMMYY) and the time of day (HHMMSS) in separate
fields, and several sentences carry only the time. This module merges
whatever is available into a single epoch timestamp (seconds, UTC).

Resolution rules:
    date + time -> that exact instant
    date only   -> midnight of that date (or the current time of day if
                   requested)
    time only   -> that time on the current UTC day, shifted one day back
                   or forward when the time of day is more than 12 hours
                   away from the current time of day
    neither     -> the current time

The time-only rule is a best-effort heuristic: a receiver reporting a time
just before midnight while the local clock is just past it (or the other
way round) is assigned to the neighbouring day. It can mispredict when the
receiver's clock and the local clock disagree by many hours.
"""

import time
from collections.abc import Callable

SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600

# Two-digit years below the pivot are 20xx, the rest 19xx.
CENTURY_PIVOT = 90

# Epoch day offset of the closed-form day-number formula below.
_EPOCH_DAY_OFFSET = 719469

Clock = Callable[[], float]


def current_hhmmss(now: float | None = None) -> int:
    """Return the current UTC time of day as an HHMMSS integer.

    Example:
        >>> current_hhmmss(1182154021)  # 2007-06-18T08:07:01Z
        80701
    """
    epoch = int(time.time() if now is None else now)
    tod = epoch % SECONDS_PER_DAY
    hours, rest = divmod(tod, SECONDS_PER_HOUR)
    minutes, seconds = divmod(rest, 60)
    return hours * 10000 + minutes * 100 + seconds


def _expand_year(yy: int) -> int:
    return yy + 2000 if yy < CENTURY_PIVOT else yy + 1900


def day_number(day: int, month: int, year: int) -> int:
    """Return days since 1970-01-01 for a calendar date.

    Uses a closed-form calendar formula that counts the year as starting in
    March, so February's variable length falls at the end of the year.

    Example:
        >>> day_number(18, 6, 2007)
        13682
    """
    # Truncate toward zero for January/February (negative numerator).
    yr = year * 1000 + int((month - 3) * 1000 / 12)
    return (
        (367 * yr + 625) // 1000
        - 2 * (yr // 1000)
        + yr // 4000
        - yr // 100000
        + yr // 400000
        + day
        - _EPOCH_DAY_OFFSET
    )


def _time_of_day_seconds(hhmmss: int) -> int:
    hours = (hhmmss // 10000) % 100
    minutes = (hhmmss // 100) % 100
    seconds = hhmmss % 100
    return hours * SECONDS_PER_HOUR + minutes * 60 + seconds


def _closest_day(tod: int, now: float) -> int:
    """Pick the UTC day whose ``tod`` is closest to ``now``."""
    epoch = int(now)
    current_tod = epoch % SECONDS_PER_DAY
    day = epoch // SECONDS_PER_DAY
    if abs(current_tod - tod) > 12 * SECONDS_PER_HOUR:
        if current_tod > tod:
            # e.g. now 23:59, fix 00:01 -> fix is from the next day
            day += 1
        else:
            day -= 1
    return day


def resolve_fixtime(
    ddmmyy: int | None,
    hhmmss: int | None,
    default_to_current_tod: bool = False,
    clock: Clock = time.time,
) -> int:
    """Merge a date code and a time code into epoch seconds.

    Args:
        ddmmyy: Date as DDMMYY (e.g. 180607 for 2007-06-18), or None if
            absent. Values <= 0 are treated as absent.
        hhmmss: Time of day as HHMMSS (e.g. 80701 for 08:07:01), or None if
            absent. Negative values are treated as absent.
        default_to_current_tod: If the time is absent but the date is
            present, use the current time of day instead of midnight.
        clock: Source of the current epoch time.

    Returns:
        Epoch seconds (UTC).

    Example:
        >>> resolve_fixtime(180607, 80701)
        1182154021
    """
    has_date = ddmmyy is not None and ddmmyy > 0
    has_time = hhmmss is not None and hhmmss >= 0

    if not has_date and not has_time:
        return int(clock())

    if has_time:
        tod = _time_of_day_seconds(hhmmss)
    elif default_to_current_tod:
        # Near midnight this may pick a time just after midnight on the
        # given date when one just before it would be more accurate.
        tod = _time_of_day_seconds(current_hhmmss(clock()))
    else:
        tod = 0

    if has_date:
        day = (ddmmyy // 10000) % 100
        month = (ddmmyy // 100) % 100
        year = _expand_year(ddmmyy % 100)
        days = day_number(day, month, year)
    else:
        days = _closest_day(tod, clock())

    return days * SECONDS_PER_DAY + tod


def _parse_code(code: str | None) -> int | None:
    if code is None:
        return None
    code = code.strip()
    if not code:
        return None
    try:
        return int(float(code))
    except (ValueError, OverflowError):
        return None


def parse_fixtime(
    date_code: str | None,
    time_code: str | None,
    default_to_current_tod: bool = False,
    clock: Clock = time.time,
) -> int:
    """Resolve epoch seconds from raw DDMMYY / HHMMSS field text.

    Blank or unparseable codes count as absent.

    Example:
        >>> parse_fixtime("180607", "080701")
        1182154021
    """
    return resolve_fixtime(
        _parse_code(date_code),
        _parse_code(time_code),
        default_to_current_tod,
        clock,
    )
