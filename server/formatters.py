"""JSON formatting utilities for decoded fixes."""

import json
from typing import Any

from gpsfix import FixState

__all__ = ["fix_to_dict", "format_fix_message"]


def fix_to_dict(fix: FixState) -> dict[str, Any]:
    """Flatten a fix into JSON-compatible values; undefined fields are None."""
    extra_data = fix.extra_data
    return {
        "types": fix.parsed_tags,
        "last_type": fix.last_type or None,
        "checksum_ok": fix.checksum_ok,
        "valid": fix.is_valid_gps,
        "fixtime": fix.get_fixtime() if fix.has_fixtime() else None,
        "ddmmyy": fix.ddmmyy,
        "hhmmss": fix.hhmmss,
        "lat": fix.latitude,
        "lon": fix.longitude,
        "speed_knots": fix.speed_knots,
        "speed_kph": fix.speed_kph,
        "heading": fix.heading,
        "alt": fix.altitude_meters,
        "hdop": fix.hdop,
        "num_satellites": fix.num_satellites,
        "fix_type": fix.fix_type,
        "magnetic_variation": fix.magnetic_variation,
        "mobile_id": fix.mobile_id,
        "status_code": fix.status_code,
        "event_code": fix.event_code,
        "gps_age": fix.gps_age,
        "extra_data": list(extra_data) if extra_data is not None else None,
    }


def format_fix_message(fix: FixState, ok: bool) -> str:
    """Serialize a fix into a JSON string for WebSocket transmission."""
    return json.dumps({"type": "fix", "ok": ok, "fix": fix_to_dict(fix)}, default=str)
