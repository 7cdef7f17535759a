"""Accumulated fix record and fix-time resolution."""

from gpsfix.fix.fixtime import parse_fixtime, resolve_fixtime
from gpsfix.fix.state import FixState

__all__ = [
    "FixState",
    "parse_fixtime",
    "resolve_fixtime",
]
