"""Errors raised by the flight geometry and time helpers."""
from __future__ import annotations


class AirportBoardError(Exception):
    """Base error for the Airport Board integration."""


class TimestampParseError(AirportBoardError, ValueError):
    """A local timestamp was missing or could not be parsed."""


class ZoneLookupMiss(AirportBoardError, LookupError):
    """A coordinate has no time zone in the bundled dataset."""


class InvalidGeometryError(AirportBoardError, ValueError):
    """A longitude or latitude was not a finite number."""


class InvalidCoordinateError(InvalidGeometryError):
    """A coordinate was outside [-90, 90] x [-180, 180]."""
