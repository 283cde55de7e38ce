"""Error kinds raised by the chart and transit services."""

from __future__ import annotations


class ChartInputError(ValueError):
    """Birth data rejected before any ephemeris work is done."""


class InvalidDateFormatError(ChartInputError):
    def __init__(self, value: str = ""):
        super().__init__("Invalid date format. Use YYYY-MM-DD")
        self.value = value


class InvalidDateValueError(ChartInputError):
    def __init__(self, value: str = ""):
        super().__init__("Invalid date values")
        self.value = value


class InvalidTimeError(ChartInputError):
    def __init__(self, value: str = ""):
        super().__init__("Invalid time. Use HH:MM (24-hour)")
        self.value = value


class InvalidLocationError(ChartInputError):
    pass


class InvalidTimezoneError(ChartInputError):
    pass


class InvalidDateRangeError(ValueError):
    pass


class EphemerisError(RuntimeError):
    """The ephemeris provider could not answer a query."""


class HouseComputationError(EphemerisError):
    """The provider cannot produce cusps for this house system at this location."""

    def __init__(self, system_code: str, latitude: float, reason: str = ""):
        msg = f"houses: system '{system_code}' unavailable at latitude {latitude:.4f}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.system_code = system_code
        self.latitude = latitude


__all__ = [
    "ChartInputError",
    "EphemerisError",
    "HouseComputationError",
    "InvalidDateFormatError",
    "InvalidDateRangeError",
    "InvalidDateValueError",
    "InvalidLocationError",
    "InvalidTimezoneError",
    "InvalidTimeError",
]
