"""Error types raised by the almanac engine."""

from typing import Optional


class AlmanacError(Exception):
    """Base exception for almanac-specific errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class InvalidArgumentError(AlmanacError, ValueError):
    """Raised when a caller passes a malformed or out-of-range value."""


class InvalidDateError(InvalidArgumentError):
    """Raised when a calendar date does not exist."""

    def __init__(self, year: int, month: int, day: float, reason: str):
        message = f"Invalid calendar date {year:04d}-{month:02d}-{day}: {reason}"
        suggestions = [
            "Months run from 1 to 12; days from 1 up to the length of the month",
            "The dates 1582-10-05 to 1582-10-14 were dropped by the Gregorian reform",
        ]
        super().__init__(message, suggestions)


class InvalidPositionError(InvalidArgumentError):
    """Raised when a latitude or longitude is out of range."""

    def __init__(self, what: str, value_deg: float):
        message = f"{what} {value_deg:.6f}° is out of range"
        suggestions = [
            "Latitude must lie within [-90°, +90°] and longitude within [-180°, +180°]",
            "Positions are constructed from radians; use Position.from_degrees for degrees",
        ]
        super().__init__(message, suggestions)


class UnknownBodyError(InvalidArgumentError):
    """Raised when a body identifier is not recognized."""

    def __init__(self, body_id: str, available_bodies: list[str]):
        message = f"Unknown body: '{body_id}'"
        suggestions = [
            f"Available bodies: {', '.join(sorted(available_bodies))}",
            "Check spelling (body names are case-insensitive)",
        ]
        super().__init__(message, suggestions)


class UndefinedFieldError(InvalidArgumentError):
    """Raised when a field has no meaning for the requested body."""

    def __init__(self, field_name: str, body_name: str):
        message = f"Field {field_name} is not defined for {body_name}"
        suggestions = [
            "Heliocentric fields are not available for the Moon",
            "Use the geocentric or apparent fields instead",
        ]
        super().__init__(message, suggestions)


class NoObserverError(InvalidArgumentError):
    """Raised when an observer-dependent field is requested without a position."""

    def __init__(self, field_name: str):
        message = f"Field {field_name} requires an observer position"
        suggestions = [
            "Call Observation.set_observer_position() before querying local fields",
        ]
        super().__init__(message, suggestions)


class ConfigError(InvalidArgumentError):
    """Raised when a configuration value cannot be interpreted."""

    def __init__(self, key: str, value: object, choices: list[str]):
        message = f"Invalid value for {key}: {value!r}"
        suggestions = [f"Valid choices: {', '.join(choices)}"]
        super().__init__(message, suggestions)


class NonconvergenceError(AlmanacError, ArithmeticError):
    """Raised in strict mode when an iterative algorithm runs out of iterations."""

    def __init__(self, algorithm: str, iterations: int, best_estimate: object = None):
        self.algorithm = algorithm
        self.iterations = iterations
        self.best_estimate = best_estimate
        message = f"{algorithm} did not converge after {iterations} iterations"
        suggestions = [
            "Disable strict mode to accept the documented approximation",
            "For geodesics, nearly antipodal points are the usual cause; try Andoyer",
        ]
        super().__init__(message, suggestions)
