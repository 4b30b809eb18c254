"""Custom exceptions for rodaje."""


class RodajeError(Exception):
    """Base exception for all rodaje errors."""

    pass


class ValidationError(RodajeError):
    """Raised when validation fails."""

    pass


class InvalidDateFormat(ValidationError, ValueError):
    """Raised when a value is not a well-formed, possible YYYY-MM-DD calendar day."""

    pass


class MissingRequiredRange(ValidationError):
    """Raised when the primary (shooting) range is missing a bound."""

    pass


class OrderViolation(ValidationError):
    """Raised when a range ends before it starts or phases are out of order."""

    pass


class ParseError(RodajeError):
    """Raised when YAML parsing fails."""

    pass


class ProjectNotFoundError(RodajeError, KeyError):
    """Raised when a project ID does not exist in the store."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable
        return str(self.args[0]) if self.args else ""


class DuplicateProjectError(RodajeError):
    """Raised when creating a project whose ID is already taken."""

    pass
