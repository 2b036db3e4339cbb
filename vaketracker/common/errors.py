"""Domain errors and failure typing."""


class VaketrackerError(Exception):
    """Base class for tracker failures."""

    error_code = "VAKETRACKER_ERROR"


class ConfigError(VaketrackerError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ValidationError(VaketrackerError):
    """Raised when captured input fails validation."""

    error_code = "VALIDATION_ERROR"


class InvalidCoordinateError(ValidationError):
    """Raised for latitude/longitude values that are missing, non-numeric or out of range."""

    error_code = "INVALID_COORDINATE"


class StageError(VaketrackerError):
    """Raised for command failures that should end the run."""

    error_code = "STAGE_ERROR"
