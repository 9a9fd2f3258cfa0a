"""Library exceptions."""

from __future__ import annotations


class PyTollFeeError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        self.error_code = error_code or self.default_error_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message
        super().__init__(message if message is not None else (detail or ""))


class ValidationError(PyTollFeeError):
    """Raised when call arguments fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class ConfigError(PyTollFeeError):
    """Raised when calculator configuration is invalid."""

    error_type = "config"
    default_error_code = "config_error"


class TariffError(PyTollFeeError):
    """Raised when a tariff manifest is missing or malformed."""

    error_type = "tariff"
    default_error_code = "tariff_error"


class NotFoundError(PyTollFeeError):
    """Raised when a tariff id is unknown."""

    error_type = "not_found"
    default_error_code = "not_found"
