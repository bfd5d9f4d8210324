"""
Custom exception hierarchy for type-safe error handling

Provides a structured exception hierarchy so callers of the scheduler get
consistent error payloads regardless of where a failure started.

Usage:
    from cast_scheduler.error_handlers.exceptions import ValidationException

    def parse_show(record):
        if 'id' not in record:
            raise ValidationException('Show record is missing an id')

Exception Hierarchy:
    AppException (base)
    ├── ValidationException
    ├── ConfigurationException
    ├── ExternalAPIException
    └── SchedulingException
"""
from typing import Dict, Any, Optional


class AppException(Exception):
    """
    Base exception for all scheduler errors

    All custom exceptions should inherit from this class so that the
    generation entry point can convert them into a structured result.

    Attributes:
        error_type: String identifier for the error type
        message: Human-readable error message
        details: Additional context about the error
    """
    error_type = 'ApplicationError'

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize application exception

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to JSON-serializable dictionary

        Returns:
            Dictionary suitable for returning to a caller
        """
        result = {
            'error': self.error_type,
            'message': self.message,
        }

        if self.details:
            result.update(self.details)

        return result

    def __str__(self) -> str:
        return f"{self.error_type}: {self.message}"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}('{self.message}')>"


class ValidationException(AppException):
    """
    Input validation errors

    Raised when a show or cast member record cannot be parsed.

    Example:
        >>> if not record.get('date'):
        ...     raise ValidationException('Show date is required')
    """
    error_type = 'ValidationError'


class ConfigurationException(AppException):
    """
    Configuration errors

    Raised when the scheduler is misconfigured (bad role catalog, missing
    directory URL, non-positive caps).

    Example:
        >>> if not config.COMPANY_DIRECTORY_URL:
        ...     raise ConfigurationException('COMPANY_DIRECTORY_URL not configured')
    """
    error_type = 'ConfigurationError'


class ExternalAPIException(AppException):
    """
    External API call errors

    Raised when the company directory cannot be reached or returns
    something other than a roster.
    """
    error_type = 'ExternalAPIError'


class SchedulingException(AppException):
    """
    Scheduling errors

    Raised when the engine is asked to do something it cannot, such as
    generating a week without any performers.
    """
    error_type = 'SchedulingError'
