"""
Unified Error Handling System

Provides centralized, consistent error handling across the scheduler.

Usage:
    from cast_scheduler.error_handlers import handle_generation_errors
    from cast_scheduler.error_handlers.exceptions import ValidationException

    @handle_generation_errors
    def generate():
        if not valid:
            raise ValidationException('Invalid data')
        return AutoGenerateResult(success=True)
"""
from .exceptions import (
    AppException,
    ValidationException,
    ConfigurationException,
    ExternalAPIException,
    SchedulingException
)
from .decorators import handle_generation_errors
from .logging import setup_logging, SchedulerLogger, generation_logger


__all__ = [
    # Exceptions
    'AppException',
    'ValidationException',
    'ConfigurationException',
    'ExternalAPIException',
    'SchedulingException',
    # Decorators
    'handle_generation_errors',
    # Logging
    'setup_logging',
    'SchedulerLogger',
    'generation_logger',
]
