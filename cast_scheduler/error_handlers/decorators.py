"""
Error handling decorators

Provides decorators for consistent error handling around generation entry points.
"""
import logging
from functools import wraps
from .exceptions import AppException, ExternalAPIException
from .logging import generation_logger


logger = logging.getLogger(__name__)

DIRECTORY_FAILURE_MESSAGE = 'Failed to load cast members from company system'


def handle_generation_errors(f):
    """
    Universal error handler for generation entry points

    Provides:
    - A structured failure result instead of a raised exception
    - Automatic logging with error IDs
    - Exception type hierarchy support

    Usage:
        class SchedulingEngine:
            @handle_generation_errors
            def auto_generate(self):
                # Raise exceptions directly - decorator handles them
                ...

    Args:
        f: Function returning an AutoGenerateResult

    Returns:
        Decorated function that never raises
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        from cast_scheduler.services.validation_types import AutoGenerateResult

        try:
            return f(*args, **kwargs)

        except ExternalAPIException as e:
            logger.warning(
                f"{e.error_type} in {f.__name__}: {e.message}",
                extra={'details': e.details} if e.details else {}
            )
            return AutoGenerateResult(success=False, errors=[DIRECTORY_FAILURE_MESSAGE])

        except AppException as e:
            # Custom exceptions - already formatted
            logger.warning(
                f"{e.error_type} in {f.__name__}: {e.message}",
                extra={'details': e.details} if e.details else {}
            )
            return AutoGenerateResult(success=False, errors=[e.message])

        except Exception as e:
            error_id = generation_logger.generation_failed(e, {'function': f.__name__})
            logger.error(
                f"Unexpected error [{error_id}] in {f.__name__}: {str(e)}",
                exc_info=True
            )
            return AutoGenerateResult(success=False, errors=[f"Algorithm error: {str(e)}"])

    return decorated
