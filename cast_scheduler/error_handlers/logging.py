"""
Logging utilities for the cast scheduler
Provides centralized logging setup and a generation-run logger
"""
import logging
import traceback
from datetime import datetime
import os


LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'


def setup_logging(config):
    """Configure package logging from a Config class"""
    log_level = getattr(logging, str(getattr(config, 'LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    log_file = getattr(config, 'LOG_FILE', None)

    logger = logging.getLogger('cast_scheduler')
    logger.setLevel(log_level)

    # Re-running setup must not stack handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        if not os.path.isabs(log_file):
            basedir = os.path.abspath(os.path.dirname(os.path.dirname(os.path.dirname(__file__))))
            log_file = os.path.join(basedir, log_file)

        log_dir = os.path.dirname(log_file)
        os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def new_error_id():
    """Timestamp-based id used to correlate an error message with its traceback"""
    return datetime.utcnow().strftime('%Y%m%d_%H%M%S_%f')


def handle_generation_error(operation, error, context=None):
    """Centralized generation error logging"""
    logger = logging.getLogger('cast_scheduler.generation')
    error_id = new_error_id()

    log_message = f"GENERATION ERROR [{error_id}] in {operation}: {str(error)}"
    if context:
        log_message += f" | Context: {context}"

    logger.error(log_message)
    logger.debug(f"GENERATION ERROR TRACEBACK [{error_id}]: {traceback.format_exc()}")

    return {
        'error_id': error_id,
        'operation': operation,
        'error_message': str(error),
        'timestamp': datetime.utcnow().isoformat()
    }


class SchedulerLogger:
    """Specialized logger for schedule generation runs"""

    def __init__(self, name='cast_scheduler.generation'):
        self.logger = logging.getLogger(name)

    def generation_started(self, show_count, performer_count):
        """Log generation start"""
        self.logger.info(
            "Started: generating %d show(s) for %d performer(s)", show_count, performer_count
        )

    def attempt_failed(self, attempt, reason):
        """Log a rejected constructive attempt"""
        self.logger.debug("Attempt %d rejected: %s", attempt, reason)

    def generation_completed(self, attempts, stats=None):
        """Log generation completion"""
        message = f"Completed: accepted schedule after {attempts} attempt(s)"
        if stats:
            message += f" | Stats: {stats}"
        self.logger.info(message)

    def fallback_used(self, attempts, unfilled):
        """Log that the partial generator had to take over"""
        self.logger.warning(
            "No complete schedule after %d attempt(s); partial schedule left %d slot(s) unfilled",
            attempts, unfilled
        )

    def generation_failed(self, error, context=None):
        """Log generation failure"""
        error_details = handle_generation_error('auto_generate', error, context)
        return error_details['error_id']


# Global generation logger instance
generation_logger = SchedulerLogger()
