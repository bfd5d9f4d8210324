"""
Configuration management for the cast scheduler
Handles environment-based settings for the generation rules and the company directory

Values come from environment variables or a .env file (python-decouple);
every rule has a default matching the touring contract.
"""
from decouple import config
from typing import Optional

from cast_scheduler.error_handlers.exceptions import ConfigurationException


def _optional_int(value):
    """Cast helper for settings where an empty value means 'unset'"""
    if value is None or str(value).strip() == '':
        return None
    return int(value)


class Config:
    """Base configuration class"""
    # Search
    MAX_GENERATION_ATTEMPTS = config('MAX_GENERATION_ATTEMPTS', default=100, cast=int)
    RANDOM_SEED = config('RANDOM_SEED', default='', cast=_optional_int)

    # Hard rules
    MAX_CONSECUTIVE_SHOWS = config('MAX_CONSECUTIVE_SHOWS', default=6, cast=int)
    CONSECUTIVE_GAP_DAYS = config('CONSECUTIVE_GAP_DAYS', default=2, cast=int)  # tolerates one dark day
    MAX_WEEKEND_SHOWS = config('MAX_WEEKEND_SHOWS', default=4, cast=int)
    MAX_WEEKLY_SHOWS = config('MAX_WEEKLY_SHOWS', default=6, cast=int)

    # OFF selection
    OFF_PER_SHOW = config('OFF_PER_SHOW', default=4, cast=int)

    # Fairness warnings
    UNDERUTILIZED_MIN_SHOWS = config('UNDERUTILIZED_MIN_SHOWS', default=2, cast=int)
    OVERWORKED_FACTOR = config('OVERWORKED_FACTOR', default=1.5, cast=float)

    # Company directory (roster source when a caller passes no cast)
    COMPANY_DIRECTORY_URL = config('COMPANY_DIRECTORY_URL', default='')
    COMPANY_DIRECTORY_TIMEOUT = config('COMPANY_DIRECTORY_TIMEOUT', default=30, cast=int)
    COMPANY_DIRECTORY_MAX_RETRIES = config('COMPANY_DIRECTORY_MAX_RETRIES', default=3, cast=int)

    # Logging settings
    LOG_LEVEL = config('LOG_LEVEL', default='INFO')
    LOG_FILE = config('LOG_FILE', default='')

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration - can be called explicitly or on-demand

        Raises:
            ConfigurationException: If a rule limit is not a positive number

        Example:
            >>> config = get_config()
            >>> config.validate()
        """
        positive = {
            'MAX_GENERATION_ATTEMPTS': cls.MAX_GENERATION_ATTEMPTS,
            'MAX_CONSECUTIVE_SHOWS': cls.MAX_CONSECUTIVE_SHOWS,
            'CONSECUTIVE_GAP_DAYS': cls.CONSECUTIVE_GAP_DAYS,
            'MAX_WEEKEND_SHOWS': cls.MAX_WEEKEND_SHOWS,
            'MAX_WEEKLY_SHOWS': cls.MAX_WEEKLY_SHOWS,
        }
        invalid = [name for name, value in positive.items() if value is None or value <= 0]
        if invalid:
            raise ConfigurationException(
                f"Settings must be positive: {', '.join(invalid)}",
                details={'settings': invalid}
            )
        if cls.OFF_PER_SHOW < 0:
            raise ConfigurationException('OFF_PER_SHOW cannot be negative')


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = config('LOG_LEVEL', default='DEBUG')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    RANDOM_SEED = 1234
    LOG_FILE = ''
    COMPANY_DIRECTORY_URL = ''


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False

    LOG_LEVEL = config('LOG_LEVEL', default='WARNING')
    LOG_FILE = config('LOG_FILE', default='logs/cast_scheduler.log')

    @classmethod
    def validate(cls) -> None:
        """
        Production mode: the roster must come from somewhere

        Raises:
            ConfigurationException: If any required configuration is missing
        """
        super().validate()
        if not cls.COMPANY_DIRECTORY_URL:
            raise ConfigurationException(
                "COMPANY_DIRECTORY_URL must be set in production so rosters can be loaded."
            )


# Configuration mapping
config_mapping = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}


def get_config(config_name: Optional[str] = None, validate: bool = False) -> type:
    """
    Get configuration class based on environment.

    Args:
        config_name: Environment name ('development', 'testing', 'production')
        validate: Whether to validate configuration immediately (default: False)

    Returns:
        Config class for the specified environment

    Raises:
        ConfigurationException: If validation is enabled and a setting is invalid

    Example:
        >>> config = get_config()
        >>> config = get_config('production', validate=True)
    """
    if config_name is None:
        config_name = config('CAST_SCHEDULER_ENV', default='development')

    config_class = config_mapping.get(config_name, DevelopmentConfig)

    if validate:
        config_class.validate()

    return config_class
