"""Configuration errors."""


class ConfigError(Exception):
    """Raised when a configuration file or override is invalid."""
