from src.exceptions.base import CityInfoError


class ConfigurationError(CityInfoError):
    """Exception for missing or invalid lookup configuration."""

    pass
