from src.exceptions.lookup.configuration_error import ConfigurationError


class MissingEndpointsError(ConfigurationError):
    """Exception for upstream endpoints absent from the configuration."""

    pass
