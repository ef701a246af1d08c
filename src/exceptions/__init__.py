from src.exceptions.base import CityInfoError
from src.exceptions.lookup import (
    ConfigurationError,
    InvalidZipCodeError,
    MissingEndpointsError,
)
from src.exceptions.upstream import (
    UpstreamRequestError,
    UpstreamServiceError,
    UpstreamUnavailableError,
)

__all__ = [
    "CityInfoError",
    "ConfigurationError",
    "InvalidZipCodeError",
    "MissingEndpointsError",
    "UpstreamRequestError",
    "UpstreamServiceError",
    "UpstreamUnavailableError",
]
