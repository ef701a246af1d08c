from src.exceptions.base import CityInfoError


class UpstreamServiceError(CityInfoError):
    """Base exception for upstream service errors."""

    pass
