from src.exceptions.base import CityInfoError


class InvalidZipCodeError(CityInfoError):
    """Exception for zip codes outside the accepted length bounds."""

    pass
