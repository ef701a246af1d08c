class CityInfoError(Exception):
    """Base exception for all City Info errors."""

    pass
