from src.exceptions.upstream.upstream_service_error import UpstreamServiceError


class UpstreamUnavailableError(UpstreamServiceError):
    """Exception for an upstream service that answered without data."""

    pass
