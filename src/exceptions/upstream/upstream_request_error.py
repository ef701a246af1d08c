from src.exceptions.upstream.upstream_service_error import UpstreamServiceError


class UpstreamRequestError(UpstreamServiceError):
    """Exception for failed upstream requests or unreadable responses."""

    pass
