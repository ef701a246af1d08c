from src.exceptions.upstream.upstream_request_error import UpstreamRequestError
from src.exceptions.upstream.upstream_service_error import UpstreamServiceError
from src.exceptions.upstream.upstream_unavailable_error import UpstreamUnavailableError

__all__ = ["UpstreamRequestError", "UpstreamServiceError", "UpstreamUnavailableError"]
