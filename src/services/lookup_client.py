from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from src.exceptions.upstream import UpstreamRequestError
from src.models.city import CityWeatherRecord

logger = structlog.get_logger(__name__)


class LookupClient:
    """
    Fetches CityWeatherRecord payloads from the upstream lookup services.

    Wraps a shared httpx.AsyncClient. The client is owned by the application
    and reused across requests; this class never creates or closes it.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        self.http_client = http_client

    async def get_record(self, url: str) -> Optional[CityWeatherRecord]:
        """
        GET a URL and parse the JSON body as a CityWeatherRecord.

        Args:
            url: Absolute URL, or a path relative to the client's base URL

        Returns:
            The parsed record, or None when the service answered with a JSON null

        Raises:
            UpstreamRequestError: If the request fails, the status is not
                successful, or the body is not a valid record
        """
        logger.info("Making upstream request", url=url)

        try:
            response = await self.http_client.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamRequestError(
                f"Upstream returned status {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamRequestError(f"Request to {url} failed: {str(e)}") from e
        except ValueError as e:
            raise UpstreamRequestError(f"Invalid JSON received from {url}: {str(e)}") from e

        if data is None:
            return None

        try:
            return CityWeatherRecord.model_validate(data)
        except ValidationError as e:
            raise UpstreamRequestError(f"Invalid record received from {url}: {str(e)}") from e
