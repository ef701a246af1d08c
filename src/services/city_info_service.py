from typing import Dict

import structlog

from src.config.config import EndPoints, StringParamConfig
from src.exceptions.lookup import ConfigurationError, InvalidZipCodeError, MissingEndpointsError
from src.exceptions.upstream import UpstreamUnavailableError
from src.models.city import CityWeatherRecord
from src.services.lookup_client import LookupClient

logger = structlog.get_logger(__name__)

# Upper bound actually enforced on zip code length. The rejection message
# quotes the configured max_length instead.
ZIP_CODE_HARD_MAX_LENGTH = 10

UPSTREAM_UNAVAILABLE_MESSAGE = "The remote service is currently unavailable. Please try again later."


def zip_code_length(zip_code: str) -> int:
    """Length in UTF-16 code units, so characters outside the BMP count twice."""
    return len(zip_code.encode("utf-16-le", "surrogatepass")) // 2


class CityInfoService:
    """
    Resolves a zip code to a city and its current weather.

    The zip lookup service is asked for the city first, then the weather
    service is asked for that city's weather. Both calls are sequential and
    never retried.

    Configuration is parsed once at construction. Problems found there are
    kept and raised on every lookup so a broken deployment keeps answering
    requests with an error instead of failing to start.
    """

    def __init__(
        self,
        lookup_client: LookupClient,
        string_params: StringParamConfig,
        end_points: EndPoints,
    ):
        self.lookup_client = lookup_client

        self.min_length = string_params.min_length
        self.max_length = string_params.max_length
        self.zipcode_endpoint, self.weather_endpoint = end_points.urls()

        self._bounds_problem = string_params.problem()
        self._endpoints_problem = end_points.problem()

        if self._bounds_problem:
            logger.warning("Lookup bounds misconfigured", problem=self._bounds_problem)
        if self._endpoints_problem:
            logger.warning("Lookup endpoints misconfigured", problem=self._endpoints_problem)

    def configuration_problems(self) -> Dict[str, str]:
        """Map each misconfigured lookup group to its problem."""
        problems = {
            "string_param_config": self._bounds_problem,
            "end_points": self._endpoints_problem,
        }
        return {group: problem for group, problem in problems.items() if problem}

    def validate_zip_code(self, zip_code: str) -> None:
        """
        Check the zip code length against the configured bounds.

        Raises:
            ConfigurationError: If the length bounds are missing or not positive
            InvalidZipCodeError: If the zip code is too short or too long
        """
        if self._bounds_problem:
            logger.error("Configuration file has issues", problem=self._bounds_problem)
            raise ConfigurationError(self._bounds_problem)

        length = zip_code_length(zip_code)
        if length < self.min_length or length > ZIP_CODE_HARD_MAX_LENGTH:
            logger.warning("Rejected zip code", zip_code=zip_code, length=length)
            raise InvalidZipCodeError(
                "Invalid zip code format. Zip code should be between "
                f"{self.min_length} and {self.max_length} characters."
            )

    async def get_city_weather(self, zip_code: str) -> CityWeatherRecord:
        """
        Get the city name and current weather for a zip code.

        Args:
            zip_code: Caller-supplied zip code

        Returns:
            The zip lookup's record with the weather service's weather copied in

        Raises:
            ConfigurationError: If the length bounds are missing or not positive
            InvalidZipCodeError: If the zip code length is out of bounds
            MissingEndpointsError: If either upstream endpoint is not configured
            UpstreamUnavailableError: If either upstream service returns no data
            UpstreamRequestError: If either upstream request fails
        """
        self.validate_zip_code(zip_code)

        if self._endpoints_problem:
            logger.error("API endpoints are not configured properly", problem=self._endpoints_problem)
            raise MissingEndpointsError(self._endpoints_problem)

        logger.info("Looking up city", zip_code=zip_code)
        city_info = await self.lookup_client.get_record(f"{self.zipcode_endpoint}{zip_code}")
        if city_info is None:
            logger.warning("Zip lookup service returned no data", zip_code=zip_code)
            raise UpstreamUnavailableError(UPSTREAM_UNAVAILABLE_MESSAGE)

        if not city_info.zip_code:
            city_info.zip_code = zip_code

        logger.info("Looking up weather", zip_code=zip_code, city=city_info.city_name)
        weather_data = await self.lookup_client.get_record(
            f"{self.weather_endpoint}{city_info.city_name or ''}"
        )
        if weather_data is None:
            logger.warning("Weather service returned no data", city=city_info.city_name)
            raise UpstreamUnavailableError(UPSTREAM_UNAVAILABLE_MESSAGE)

        city_info.current_weather = weather_data.current_weather

        logger.info(
            "Successfully resolved city weather",
            zip_code=zip_code,
            city=city_info.city_name,
            weather=city_info.current_weather,
        )
        return city_info
