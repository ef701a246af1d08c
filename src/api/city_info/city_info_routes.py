import structlog
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api.dependencies import get_city_info_service
from src.exceptions.lookup import ConfigurationError, InvalidZipCodeError, MissingEndpointsError
from src.exceptions.upstream import UpstreamRequestError, UpstreamUnavailableError
from src.models.problem import ProblemDetails
from src.services.city_info_service import CityInfoService

logger = structlog.get_logger(__name__)

SERVER_ERROR_MESSAGE = "Server Error: We were unable to process your request. Please try again later."
MISSING_ENDPOINTS_MESSAGE = "API endpoints are missing in the configuration."

# Create router
router = APIRouter(prefix="/CityInfo", tags=["CityInfo"])


def problem_response(request: Request, detail: str) -> JSONResponse:
    """Build an application/problem+json 500 response."""
    problem = ProblemDetails(
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail,
        instance=request.url.path,
    )
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type="application/problem+json",
    )


@router.get("", name="GetCityWeather", summary="Get City Weather")
async def get_city_weather(
    request: Request,
    zip_code: str = Query(..., alias="zipCode", description="Zip code to look up"),
    city_info_service: CityInfoService = Depends(get_city_info_service),
):
    """
    Look up the city for a zip code, then the current weather for that city.

    Example zip codes: 1010, 33823, 33930, 34242.

    Args:
        request: Incoming request, used for the problem instance path.
        zip_code: Zip code to look up.
        city_info_service: Lookup handler built at startup.

    Returns:
        JSON object with `CityName`, `ZipCode` and `Weather`.

    Errors:
        400 (text) for an invalid zip code length, 500 (text) for configuration
        or request failures, 500 (problem+json) when an upstream service
        returns no data.
    """
    logger.info("API request: Get city weather", zip_code=zip_code)
    try:
        record = await city_info_service.get_city_weather(zip_code)
        return JSONResponse(content=record.to_response())

    except InvalidZipCodeError as e:
        return PlainTextResponse(str(e), status_code=status.HTTP_400_BAD_REQUEST)

    except MissingEndpointsError:
        return PlainTextResponse(
            MISSING_ENDPOINTS_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    except ConfigurationError:
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    except UpstreamUnavailableError as e:
        return problem_response(request, str(e))

    except UpstreamRequestError as e:
        logger.error("Upstream request failed", zip_code=zip_code, error=str(e), exc_info=True)
        return PlainTextResponse(
            SERVER_ERROR_MESSAGE,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
