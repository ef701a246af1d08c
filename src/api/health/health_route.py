from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from src.api.dependencies import get_city_info_service
from src.services.city_info_service import CityInfoService

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", summary="API Health Check")
async def get_health(city_info_service: CityInfoService = Depends(get_city_info_service)):
    """
    Report whether the lookup handler can serve requests.

    Misconfigured lookup groups do not stop the service, so they are listed
    here with status "degraded" instead.
    """
    problems = city_info_service.configuration_problems()

    return {
        "status": "degraded" if problems else "ok",
        "lookup_configured": not problems,
        "configuration_problems": problems,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0",
    }
