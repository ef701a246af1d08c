from fastapi import Request

from src.services.city_info_service import CityInfoService


async def get_city_info_service(request: Request) -> CityInfoService:
    """Return the application's CityInfoService, built once at startup."""
    return request.app.state.city_info_service
