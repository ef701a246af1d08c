from src.api.city_info import city_info_router
from src.api.health import health_router

__all__ = ["city_info_router", "health_router"]
