from src.api.city_info.city_info_routes import router as city_info_router

__all__ = ["city_info_router"]
