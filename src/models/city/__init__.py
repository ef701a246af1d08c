from src.models.city.city_weather_record import CityWeatherRecord

__all__ = ["CityWeatherRecord"]
