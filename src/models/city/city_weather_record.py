from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Lower-cased JSON names mapped to the declared field aliases.
_JSON_NAMES = {"cityname": "CityName", "zipcode": "ZipCode", "weather": "Weather"}


class CityWeatherRecord(BaseModel):
    """
    City name and current weather for a zip code.

    Upstream services and callers see the JSON names `CityName`, `ZipCode`
    and `Weather`. Incoming names are matched without regard to case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    city_name: Optional[str] = Field(default="", alias="CityName", description="City name")
    zip_code: Optional[str] = Field(default="", alias="ZipCode", description="Zip code")
    current_weather: Optional[str] = Field(
        default="", alias="Weather", description="Current weather conditions"
    )

    @model_validator(mode="before")
    @classmethod
    def normalize_json_names(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            _JSON_NAMES.get(key.lower(), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }

    def to_response(self) -> dict:
        """Serialize with the public JSON names."""
        return self.model_dump(by_alias=True)
