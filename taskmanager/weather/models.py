"""Weather lookup DTOs.

Pydantic models for the two upstream providers and for the combined report
returned to callers.

Endpoint mapping
----------------
- ``GET /geocoding/v5/mapbox.places/{address}.json`` → ``GeocodeResult``
- ``GET /current?query={lat},{long}`` → ``Forecast``
"""

from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field


class GeocodeResult(BaseModel):
    """First match returned by the geocoder."""

    latitude: float
    longitude: float
    location: str = Field(description="Full place name, e.g. 'Paris, Île-de-France, France'")

    @classmethod
    def from_feature(cls, feature: Dict[str, Any]) -> "GeocodeResult":
        """Build from a Mapbox feature whose ``center`` is ``[longitude, latitude]``."""
        longitude, latitude = feature["center"][0], feature["center"][1]
        return cls(latitude=latitude, longitude=longitude, location=feature["place_name"])


class Forecast(BaseModel):
    """Current conditions at a coordinate."""

    descriptions: List[str] = Field(default_factory=list)
    temperature: Union[int, float]
    feels_like: Union[int, float]
    location_name: str
    country: str

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Forecast":
        """Build from a Weatherstack ``/current`` response body."""
        current = payload["current"]
        location = payload["location"]
        return cls(
            descriptions=current.get("weather_descriptions") or [],
            temperature=current["temperature"],
            feels_like=current["feelslike"],
            location_name=location["name"],
            country=location["country"],
        )

    def summary(self) -> str:
        description = ", ".join(self.descriptions)
        return (
            f"{description} in {self.location_name} ({self.country}). "
            f"It is currently {self.temperature} degrees out. "
            f"It feels like {self.feels_like} degrees out"
        )


class WeatherReport(BaseModel):
    """Result of looking up the weather for an address."""

    address: str
    location: str
    forecast: str
