"""Weather lookup client

Overview
--------
Thin HTTP client over two third-party services:

- a geocoder (Mapbox places API) that turns a free-form address into
  coordinates and a display name, and
- a current-conditions provider (Weatherstack) queried with those coordinates.

``lookup`` chains the two and returns a ``WeatherReport`` used by both the CLI
and the site's ``/weather`` endpoint.

Errors
------
Transport failures are raised as ``WeatherServiceUnavailableError``; an
address or coordinate the providers do not know is raised as
``LocationNotFoundError``; any other non-2xx reply is a ``WeatherServiceError``
carrying the upstream status code and body.

Usage
-----
>>> client = WeatherClient.from_config(settings.weather)
>>> report = client.lookup("Boston")
>>> print(report.location, report.forecast)
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from taskmanager.core.monitoring import log_weather_lookup
from taskmanager.server.core.config import WeatherConfig

from .errors import LocationNotFoundError, WeatherServiceError, WeatherServiceUnavailableError
from .models import Forecast, GeocodeResult, WeatherReport

NOT_FOUND_MESSAGE = "Unable to find location. Try another search."


class WeatherClient:
    """HTTP client for geocoding addresses and fetching current weather.

    Responsibilities
    ----------------
    - Build provider URLs and attach access keys.
    - Normalize provider responses into typed DTOs.
    - Map transport and provider failures onto the weather error types.
    """

    def __init__(
        self,
        *,
        mapbox_access_token: Optional[str] = None,
        weatherstack_access_key: Optional[str] = None,
        geocode_base_url: str = "https://api.mapbox.com",
        forecast_base_url: str = "http://api.weatherstack.com",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Create a weather client.

        Args:
            mapbox_access_token: Mapbox token sent as ``access_token``.
            weatherstack_access_key: Weatherstack key sent as ``access_key``.
            geocode_base_url: Base URL of the geocoding API.
            forecast_base_url: Base URL of the current-weather API.
            timeout: Default HTTP timeout for the internal client.
            client: Optional preconfigured ``httpx.Client`` to use.
        """
        self.mapbox_access_token = mapbox_access_token
        self.weatherstack_access_key = weatherstack_access_key
        self.geocode_base_url = geocode_base_url.rstrip("/")
        self.forecast_base_url = forecast_base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: WeatherConfig, *, client: Optional[httpx.Client] = None) -> "WeatherClient":
        """Create a client from the grouped weather settings."""
        return cls(
            mapbox_access_token=config.mapbox_access_token,
            weatherstack_access_key=config.weatherstack_access_key,
            geocode_base_url=config.mapbox_base_url,
            forecast_base_url=config.weatherstack_base_url,
            timeout=config.timeout,
            client=client,
        )

    def close(self) -> None:
        self._client.close()

    def _get_json(self, url: str, params: Dict[str, Any], service: str) -> Dict[str, Any]:
        try:
            r = self._client.get(url, params=params)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise LocationNotFoundError(NOT_FOUND_MESSAGE, status_code=404, details=e.response.text) from e
            raise WeatherServiceError(
                f"{service} request failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.TransportError as e:
            self._logger.warning("Could not reach %s service: %s", service, e)
            raise WeatherServiceUnavailableError(f"Unable to connect to {service} service!") from e
        try:
            return r.json()
        except ValueError as e:
            raise WeatherServiceError(f"{service} service returned invalid JSON", details=r.text) from e

    def geocode(self, address: str) -> GeocodeResult:
        """Resolve an address to coordinates.

        API
        ---
        - Method/Path: ``GET /geocoding/v5/mapbox.places/{address}.json``
        - Query: ``access_token``, ``limit=1``

        Returns:
            ``GeocodeResult`` for the best match.

        Raises:
            LocationNotFoundError: When the geocoder returns no features.
        """
        url = f"{self.geocode_base_url}/geocoding/v5/mapbox.places/{quote(address, safe='')}.json"
        params: Dict[str, Any] = {"limit": 1}
        if self.mapbox_access_token:
            params["access_token"] = self.mapbox_access_token
        data = self._get_json(url, params, "location")
        features = data.get("features") or []
        if not features:
            raise LocationNotFoundError(NOT_FOUND_MESSAGE, details=data)
        try:
            return GeocodeResult.from_feature(features[0])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise WeatherServiceError("location service returned an unexpected payload", details=data) from e

    def forecast(self, latitude: float, longitude: float) -> Forecast:
        """Fetch current conditions at a coordinate.

        API
        ---
        - Method/Path: ``GET /current``
        - Query: ``access_key``, ``query={latitude},{longitude}``, ``units=m``

        Notes
        -----
        The provider answers unknown locations with HTTP 200 and an ``error``
        object in the body; that case is raised as ``LocationNotFoundError``.
        """
        params: Dict[str, Any] = {"query": f"{latitude},{longitude}", "units": "m"}
        if self.weatherstack_access_key:
            params["access_key"] = self.weatherstack_access_key
        data = self._get_json(f"{self.forecast_base_url}/current", params, "weather")
        if data.get("error"):
            raise LocationNotFoundError(NOT_FOUND_MESSAGE, details=data["error"])
        try:
            return Forecast.from_payload(data)
        except (KeyError, TypeError, ValueError) as e:
            raise WeatherServiceError("weather service returned an unexpected payload", details=data) from e

    def lookup(self, address: str) -> WeatherReport:
        """Geocode an address and fetch its current weather."""
        start_time = time.time()
        ok = False
        try:
            place = self.geocode(address)
            forecast = self.forecast(place.latitude, place.longitude)
            ok = True
            return WeatherReport(address=address, location=place.location, forecast=forecast.summary())
        finally:
            log_weather_lookup(address, ok, (time.time() - start_time) * 1000)
