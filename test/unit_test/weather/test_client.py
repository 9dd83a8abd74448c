"""Unit tests for the weather client.

Both providers are served by ``httpx.MockTransport`` handlers on ``mock``
hosts so the offline guard lets the requests through.
"""

from typing import Callable, List

import httpx
import pytest

from taskmanager.server.core.config import WeatherConfig
from taskmanager.weather import (
    LocationNotFoundError,
    WeatherClient,
    WeatherServiceError,
    WeatherServiceUnavailableError,
)

GEOCODE_PAYLOAD = {
    "features": [
        {"center": [-71.0596, 42.3605], "place_name": "Boston, Massachusetts, United States"},
    ]
}
FORECAST_PAYLOAD = {
    "current": {"weather_descriptions": ["Partly cloudy", "Mist"], "temperature": 12, "feelslike": 10},
    "location": {"name": "Boston", "country": "United States of America"},
}


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> WeatherClient:
    return WeatherClient(
        mapbox_access_token="pk.test",
        weatherstack_access_key="ws-key",
        geocode_base_url="http://mock-geocode/",
        forecast_base_url="http://mock-forecast",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def happy_handler(requests_seen):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        if request.url.host == "mock-geocode":
            return httpx.Response(200, json=GEOCODE_PAYLOAD)
        return httpx.Response(200, json=FORECAST_PAYLOAD)

    return handler


class TestGeocode:
    def test_builds_request(self, happy_handler, requests_seen):
        result = _client(happy_handler).geocode("Boston")

        request = requests_seen[0]
        assert request.url.path == "/geocoding/v5/mapbox.places/Boston.json"
        assert request.url.params["access_token"] == "pk.test"
        assert request.url.params["limit"] == "1"
        assert result.latitude == 42.3605
        assert result.longitude == -71.0596
        assert result.location == "Boston, Massachusetts, United States"

    def test_address_is_url_encoded(self, happy_handler, requests_seen):
        _client(happy_handler).geocode("New York?")

        assert "New%20York%3F.json" in requests_seen[0].url.raw_path.decode()

    def test_no_features_is_location_not_found(self):
        client = _client(lambda request: httpx.Response(200, json={"features": []}))

        with pytest.raises(LocationNotFoundError, match="Unable to find location. Try another search."):
            client.geocode("nowhere")

    def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(WeatherServiceUnavailableError, match="Unable to connect to location service!"):
            _client(handler).geocode("Boston")

    def test_http_error_carries_status(self):
        client = _client(lambda request: httpx.Response(401, json={"message": "Not Authorized - Invalid Token"}))

        with pytest.raises(WeatherServiceError) as exc_info:
            client.geocode("Boston")

        assert exc_info.value.status_code == 401
        assert "Invalid Token" in exc_info.value.details


class TestForecast:
    def test_builds_request_and_summary(self, happy_handler, requests_seen):
        forecast = _client(happy_handler).forecast(42.3605, -71.0596)

        params = requests_seen[0].url.params
        assert requests_seen[0].url.path == "/current"
        assert params["query"] == "42.3605,-71.0596"
        assert params["access_key"] == "ws-key"
        assert params["units"] == "m"
        assert forecast.summary() == (
            "Partly cloudy, Mist in Boston (United States of America). "
            "It is currently 12 degrees out. It feels like 10 degrees out"
        )

    def test_error_body_is_location_not_found(self):
        client = _client(lambda request: httpx.Response(200, json={"error": {"code": 615, "info": "Request failed."}}))

        with pytest.raises(LocationNotFoundError):
            client.forecast(0, 0)

    def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with pytest.raises(WeatherServiceUnavailableError, match="Unable to connect to weather service!"):
            _client(handler).forecast(0, 0)

    def test_unexpected_payload(self):
        client = _client(lambda request: httpx.Response(200, json={"current": {}}))

        with pytest.raises(WeatherServiceError, match="unexpected payload"):
            client.forecast(0, 0)


class TestLookup:
    def test_chains_geocode_and_forecast(self, happy_handler, requests_seen):
        report = _client(happy_handler).lookup("Boston")

        assert [request.url.host for request in requests_seen] == ["mock-geocode", "mock-forecast"]
        assert requests_seen[1].url.params["query"] == "42.3605,-71.0596"
        assert report.address == "Boston"
        assert report.location == "Boston, Massachusetts, United States"
        assert report.forecast.startswith("Partly cloudy, Mist in Boston")

    def test_logs_failed_lookup(self, monkeypatch):
        calls = []
        monkeypatch.setattr("taskmanager.weather.client.log_weather_lookup", lambda *args: calls.append(args))
        client = _client(lambda request: httpx.Response(200, json={"features": []}))

        with pytest.raises(LocationNotFoundError):
            client.lookup("nowhere")

        assert calls[0][0] == "nowhere"
        assert calls[0][1] is False


def test_from_config():
    config = WeatherConfig(
        mapbox_access_token="pk",
        weatherstack_access_key="ws",
        mapbox_base_url="http://mock-geocode",
        weatherstack_base_url="http://mock-forecast",
        timeout=2.0,
    )

    client = WeatherClient.from_config(config)

    assert client.mapbox_access_token == "pk"
    assert client.weatherstack_access_key == "ws"
    assert client.geocode_base_url == "http://mock-geocode"
    assert client.forecast_base_url == "http://mock-forecast"
    client.close()
