"""Unit tests for the ``taskmanager`` command line."""

import httpx
import pytest

from taskmanager import cli
from taskmanager.weather import WeatherClient

GEOCODE_PAYLOAD = {"features": [{"center": [2.35, 48.85], "place_name": "Paris, France"}]}
FORECAST_PAYLOAD = {
    "current": {"weather_descriptions": ["Sunny"], "temperature": 21, "feelslike": 22},
    "location": {"name": "Paris", "country": "France"},
}


def _mock_weather_client(handler) -> WeatherClient:
    return WeatherClient(
        geocode_base_url="http://mock-geocode",
        forecast_base_url="http://mock-forecast",
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def notes_file(tmp_path):
    return str(tmp_path / "notes.json")


def _notes(notes_file, *args):
    return cli.main(["notes", "--file", notes_file, *args])


class TestNotesCommands:
    def test_add_then_read(self, notes_file, capsys):
        assert _notes(notes_file, "add", "--title", "Shopping", "--body", "Eggs") == 0
        assert _notes(notes_file, "read", "--title", "Shopping") == 0

        assert capsys.readouterr().out.splitlines() == ["New note added!", "Shopping", "Eggs"]

    def test_duplicate_add(self, notes_file, capsys):
        _notes(notes_file, "add", "--title", "Shopping", "--body", "Eggs")

        assert _notes(notes_file, "add", "--title", "Shopping", "--body", "Milk") == 1
        assert capsys.readouterr().out.splitlines()[-1] == "Note title taken!"

    def test_remove(self, notes_file, capsys):
        _notes(notes_file, "add", "--title", "Shopping", "--body", "Eggs")

        assert _notes(notes_file, "remove", "--title", "Shopping") == 0
        assert _notes(notes_file, "remove", "--title", "Shopping") == 1
        assert capsys.readouterr().out.splitlines()[-2:] == ["Note removed!", "No note found!"]

    def test_read_missing(self, notes_file, capsys):
        assert _notes(notes_file, "read", "--title", "Nope") == 1
        assert capsys.readouterr().out.strip() == "Note not found!"

    def test_list(self, notes_file, capsys):
        _notes(notes_file, "add", "--title", "One", "--body", "1")
        _notes(notes_file, "add", "--title", "Two", "--body", "2")
        capsys.readouterr()

        assert _notes(notes_file, "list") == 0
        assert capsys.readouterr().out.splitlines() == ["Your notes", "One", "Two"]

    def test_add_requires_body(self, notes_file):
        with pytest.raises(SystemExit) as exc_info:
            _notes(notes_file, "add", "--title", "Shopping")

        assert exc_info.value.code == 2


class TestWeatherCommand:
    def test_prints_location_and_forecast(self, monkeypatch, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.host == "mock-geocode":
                return httpx.Response(200, json=GEOCODE_PAYLOAD)
            return httpx.Response(200, json=FORECAST_PAYLOAD)

        monkeypatch.setattr(cli, "build_weather_client", lambda: _mock_weather_client(handler))

        assert cli.main(["weather", "Paris"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Paris, France",
            "Sunny in Paris (France). It is currently 21 degrees out. It feels like 22 degrees out",
        ]

    def test_multi_word_location_is_joined(self, monkeypatch):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.url.host == "mock-geocode":
                return httpx.Response(200, json=GEOCODE_PAYLOAD)
            return httpx.Response(200, json=FORECAST_PAYLOAD)

        monkeypatch.setattr(cli, "build_weather_client", lambda: _mock_weather_client(handler))

        cli.main(["weather", "New", "York"])

        assert seen[0].url.path == "/geocoding/v5/mapbox.places/New York.json"

    def test_missing_location(self, capsys):
        assert cli.main(["weather"]) == 2
        assert capsys.readouterr().out.strip() == "Please provide a location."

    def test_unknown_location(self, monkeypatch, capsys):
        monkeypatch.setattr(
            cli,
            "build_weather_client",
            lambda: _mock_weather_client(lambda request: httpx.Response(200, json={"features": []})),
        )

        assert cli.main(["weather", "Atlantis"]) == 1
        assert capsys.readouterr().out.strip() == "Unable to find location. Try another search."

    def test_unreachable_service(self, monkeypatch, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        monkeypatch.setattr(cli, "build_weather_client", lambda: _mock_weather_client(handler))

        assert cli.main(["weather", "Paris"]) == 1
        assert capsys.readouterr().out.strip() == "Unable to connect to location service!"


class TestUsersCommand:
    def test_promote_existing_user(self, monkeypatch, capsys):
        async def fake_promote(email: str) -> bool:
            return True

        monkeypatch.setattr(cli, "promote_user", fake_promote)

        assert cli.main(["users", "promote", "andrew@example.com"]) == 0
        assert capsys.readouterr().out.strip() == "andrew@example.com is now an admin."

    def test_promote_unknown_user(self, monkeypatch, capsys):
        async def fake_promote(email: str) -> bool:
            return False

        monkeypatch.setattr(cli, "promote_user", fake_promote)

        assert cli.main(["users", "promote", "ghost@example.com"]) == 1
        assert capsys.readouterr().out.strip() == "No user with email ghost@example.com."


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.main([])
