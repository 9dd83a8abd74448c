"""Weather lookup: geocode an address, then fetch its current conditions."""

from .client import WeatherClient
from .errors import LocationNotFoundError, WeatherServiceError, WeatherServiceUnavailableError
from .models import Forecast, GeocodeResult, WeatherReport

__all__ = [
    "Forecast",
    "GeocodeResult",
    "LocationNotFoundError",
    "WeatherClient",
    "WeatherReport",
    "WeatherServiceError",
    "WeatherServiceUnavailableError",
]
