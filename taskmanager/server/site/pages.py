"""
Site Pages.

Server-rendered pages (index, about, help, 404) built from Jinja2 templates,
plus the ``/weather`` JSON endpoint the index page script calls.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from taskmanager.core.logging_config import get_logger
from taskmanager.server.core.config import settings
from taskmanager.server.services.deps import WeatherClientDep
from taskmanager.weather import LocationNotFoundError, WeatherServiceError, WeatherServiceUnavailableError

logger = get_logger(__name__)

SERVER_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = SERVER_DIR / "templates"
STATIC_DIR = SERVER_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["site"])


def render_page(request: Request, template: str, title: str, status_code: int = 200, **context) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        template,
        {"title": title, "name": settings.site_author, **context},
        status_code=status_code,
    )


def render_not_found(request: Request, message: str = "Page not found") -> HTMLResponse:
    return render_page(request, "404.html", "404", status_code=status.HTTP_404_NOT_FOUND, error_message=message)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(request: Request):
    return render_page(request, "index.html", "Weather App")


@router.get("/about", response_class=HTMLResponse, include_in_schema=False)
async def about(request: Request):
    return render_page(request, "about.html", "About Page")


@router.get("/help", response_class=HTMLResponse, include_in_schema=False)
async def help_page(request: Request):
    return render_page(request, "help.html", "Help Page", help_text="This is some useful text")


@router.get("/help/{article:path}", response_class=HTMLResponse, include_in_schema=False)
async def help_article(request: Request, article: str):
    return render_not_found(request, "Help article not found")


@router.get(
    "/weather",
    summary="Weather Lookup",
    description="Geocode an address and return a one-line forecast for it.",
    responses={
        200: {"description": "Forecast found"},
        400: {"description": "You must provide an address!"},
        404: {"description": "Unable to find location"},
        502: {"description": "The weather provider returned an error"},
        503: {"description": "A weather provider could not be reached"},
    },
)
def weather(client: WeatherClientDep, address: Optional[str] = None):
    """
    Look up the current weather for an address.

    Errors are returned as `{"error": message}` so the page script can show
    them in place of the forecast.
    """
    if not address or not address.strip():
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "You must provide an address!"})
    try:
        report = client.lookup(address.strip())
    except LocationNotFoundError as e:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": e.message})
    except WeatherServiceUnavailableError as e:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"error": e.message})
    except WeatherServiceError as e:
        logger.warning(f"Weather lookup for {address!r} failed: {e.message} (status={e.status_code})")
        return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"error": e.message})
    return {"location": report.location, "forecast": report.forecast, "address": report.address}
