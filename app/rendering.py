"""
Template rendering and the shared error response for HTML endpoints.
"""

from pathlib import Path

from fastapi.responses import PlainTextResponse
from fastapi.templating import Jinja2Templates


BASE_DIR = Path(__file__).resolve().parent
VIEWS_DIR = BASE_DIR / "views"
PUBLIC_DIR = BASE_DIR / "public"

templates = Jinja2Templates(directory=str(VIEWS_DIR))


def server_error() -> PlainTextResponse:
    """The only failure response the HTML endpoints give."""
    return PlainTextResponse("Internal Server Error", status_code=500)
