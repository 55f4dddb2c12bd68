import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.db import engine, SessionLocal
from app.logging_config import configure_logging
from app import schemas
from app.api import pages, routes, stations
from app.rendering import PUBLIC_DIR, server_error
from app.services.geocoding_service import build_geocoder, run_geocoder
from app.services.schema_service import init_schema


logger = logging.getLogger(__name__)


def _log_geocoder_result(task: asyncio.Task):
    if task.cancelled():
        logger.info("Geocoding task cancelled")
    elif task.exception() is not None:
        logger.error("Geocoding task crashed", exc_info=task.exception())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan event handler - runs on startup and shutdown.

    Startup creates the schema before any request is accepted, then starts
    the geocoding pass in the background. Shutdown stops the geocoder.
    """
    configure_logging()
    app.state.schema_ready = await asyncio.to_thread(init_schema, engine)

    stop_event = asyncio.Event()
    geocoder_task = None
    if settings.geocoder_enabled:
        geocoder_task = asyncio.create_task(
            run_geocoder(SessionLocal, build_geocoder(settings), stop_event)
        )
        geocoder_task.add_done_callback(_log_geocoder_result)
    app.state.geocoder_task = geocoder_task

    yield

    stop_event.set()
    if geocoder_task is not None and not geocoder_task.done():
        geocoder_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await geocoder_task


app = FastAPI(
    title="Train Route Catalogue",
    description="Catalogue of train simulator routes, stations and timetables",
    version="1.0.0",
    lifespan=lifespan
)

app.mount("/public", StaticFiles(directory=str(PUBLIC_DIR)), name="public")

app.include_router(pages.router)
app.include_router(routes.router)
app.include_router(stations.router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed input gets the same plain 500 as any other failure."""
    logger.error("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return server_error()


@app.get("/health", response_model=schemas.HealthCheckResponse)
def health_check(request: Request):
    """Health check endpoint."""
    return {
        "status": "ok",
        "schema_ready": getattr(request.app.state, "schema_ready", False)
    }


def run():
    """Serve the app, unless a hosting platform is serving it for us."""
    configure_logging()
    if settings.hosted:
        logger.info("Hosted deployment: not binding a listener")
        return
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
