"""
Station geocoding.

Fills in latitude/longitude for stations that do not have them yet by looking
the station name up with OpenStreetMap Nominatim.

Policy per station:
- No result: leave the row untouched and move on
- Lookup or parse failure: log it and move on
- Success: update that one row by primary key
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from geopy.exc import GeopyError
from geopy.extra.rate_limiter import RateLimiter
from geopy.geocoders import Nominatim
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import Settings
from app.models import Station


logger = logging.getLogger(__name__)

UPDATED = "updated"
NOT_FOUND = "not_found"
FAILED = "failed"


@dataclass
class GeocodeSummary:
    """Outcome counts for one geocoding pass."""
    updated: int = 0
    not_found: int = 0
    failed: int = 0
    cancelled: bool = False

    def record(self, outcome: str):
        setattr(self, outcome, getattr(self, outcome) + 1)

    @property
    def processed(self) -> int:
        return self.updated + self.not_found + self.failed


def build_geocoder(settings: Settings) -> Callable:
    """
    Create the Nominatim lookup used by the geocoding pass.

    The lookup is rate limited to one call per `geocoder_min_delay` seconds
    and retried up to `geocoder_max_retries` times on service errors, waiting
    `geocoder_error_wait` seconds before each retry. Errors that survive the
    retries are raised to the caller.
    """
    geolocator = Nominatim(
        user_agent=settings.geocoder_user_agent,
        timeout=settings.geocoder_timeout
    )
    return RateLimiter(
        geolocator.geocode,
        min_delay_seconds=settings.geocoder_min_delay,
        max_retries=settings.geocoder_max_retries,
        error_wait_seconds=settings.geocoder_error_wait,
        swallow_exceptions=False
    )


def stations_missing_coordinates(db: Session) -> List[Station]:
    """Stations with no latitude or no longitude, in id order."""
    return db.query(Station).filter(
        or_(Station.latitude.is_(None), Station.longitude.is_(None))
    ).order_by(Station.id).all()


def build_query(station: Station) -> str:
    """Lookup string for a station."""
    return f"{station.name} station"


def _first_candidate(result):
    # A list comes back when the lookup is asked for every match
    if isinstance(result, (list, tuple)):
        return result[0] if result else None
    return result


def geocode_station(db: Session, station: Station, geocode: Callable) -> str:
    """
    Geocode one station and store its coordinates.

    Args:
        db: Database session
        station: Station to resolve
        geocode: Callable taking a query string and returning a location
            (an object with `latitude`/`longitude`), a list of them, or None

    Returns:
        UPDATED, NOT_FOUND or FAILED
    """
    query = build_query(station)
    try:
        candidate = _first_candidate(geocode(query))
        if candidate is None:
            logger.info("No geocoding result for station %s (%r)", station.id, query)
            return NOT_FOUND
        latitude = float(candidate.latitude)
        longitude = float(candidate.longitude)
    except (GeopyError, ValueError, TypeError, AttributeError) as e:
        logger.error("Geocoding failed for station %s (%r): %s", station.id, query, e)
        return FAILED

    try:
        db.query(Station).filter(Station.id == station.id).update(
            {Station.latitude: latitude, Station.longitude: longitude},
            synchronize_session="fetch"
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Could not save coordinates for station %s: %s", station.id, e)
        return FAILED

    logger.info("Geocoded station %s (%s) to %.6f, %.6f", station.id, station.name, latitude, longitude)
    return UPDATED


async def run_geocoder(
    session_factory: Callable[[], Session],
    geocode: Callable,
    stop_event: Optional[asyncio.Event] = None
) -> GeocodeSummary:
    """
    Geocode every station that is missing coordinates, one at a time.

    Each lookup runs in a worker thread so the event loop keeps serving
    requests. `stop_event` is checked before each station; once set, the
    pass returns with `cancelled` set and the remaining stations untouched.
    """
    summary = GeocodeSummary()
    db = session_factory()
    try:
        try:
            stations = stations_missing_coordinates(db)
        except SQLAlchemyError as e:
            logger.error("Could not load stations to geocode: %s", e)
            return summary

        logger.info("Geocoding %d station(s)", len(stations))
        for station in stations:
            if stop_event is not None and stop_event.is_set():
                summary.cancelled = True
                logger.info("Geocoding stopped after %d station(s)", summary.processed)
                break
            outcome = await asyncio.to_thread(geocode_station, db, station, geocode)
            summary.record(outcome)
    finally:
        db.close()

    logger.info(
        "Geocoding finished: %d updated, %d not found, %d failed",
        summary.updated, summary.not_found, summary.failed
    )
    return summary
