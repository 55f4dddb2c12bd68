"""
HTML endpoint for adding stations.
"""

import logging

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import RouteStation, Station
from app.rendering import server_error
from app.schemas import StationCreate


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Stations"])


@router.post("/add/station")
def add_station(
    name: str = Form(...),
    code: str = Form(...),
    route_ids: str = Form(""),
    db: Session = Depends(get_db)
):
    """
    Insert a station and link it to the given routes.

    `route_ids` is a comma-separated list such as "1, 2, 3". If any entry is
    not a number nothing is inserted and a 500 is returned.
    """
    try:
        station_in = StationCreate(name=name, code=code, route_ids=route_ids)
        db_station = Station(name=station_in.name, code=station_in.code)
        db_station.route_links = [
            RouteStation(route_id=route_id) for route_id in station_in.route_ids
        ]
        db.add(db_station)
        db.commit()
    except (ValueError, SQLAlchemyError):
        db.rollback()
        logger.exception("Failed to add station %r", code)
        return server_error()
    return RedirectResponse("/routes", status_code=status.HTTP_303_SEE_OTHER)
