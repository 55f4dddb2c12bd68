"""
HTML endpoints for routes: listing, the station map, and adding a route.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db import get_db
from app.models import Route, RouteStation, Station
from app.rendering import templates, server_error
from app.schemas import RouteCreate, StationResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["Routes"])


@router.get("/routes")
def list_routes(request: Request, db: Session = Depends(get_db)):
    """List every route, ordered by id."""
    try:
        routes = db.query(Route).order_by(Route.id).all()
    except SQLAlchemyError:
        logger.exception("Failed to list routes")
        return server_error()
    return templates.TemplateResponse(request, "routes.html", {"routes": routes})


@router.get("/routes/{route_id}")
def route_map(route_id: int, request: Request, db: Session = Depends(get_db)):
    """
    Show the stations of a route on a map.

    An unknown route, or one without stations, renders an empty map.
    """
    try:
        route = db.query(Route).filter(Route.id == route_id).first()
        stations = db.query(Station).join(
            RouteStation, RouteStation.station_id == Station.id
        ).filter(
            RouteStation.route_id == route_id
        ).order_by(Station.id).all()
        station_data = [
            StationResponse.model_validate(s).model_dump() for s in stations
        ]
    except SQLAlchemyError:
        logger.exception("Failed to load stations for route %s", route_id)
        return server_error()
    return templates.TemplateResponse(
        request,
        "map.html",
        {"route_id": route_id, "route": route, "stations": station_data}
    )


@router.post("/add/route")
def add_route(
    name: str = Form(...),
    code: str = Form(...),
    region: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    operator: Optional[str] = Form(None),
    length_km: Optional[str] = Form(None),
    game_id: Optional[str] = Form(None),
    release_date: Optional[str] = Form(None),
    db: Session = Depends(get_db)
):
    """Insert a route from the add form and go back to the route list."""
    try:
        route_in = RouteCreate(
            name=name,
            code=code,
            region=region,
            country=country,
            operator=operator,
            length_km=length_km,
            game_id=game_id,
            release_date=release_date
        )
        db.add(Route(**route_in.model_dump()))
        db.commit()
    except (ValueError, SQLAlchemyError):
        db.rollback()
        logger.exception("Failed to add route %r", code)
        return server_error()
    return RedirectResponse("/routes", status_code=status.HTTP_303_SEE_OTHER)
