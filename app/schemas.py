"""
Pydantic schemas for form input and JSON responses.

Form fields arrive as strings; the schemas coerce them to the column types.
Beyond that coercion nothing is validated.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import List, Optional


def parse_id_list(raw: str) -> List[int]:
    """
    Parse a comma-separated list of ids such as "1, 2, 3".

    Blank entries are ignored and repeated ids are kept once, in first-seen
    order. Any other non-numeric entry raises ValueError.
    """
    ids = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        value = int(token)
        if value not in ids:
            ids.append(value)
    return ids


# ============================================================================
# Station Schemas
# ============================================================================

class StationCreate(BaseModel):
    """Schema for the add-station form."""
    name: str = Field(..., description="Station name")
    code: str = Field(..., description="Unique station code")
    route_ids: List[int] = Field(default_factory=list, description="Routes the station belongs to")

    @field_validator('route_ids', mode='before')
    @classmethod
    def split_route_ids(cls, v):
        """Accept the comma-separated form value as well as a list."""
        if isinstance(v, str):
            return parse_id_list(v)
        return v


class StationResponse(BaseModel):
    """Schema for station responses."""
    id: int
    name: str
    code: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    route_ids: List[int] = []

    model_config = {"from_attributes": True}


# ============================================================================
# Route Schemas
# ============================================================================

class RouteCreate(BaseModel):
    """Schema for the add-route form."""
    name: str
    code: str
    region: Optional[str] = None
    country: Optional[str] = None
    operator: Optional[str] = None
    length_km: Optional[float] = None
    game_id: Optional[str] = None
    release_date: Optional[date] = None

    @field_validator('region', 'country', 'operator', 'length_km', 'game_id', 'release_date', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Empty form fields mean "not given"."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


# ============================================================================
# Health Check Schema
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    schema_ready: bool
