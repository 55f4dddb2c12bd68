"""
SQLAlchemy ORM models for the train route catalogue.

Domain Model:
- User: Catalogue contributor account
- Route: A rail line from a train simulator product
- Station: A stop on one or more routes, optionally geocoded
- RouteStation: Association row linking a station to a route
- Timetable: A named schedule for a route
- Train: Rolling stock
- Service: One scheduled run within a timetable
- Platform: A platform at a station
- TrainEvent: Something that happens to a service at a station
"""

from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, Boolean, Text, func
from sqlalchemy.orm import relationship

from app.db import Base


class User(Base):
    """
    Represents a catalogue user.

    Attributes:
        id: Primary key
        username: Login name (unique)
        email: Contact address (unique)
        password_hash: Hashed password, never the plain text
        created_at: When the account was created
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(100), unique=True, nullable=False)
    password_hash = Column(Text, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class Route(Base):
    """
    Represents a simulator route.

    Attributes:
        id: Primary key
        name: Route name
        code: Unique route code (e.g., "GWML")
        region: Region the route covers
        country: Country the route is in
        operator: Train operating company
        length_km: Route length in kilometres
        game_id: Identifier of the game or product the route ships with
        release_date: When the route was released
    """
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(20), unique=True, nullable=False, index=True)
    region = Column(String(100))
    country = Column(String(100))
    operator = Column(String(100))
    length_km = Column(Float)
    game_id = Column(String(50))
    release_date = Column(Date)

    # Relationships
    stations = relationship(
        "Station",
        secondary="route_stations",
        order_by="Station.id",
        viewonly=True
    )
    timetables = relationship("Timetable", back_populates="route")

    def __repr__(self):
        return f"<Route(id={self.id}, code='{self.code}', name='{self.name}')>"


class Station(Base):
    """
    Represents a station on one or more routes.

    Latitude and longitude stay null until the geocoder resolves them.

    Attributes:
        id: Primary key
        name: Station name
        code: Unique station code
        latitude: Resolved latitude, or None
        longitude: Resolved longitude, or None
    """
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    code = Column(String(20), unique=True, nullable=False, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    # Relationships
    route_links = relationship("RouteStation", back_populates="station", cascade="all, delete-orphan")
    platforms = relationship("Platform", back_populates="station")

    @property
    def route_ids(self):
        """Ids of the routes this station belongs to, ascending."""
        return sorted(link.route_id for link in self.route_links)

    @property
    def is_geocoded(self):
        return self.latitude is not None and self.longitude is not None

    def __repr__(self):
        return f"<Station(id={self.id}, code='{self.code}', name='{self.name}')>"


class RouteStation(Base):
    """Links a station to a route (many-to-many)."""
    __tablename__ = "route_stations"

    route_id = Column(Integer, ForeignKey("routes.id"), primary_key=True)
    station_id = Column(Integer, ForeignKey("stations.id"), primary_key=True)

    station = relationship("Station", back_populates="route_links")

    def __repr__(self):
        return f"<RouteStation(route_id={self.route_id}, station_id={self.station_id})>"


class Timetable(Base):
    """
    Represents a named schedule for a route.

    Attributes:
        id: Primary key
        route_id: Foreign key to the route
        name: Timetable name
        created_by: Foreign key to the user who made it
        created_at: When the timetable was created
    """
    __tablename__ = "timetables"

    id = Column(Integer, primary_key=True, index=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    name = Column(String(100), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    route = relationship("Route", back_populates="timetables")
    services = relationship("Service", back_populates="timetable")

    def __repr__(self):
        return f"<Timetable(id={self.id}, route_id={self.route_id}, name='{self.name}')>"


class Train(Base):
    """
    Represents a train (rolling stock).

    Attributes:
        id: Primary key
        name: Display name (e.g., "Class 43 HST")
        model: Model designation
        operator: Operating company
        max_speed: Maximum speed in km/h
        power_type: Diesel, electric, steam, ...
        year_built: Year of construction
    """
    __tablename__ = "trains"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    model = Column(String(100))
    operator = Column(String(100))
    max_speed = Column(Integer)
    power_type = Column(String(50))
    year_built = Column(Integer)

    def __repr__(self):
        return f"<Train(id={self.id}, name='{self.name}')>"


class Service(Base):
    """
    Represents one scheduled run of a train within a timetable.

    Departure and arrival times are stored as text exactly as entered.
    """
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    timetable_id = Column(Integer, ForeignKey("timetables.id"), nullable=False)
    train_id = Column(Integer, ForeignKey("trains.id"), nullable=True)
    start_station_id = Column(Integer, ForeignKey("stations.id"), nullable=True)
    end_station_id = Column(Integer, ForeignKey("stations.id"), nullable=True)
    departure_time = Column(String(20))
    arrival_time = Column(String(20))
    service_type = Column(String(50))
    notes = Column(Text)

    # Relationships
    timetable = relationship("Timetable", back_populates="services")
    train = relationship("Train")
    start_station = relationship("Station", foreign_keys=[start_station_id])
    end_station = relationship("Station", foreign_keys=[end_station_id])
    events = relationship("TrainEvent", back_populates="service")

    def __repr__(self):
        return f"<Service(id={self.id}, timetable_id={self.timetable_id}, {self.departure_time} → {self.arrival_time})>"


class Platform(Base):
    """A numbered platform at a station."""
    __tablename__ = "platforms"

    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False)
    platform_number = Column(String(10), nullable=False)
    length_m = Column(Integer)
    accessible = Column(Boolean, default=False, nullable=False)

    station = relationship("Station", back_populates="platforms")

    def __repr__(self):
        return f"<Platform(id={self.id}, station_id={self.station_id}, number='{self.platform_number}')>"


class TrainEvent(Base):
    """An arrival, departure or other event for a service at a station."""
    __tablename__ = "train_events"

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False)
    event_type = Column(String(50), nullable=False)
    event_time = Column(String(20))
    notes = Column(Text)

    service = relationship("Service", back_populates="events")
    station = relationship("Station")

    def __repr__(self):
        return f"<TrainEvent(id={self.id}, service_id={self.service_id}, type='{self.event_type}')>"
