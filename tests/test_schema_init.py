"""
Tests for schema initialization.
"""

import pytest
from sqlalchemy import create_engine

from app.db import Base
from app.services.schema_service import init_schema, list_tables


EXPECTED_TABLES = [
    "platforms",
    "route_stations",
    "routes",
    "services",
    "stations",
    "timetables",
    "train_events",
    "trains",
    "users",
]


@pytest.fixture
def fresh_engine(tmp_path):
    """Engine on an empty SQLite file."""
    engine = create_engine(f"sqlite:///{tmp_path / 'catalogue.db'}")
    yield engine
    engine.dispose()


def test_init_schema_creates_all_tables(fresh_engine):
    """Test that every catalogue table is created."""
    assert list_tables(fresh_engine) == []
    assert init_schema(fresh_engine) is True
    assert list_tables(fresh_engine) == EXPECTED_TABLES


def test_init_schema_is_idempotent(fresh_engine):
    """Test that running twice gives no error and no extra tables."""
    assert init_schema(fresh_engine) is True
    assert init_schema(fresh_engine) is True
    assert list_tables(fresh_engine) == EXPECTED_TABLES


def test_init_schema_keeps_existing_data(fresh_engine):
    """Test that re-running does not touch existing rows."""
    init_schema(fresh_engine)
    with fresh_engine.begin() as conn:
        conn.execute(Base.metadata.tables["routes"].insert().values(name="Line", code="L1"))

    init_schema(fresh_engine)

    with fresh_engine.connect() as conn:
        rows = conn.execute(Base.metadata.tables["routes"].select()).fetchall()
    assert len(rows) == 1


def test_init_schema_completes_partial_schema(fresh_engine):
    """Test that a half-created schema is finished on the next run."""
    Base.metadata.tables["users"].create(bind=fresh_engine)
    Base.metadata.tables["routes"].create(bind=fresh_engine)

    assert init_schema(fresh_engine) is True
    assert list_tables(fresh_engine) == EXPECTED_TABLES


def test_init_schema_store_unavailable(tmp_path, caplog):
    """Test that an unreachable database is logged, not raised."""
    engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'catalogue.db'}")

    with caplog.at_level("ERROR", logger="app.services.schema_service"):
        assert init_schema(engine) is False

    assert "Schema initialization stopped" in caplog.text
    engine.dispose()
