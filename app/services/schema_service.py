"""
Schema initialization.

Creates each catalogue table if it does not exist yet. Tables are created one
statement at a time with no surrounding transaction, so a failure part-way
leaves the tables created so far in place.
"""

import logging
from typing import List

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db import Base
from app import models  # noqa: F401  (registers tables with Base)


logger = logging.getLogger(__name__)


def init_schema(engine: Engine) -> bool:
    """
    Ensure every table exists.

    Safe to run repeatedly. If the database cannot be reached the error is
    logged and False is returned instead of raising, so startup can go on.

    Returns:
        True if all tables were ensured, False otherwise
    """
    created = 0
    for table in Base.metadata.sorted_tables:
        try:
            table.create(bind=engine, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(
                "Schema initialization stopped at table %s after %d of %d tables: %s",
                table.name, created, len(Base.metadata.sorted_tables), e
            )
            return False
        created += 1
    logger.info("Schema ready (%d tables)", created)
    return True


def list_tables(engine: Engine) -> List[str]:
    """Names of the tables currently present in the database."""
    return sorted(inspect(engine).get_table_names())
