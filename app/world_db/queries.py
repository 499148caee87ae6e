"""Listing queries for the world schema and their row mapping."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import asyncpg
from pydantic import ValidationError

from app.errors import QueryError, RowMappingError
from app.logging_config import logger
from app.models.city import City
from app.models.country import Country

CITIES_SQL = "SELECT ID, Name, CountryCode, District, Population FROM city ORDER BY ID"
COUNTRIES_SQL = (
    "SELECT Code, Name, Continent, Region, Population FROM country "
    "ORDER BY Population DESC"
)

DRIVER_ERRORS = (OSError, asyncpg.PostgresError, asyncpg.InterfaceError)

Record = TypeVar("Record")


def city_from_row(row: Sequence[Any]) -> City:
    """Build a City from a row in ``CITIES_SQL`` column order."""
    return City(
        id=row[0], name=row[1], country_code=row[2], district=row[3], population=row[4]
    )


def country_from_row(row: Sequence[Any]) -> Country:
    """Build a Country from a row in ``COUNTRIES_SQL`` column order."""
    return Country(
        code=row[0], name=row[1], continent=row[2], region=row[3], population=row[4]
    )


async def _fetch_records(
    db,
    *,
    sql: str,
    from_row: Callable[[Sequence[Any]], Record],
    event_prefix: str,
    entity: str,
    item: str,
) -> list[Record]:
    """Run a listing query and map every row, all or nothing.

    Args:
        db: Object with an async ``fetch(sql)`` method, e.g. WorldDatabase.
        sql: Parameterless SELECT statement.
        from_row: Maps one row onto its model.
        event_prefix: Log event prefix for consistent names.
        entity: Plural noun used in the query error message.
        item: Singular noun used in the mapping error message.

    Returns:
        The mapped records in the order the database returned them.

    Raises:
        QueryError: If the query cannot be executed.
        RowMappingError: If any row does not fit the model.
    """
    try:
        rows = await db.fetch(sql)
    except DRIVER_ERRORS as exc:
        logger.error(f"{event_prefix}_QUERY_FAILED", error=str(exc))
        raise QueryError(f"Failed to fetch {entity}") from exc

    try:
        return [from_row(row) for row in rows]
    except (ValidationError, IndexError, TypeError) as exc:
        logger.error(f"{event_prefix}_ROW_MAPPING_FAILED", error=str(exc))
        raise RowMappingError(f"Failed to scan {item} data") from exc


async def list_cities(db) -> list[City]:
    """Return every city ordered by ascending ID."""
    return await _fetch_records(
        db,
        sql=CITIES_SQL,
        from_row=city_from_row,
        event_prefix="CITIES",
        entity="cities",
        item="city",
    )


async def list_countries(db) -> list[Country]:
    """Return every country ordered by descending population.

    Countries with equal population come back in whatever order the
    database produces.
    """
    return await _fetch_records(
        db,
        sql=COUNTRIES_SQL,
        from_row=country_from_row,
        event_prefix="COUNTRIES",
        entity="countries",
        item="country",
    )
