"""Route handlers for the health probe and the world listings."""

from fastapi import APIRouter, Depends, Request

from app.errors import DatabaseConnectionError
from app.logging_config import logger
from app.models.city import City
from app.models.country import Country
from app.models.envelope import ErrorResponse, ListResponse
from app.models.health import HealthResponse
from app.world_db.database import WorldDatabase
from app.world_db.queries import list_cities, list_countries

router = APIRouter()
api_router = APIRouter(
    prefix="/api/v1", responses={500: {"model": ErrorResponse}}
)


def get_database(request: Request) -> WorldDatabase:
    """Return the database handle the application was built with.

    Raises:
        DatabaseConnectionError: If the application has no open database.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        logger.error("DB_NOT_CONNECTED")
        raise DatabaseConnectionError("Database is not connected")
    return database


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Report that the API process is up. Never touches the database."""
    logger.info("HEALTH_CHECK")
    return HealthResponse()


@api_router.get("/countries", response_model=ListResponse[Country])
async def get_countries(
    database: WorldDatabase = Depends(get_database),
) -> ListResponse[Country]:
    """List every country, most populous first.

    Returns:
        The success envelope with all countries.
    """
    logger.info("FETCH_COUNTRIES")
    return ListResponse[Country].of(await list_countries(database))


@api_router.get("/cities", response_model=ListResponse[City])
async def get_cities(
    database: WorldDatabase = Depends(get_database),
) -> ListResponse[City]:
    """List every city by ascending ID.

    Returns:
        The success envelope with all cities.
    """
    logger.info("FETCH_CITIES")
    return ListResponse[City].of(await list_cities(database))
