"""Country model for rows of the ``country`` table."""

from pydantic import BaseModel, ConfigDict, Field


class Country(BaseModel):
    """One country as stored in the world database."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(alias="Code")
    name: str = Field(alias="Name")
    continent: str = Field(alias="Continent")
    region: str = Field(alias="Region")
    population: int = Field(alias="Population")
