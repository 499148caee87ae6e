"""City model for rows of the ``city`` table."""

from pydantic import BaseModel, ConfigDict, Field


class City(BaseModel):
    """One city as stored in the world database."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(alias="ID")
    name: str = Field(alias="Name")
    country_code: str = Field(alias="CountryCode")
    district: str = Field(alias="District")
    population: int = Field(alias="Population")
