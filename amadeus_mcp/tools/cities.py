from typing import Any
from pydantic import BaseModel, ConfigDict, Field

from ..client import AmadeusClient


class CitySearchArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_name: str = Field(..., alias="cityName", description="Name of the city to search for")


async def get_city(client: AmadeusClient, args: CitySearchArgs) -> Any:
    """Search for city information including name, country, region, IATA code, and geographic coordinates."""
    return await client.search_city(args.city_name)
