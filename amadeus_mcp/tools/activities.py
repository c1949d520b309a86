from typing import Any, Optional
from pydantic import BaseModel, Field

from ..client import AmadeusClient
from ..mcp.protocol import Number


class ActivitySearchArgs(BaseModel):
    latitude: float = Field(..., description="Latitude of the location")
    longitude: float = Field(..., description="Longitude of the location")
    radius: Optional[Number] = Field(None, description="Search radius in kilometers (default: 1)")


async def get_tours_activities(client: AmadeusClient, args: ActivitySearchArgs) -> Any:
    """Search for tours and activities in a specific location using latitude and longitude coordinates. Prices are converted to USD."""
    return await client.search_tours_activities(
        latitude=args.latitude,
        longitude=args.longitude,
        radius=args.radius or 1,
    )
