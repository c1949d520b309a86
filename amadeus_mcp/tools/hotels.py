from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..client import AmadeusClient
from ..mcp.protocol import Number


class HotelSearchArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_code: str = Field(..., alias="cityCode", description="City IATA code (e.g., 'PAR' for Paris, 'NYC' for New York)")
    check_in_date: Optional[str] = Field(None, alias="checkInDate", description="Check-in date in YYYY-MM-DD format")
    check_out_date: Optional[str] = Field(None, alias="checkOutDate", description="Check-out date in YYYY-MM-DD format")
    adults: Optional[Number] = Field(None, description="Number of adult guests (default: 1)")
    radius: Optional[Number] = Field(None, description="Search radius (default: 5)")
    radius_unit: Optional[str] = Field(None, alias="radiusUnit", description="Unit for radius: KM or MILE (default: KM)")
    ratings: Optional[str] = Field(None, description="Filter by ratings (e.g., '3,4,5')")
    price_range: Optional[str] = Field(None, alias="priceRange", description="Price range filter (e.g., '50-200')")


async def get_hotels(client: AmadeusClient, args: HotelSearchArgs) -> Any:
    """Search for hotels in a city using the city's IATA code. Returns hotel information including names, ratings, and locations."""
    return await client.search_hotels(
        city_code=args.city_code,
        check_in_date=args.check_in_date,
        check_out_date=args.check_out_date,
        adults=args.adults,
        radius=args.radius,
        radius_unit=args.radius_unit,
        ratings=args.ratings,
        price_range=args.price_range,
    )
