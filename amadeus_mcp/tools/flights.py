from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from ..client import AmadeusClient
from ..mcp.protocol import Number


class FlightSearchArgs(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., description="Origin airport IATA code (e.g., 'JFK', 'LAX')")
    destination: str = Field(..., description="Destination airport IATA code (e.g., 'LHR', 'CDG')")
    departure_date: str = Field(..., alias="departureDate", description="Departure date in YYYY-MM-DD format")
    return_date: Optional[str] = Field(None, alias="returnDate", description="Optional return date in YYYY-MM-DD format for round trips")
    adults: Optional[Number] = Field(None, description="Number of adult passengers (default: 1)")
    travel_class: Optional[str] = Field(None, alias="travelClass", description="Travel class: ECONOMY, PREMIUM_ECONOMY, BUSINESS, FIRST")
    max_results: Optional[Number] = Field(None, alias="maxResults", description="Maximum number of results to return (default: 5)")


async def get_flights(client: AmadeusClient, args: FlightSearchArgs) -> Any:
    """Search for flight offers between two cities. Returns flight details including airlines, prices in USD, flight IDs, duration, stops, and travel class."""
    return await client.search_flights(
        origin=args.origin,
        destination=args.destination,
        departure_date=args.departure_date,
        return_date=args.return_date,
        adults=args.adults or 1,
        travel_class=args.travel_class,
        max_results=args.max_results or 5,
    )
