from .flights import get_flights, FlightSearchArgs
from .cities import get_city, CitySearchArgs
from .activities import get_tours_activities, ActivitySearchArgs
from .hotels import get_hotels, HotelSearchArgs


def register_amadeus_tools(server):
    """Register the four Amadeus search tools on an MCPServer."""
    server.register_tool(get_flights, FlightSearchArgs)
    server.register_tool(get_city, CitySearchArgs)
    server.register_tool(get_tours_activities, ActivitySearchArgs)
    server.register_tool(get_hotels, HotelSearchArgs)
    return server
