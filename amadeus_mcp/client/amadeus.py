"""
Thin async client for the four Amadeus search endpoints used as tools.

Each search fetches a bearer token from the TokenCache, sends one GET and
returns the provider's JSON body as-is. Only activity results are modified:
their prices are annotated with a USD equivalent.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import Config
from ..errors import UpstreamError
from .rates import ExchangeRateCache, annotate_prices
from .token_cache import TokenCache

logger = logging.getLogger(__name__)

FLIGHT_OFFERS_PATH = "/v2/shopping/flight-offers"
CITIES_PATH = "/v1/reference-data/locations/cities"
ACTIVITIES_PATH = "/v1/shopping/activities"
HOTELS_BY_CITY_PATH = "/v1/reference-data/locations/hotels/by-city"


class AmadeusClient:
    """
    Issues authenticated search requests against the Amadeus self-service API.

    Args:
        http: Shared async HTTP client (closed by the owner, see aclose()).
        tokens: Bearer token cache.
        rates: Exchange rate cache used for activity price annotation.
        base_url: Amadeus API root.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        tokens: TokenCache,
        rates: ExchangeRateCache,
        base_url: str = Config.AMADEUS_BASE_URL,
    ):
        self.http = http
        self.tokens = tokens
        self.rates = rates
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_config(cls, http: Optional[httpx.AsyncClient] = None) -> "AmadeusClient":
        """Build a client and both caches from Config."""
        if http is None:
            if Config.HTTP_TIMEOUT is None:
                http = httpx.AsyncClient()
            else:
                http = httpx.AsyncClient(timeout=Config.HTTP_TIMEOUT)
        return cls(
            http=http,
            tokens=TokenCache(http),
            rates=ExchangeRateCache(http),
        )

    async def aclose(self):
        await self.http.aclose()

    async def _get(self, label: str, path: str, params: Dict[str, Any]) -> Any:
        token = await self.tokens.get_token()
        url = self.base_url + path
        logger.info(f"{label} search: GET {path}")

        try:
            response = await self.http.get(
                url,
                headers={"Authorization": f"Bearer {token}"},
                params=params,
            )
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            detail = _provider_error_detail(e.response) or str(e)
            logger.warning(f"{label} search failed with HTTP {e.response.status_code}: {detail}")
            raise UpstreamError(f"{label} search failed: {detail}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"{label} search failed: {e}")
            raise UpstreamError(f"{label} search failed: {e}") from e

    async def search_flights(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        return_date: Optional[str] = None,
        adults: int = 1,
        travel_class: Optional[str] = None,
        max_results: int = 5,
    ) -> Any:
        """Search flight offers, priced in USD by the provider."""
        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults or 1,
            "max": max_results or 5,
            "currencyCode": "USD",
        }
        if return_date:
            params["returnDate"] = return_date
        if travel_class:
            params["travelClass"] = travel_class

        return await self._get("Flight", FLIGHT_OFFERS_PATH, params)

    async def search_city(self, city_name: str) -> Any:
        """Keyword search for cities, at most five results."""
        return await self._get("City", CITIES_PATH, {"keyword": city_name, "max": 5})

    async def search_tours_activities(self, latitude: float, longitude: float, radius: Optional[float] = 1) -> Any:
        """Search activities around a coordinate and annotate their prices in USD."""
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "radius": radius or 1,
        }
        body = await self._get("Activities", ACTIVITIES_PATH, params)
        return annotate_prices(body, self.rates.rates)

    async def search_hotels(
        self,
        city_code: str,
        check_in_date: Optional[str] = None,
        check_out_date: Optional[str] = None,
        adults: Optional[int] = None,
        radius: Optional[float] = None,
        radius_unit: Optional[str] = None,
        ratings: Optional[str] = None,
        price_range: Optional[str] = None,
    ) -> Any:
        """List hotels in a city. Optional filters are sent only when given."""
        params: Dict[str, Any] = {"cityCode": city_code}
        optional = {
            "checkInDate": check_in_date,
            "checkOutDate": check_out_date,
            "adults": adults,
            "radius": radius,
            "radiusUnit": radius_unit,
            "ratings": ratings,
            "priceRange": price_range,
        }
        params.update({key: value for key, value in optional.items() if value})

        return await self._get("Hotel", HOTELS_BY_CITY_PATH, params)


def _provider_error_detail(response: httpx.Response) -> Optional[str]:
    """Return errors[0].detail from an Amadeus error body, if present."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    errors = body.get("errors")
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return errors[0].get("detail") or None
    return None
