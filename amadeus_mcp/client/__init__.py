from .amadeus import AmadeusClient
from .rates import DEFAULT_RATES, ExchangeRateCache, annotate_prices
from .token_cache import TokenCache
