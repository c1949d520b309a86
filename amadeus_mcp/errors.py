"""Exception hierarchy for the Amadeus MCP server.

Every error raised while serving a tool call derives from AmadeusMCPError and
is turned into an error-flagged tool result by the dispatcher.
"""


class AmadeusMCPError(Exception):
    """Base class for all server errors."""


class ConfigError(AmadeusMCPError):
    """Required configuration (API credentials) is missing."""


class AuthError(AmadeusMCPError):
    """The OAuth2 client-credentials exchange failed."""


class UpstreamError(AmadeusMCPError):
    """A search endpoint answered with a non-2xx status or could not be reached."""


class RefreshError(AmadeusMCPError):
    """Fetching the exchange rate table failed.

    Returned by the rate cache instead of raised so callers can log it
    without interrupting the tool call.
    """
