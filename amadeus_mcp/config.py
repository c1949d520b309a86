import os
from dotenv import load_dotenv
import json
from pathlib import Path
from typing import Tuple

from .errors import ConfigError

# Load environment variables from .env file in project root
_project_root = Path(__file__).resolve().parent.parent
load_dotenv(_project_root / ".env")

class Config:
    """Configuration management for the Amadeus MCP server."""

    # Upstream endpoints
    AMADEUS_BASE_URL = os.getenv("AMADEUS_BASE_URL", "https://test.api.amadeus.com")
    EXCHANGE_RATE_URL = os.getenv("EXCHANGE_RATE_URL", "https://api.exchangerate-api.com/v4/latest/USD")

    # Cache lifetimes (seconds). Token TTL must stay below the provider's
    # 30 minute token lifetime.
    TOKEN_TTL_SECONDS = float(os.getenv("AMADEUS_TOKEN_TTL_SECONDS", str(25 * 60)))
    RATE_REFRESH_SECONDS = float(os.getenv("EXCHANGE_RATE_REFRESH_SECONDS", str(24 * 60 * 60)))

    # None keeps httpx's default timeout
    HTTP_TIMEOUT = float(os.environ["AMADEUS_HTTP_TIMEOUT"]) if os.getenv("AMADEUS_HTTP_TIMEOUT") else None
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SERVER_NAME = "amadeus-mcp-server"
    SERVER_VERSION = "1.0.0"

    @staticmethod
    def credentials() -> Tuple[str, str]:
        """Read the API key and secret from the environment at call time."""
        return os.getenv("AMADEUS_API_KEY") or "", os.getenv("AMADEUS_API_SECRET") or ""

    @classmethod
    def validate(cls):
        """Raise ConfigError unless both Amadeus credentials are set."""
        api_key, api_secret = cls.credentials()
        if not api_key or not api_secret:
            raise ConfigError(
                "AMADEUS_API_KEY and AMADEUS_API_SECRET environment variables must be set"
            )
        return True

def setup_logging(level="INFO"):
    """Configure structured JSON logging on stderr (stdout carries the protocol)."""
    import logging
    import sys

    handler = logging.StreamHandler(sys.stderr)

    class JsonFormatter(logging.Formatter):
        def format(self, record):
            log_record = {
                "timestamp": self.formatTime(record, self.datefmt),
                "level": record.levelname,
                "message": record.getMessage(),
                "module": record.module,
                "function": record.funcName,
            }
            if hasattr(record, "request_id"):
                log_record["request_id"] = record.request_id
            if hasattr(record, "tool"):
                log_record["tool"] = record.tool
            if record.exc_info:
                log_record["exception"] = self.formatException(record.exc_info)
            return json.dumps(log_record)

    handler.setFormatter(JsonFormatter())

    # Configure root logger
    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplication
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
