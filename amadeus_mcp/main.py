import asyncio
import logging
import sys

from amadeus_mcp.config import Config, setup_logging
from amadeus_mcp.client import AmadeusClient
from amadeus_mcp.mcp.mcp_server import MCPServer
from amadeus_mcp.mcp.stdio import serve
from amadeus_mcp.tools import register_amadeus_tools

logger = logging.getLogger(__name__)


def build_server() -> MCPServer:
    # Credentials are checked per call, not here, so the server starts without them
    client = AmadeusClient.from_config()
    server = MCPServer(client)
    register_amadeus_tools(server)
    return server


async def run():
    server = build_server()
    try:
        await serve(server)
    finally:
        await server.client.aclose()


def main():
    setup_logging(Config.LOG_LEVEL)

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)

if __name__ == "__main__":
    main()
