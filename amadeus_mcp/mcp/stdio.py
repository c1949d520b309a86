"""
Line-delimited JSON-RPC transport over stdin/stdout.

Each input line is one JSON-RPC message. Messages are handled as independent
tasks so a slow upstream call does not hold up other requests; each response
is written as one line when its task finishes. Logging goes to stderr.
"""

import asyncio
import json
import logging
import sys
from typing import Callable, Optional, Set

from .mcp_server import MCPServer
from .protocol import JsonRpcResponse, PARSE_ERROR

logger = logging.getLogger(__name__)

# Tool results can be large JSON documents
STREAM_LIMIT = 16 * 1024 * 1024


def _write_stdout(line: str):
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


async def open_stdin_reader() -> asyncio.StreamReader:
    loop = asyncio.get_running_loop()
    reader = asyncio.StreamReader(limit=STREAM_LIMIT)
    protocol = asyncio.StreamReaderProtocol(reader)
    await loop.connect_read_pipe(lambda: protocol, sys.stdin)
    return reader


async def handle_line(server: MCPServer, line: str, write: Callable[[str], None]):
    try:
        message = json.loads(line)
    except json.JSONDecodeError as e:
        logger.warning(f"Parse error: {e}")
        write(json.dumps(JsonRpcResponse.failure(None, PARSE_ERROR, f"Parse error: {e}").to_dict()))
        return

    response = await server.handle_message(message)
    if response is not None:
        write(json.dumps(response))


async def serve(server: MCPServer, reader: Optional[asyncio.StreamReader] = None,
                write: Callable[[str], None] = _write_stdout):
    """Read messages until EOF, then wait for in-flight calls to finish."""
    if reader is None:
        reader = await open_stdin_reader()

    pending: Set[asyncio.Task] = set()
    logger.info(f"{server.name} running on stdio")

    while True:
        try:
            raw = await reader.readline()
        except ValueError as e:
            # line longer than STREAM_LIMIT; the reader has already dropped it
            logger.warning(f"Discarding oversized message: {e}")
            continue
        if not raw:
            break
        line = raw.decode("utf-8", errors="replace").strip()
        if not line:
            continue

        task = asyncio.create_task(handle_line(server, line, write))
        pending.add(task)
        task.add_done_callback(pending.discard)

    if pending:
        await asyncio.gather(*pending)
    logger.info("stdin closed, shutting down")
