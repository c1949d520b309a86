from .mcp_server import MCPServer
from .protocol import CallToolResult, JsonRpcRequest, JsonRpcResponse, Tool
