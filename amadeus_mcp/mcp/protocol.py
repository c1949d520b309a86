import json
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

# JSON-RPC 2.0 Constants
JSONRPC_VERSION = "2.0"
MCP_PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602

# JSON Schema "number": integers stay integers on the wire
Number = Union[int, float]

class JsonRpcRequest(BaseModel):
    method: str
    params: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

class JsonRpcResponse(BaseModel):
    result: Any = None
    error: Optional[Dict[str, Any]] = None
    id: Optional[Union[str, int]] = None
    jsonrpc: str = Field(default=JSONRPC_VERSION, pattern=r"^2\.0$")

    @classmethod
    def failure(cls, request_id: Optional[Union[str, int]], code: int, message: str) -> "JsonRpcResponse":
        return cls(error={"code": code, "message": message}, id=request_id)

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_none=True)
        # A successful response must carry "result" and "id" even when empty
        if self.error is None:
            data.setdefault("result", None)
        data.setdefault("id", None)
        return data

# MCP Specific Structures

class Tool(BaseModel):
    name: str
    description: str
    inputSchema: Dict[str, Any]

class CallToolRequest(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)

class CallToolResult(BaseModel):
    content: List[Dict[str, Any]]
    isError: bool = False

    @classmethod
    def from_json(cls, payload: Any) -> "CallToolResult":
        """Wrap a JSON-serialisable payload as pretty-printed text."""
        return cls(content=[{"type": "text", "text": json.dumps(payload, indent=2)}])

    @classmethod
    def from_error(cls, error: Union[BaseException, str]) -> "CallToolResult":
        return cls(content=[{"type": "text", "text": f"Error: {error}"}], isError=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()

# Helper to create a tool definition
def create_tool_definition(name: str, description: str, parameters: Dict[str, Any]) -> Dict[str, Any]:
    tool = Tool(name=name, description=description, inputSchema=parameters)
    return tool.model_dump()
