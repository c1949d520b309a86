import inspect
import logging
import typing
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..client import AmadeusClient
from ..config import Config
from .protocol import (
    CallToolRequest,
    CallToolResult,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JsonRpcRequest,
    JsonRpcResponse,
    MCP_PROTOCOL_VERSION,
    METHOD_NOT_FOUND,
    create_tool_definition,
)

logger = logging.getLogger(__name__)

ToolHandler = Callable[[AmadeusClient, BaseModel], Awaitable[Any]]


def _json_type(annotation: Any) -> str:
    # Optional[X] -> X
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    if typing.get_origin(annotation) is typing.Union:
        if set(args) == {int, float}:
            return "number"
        if len(args) == 1:
            annotation = args[0]

    if annotation == int:
        return "integer"
    elif annotation == float:
        return "number"
    elif annotation == bool:
        return "boolean"
    elif annotation == list:
        return "array"
    elif annotation == dict:
        return "object"
    return "string"


def schema_from_model(model: Type[BaseModel]) -> Dict[str, Any]:
    """Build a JSON Schema for a tool's arguments from its pydantic model."""
    parameters = {
        "type": "object",
        "properties": {},
        "required": []
    }

    for field_name, field in model.model_fields.items():
        param_name = field.alias or field_name
        parameters["properties"][param_name] = {
            "type": _json_type(field.annotation),
            "description": field.description or f"Parameter {param_name}"
        }
        if field.is_required():
            parameters["required"].append(param_name)

    return parameters


class MCPServer:
    """
    Hosts the Amadeus tools and answers MCP requests.

    Every tool call first checks that credentials are configured and gives
    the exchange rate cache a chance to refresh, then validates the
    arguments and runs the tool against the shared AmadeusClient.
    """

    def __init__(self, client: AmadeusClient, name: str = Config.SERVER_NAME, version: str = Config.SERVER_VERSION,
                 validate_config: Callable[[], Any] = Config.validate):
        self.client = client
        self.name = name
        self.version = version
        self.validate_config = validate_config
        self.tools: Dict[str, ToolHandler] = {}
        self.tool_models: Dict[str, Type[BaseModel]] = {}
        self.tool_definitions: List[Dict[str, Any]] = []

    def register_tool(self, func: ToolHandler, args_model: Type[BaseModel], name: str = None, description: str = None):
        """Register an async tool function taking (client, validated_args)."""
        if name is None:
            name = func.__name__
        if description is None:
            description = inspect.cleandoc(func.__doc__ or "")

        self.tools[name] = func
        self.tool_models[name] = args_model
        self.tool_definitions.append(create_tool_definition(name, description, schema_from_model(args_model)))

    def list_tools(self) -> List[Dict[str, Any]]:
        return self.tool_definitions

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> CallToolResult:
        try:
            self.validate_config()

            refresh_error = await self.client.rates.refresh_if_stale()
            if refresh_error is not None:
                logger.warning(str(refresh_error), extra={"tool": name})

            if name not in self.tools:
                logger.warning(f"Unknown tool requested: {name}")
                return CallToolResult.from_error(f"Unknown tool: {name}")

            args = self.tool_models[name].model_validate(arguments or {})
            logger.info(f"Calling tool {name}", extra={"tool": name})
            result = await self.tools[name](self.client, args)
            return CallToolResult.from_json(result)
        except ValidationError as e:
            logger.warning(f"Invalid arguments for {name}: {e}", extra={"tool": name})
            return CallToolResult.from_error(f"Invalid arguments for {name}: {e}")
        except Exception as e:
            logger.error(f"Tool {name} failed: {e}", extra={"tool": name})
            return CallToolResult.from_error(e)

    def initialize_result(self) -> Dict[str, Any]:
        return {
            "protocolVersion": MCP_PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.name, "version": self.version},
        }

    async def handle_message(self, message: Any) -> Optional[Dict[str, Any]]:
        """Route one decoded JSON-RPC message; returns None for notifications."""
        request_id = message.get("id") if isinstance(message, dict) else None
        try:
            request = JsonRpcRequest.model_validate(message)
        except ValidationError as e:
            return JsonRpcResponse.failure(request_id, INVALID_REQUEST, f"Invalid request: {e}").to_dict()

        method = request.method
        logger.debug(f"Handling method: {method}", extra={"request_id": request.id})

        if method.startswith("notifications/"):
            return None

        if method == "initialize":
            result = self.initialize_result()
        elif method == "ping":
            result = {}
        elif method == "tools/list":
            result = {"tools": self.list_tools()}
        elif method == "tools/call":
            try:
                call = CallToolRequest.model_validate(request.params or {})
            except ValidationError as e:
                return JsonRpcResponse.failure(request.id, INVALID_PARAMS, f"Invalid params: {e}").to_dict()
            result = (await self.call_tool(call.name, call.arguments)).to_dict()
        else:
            if request.is_notification:
                return None
            return JsonRpcResponse.failure(request.id, METHOD_NOT_FOUND, f"Method '{method}' not found").to_dict()

        if request.is_notification:
            return None
        return JsonRpcResponse(result=result, id=request.id).to_dict()
