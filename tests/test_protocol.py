import json
import unittest
from amadeus_mcp.mcp.protocol import JsonRpcRequest, JsonRpcResponse, Tool, CallToolRequest, CallToolResult
from amadeus_mcp.errors import UpstreamError
from pydantic import ValidationError

class TestProtocol(unittest.TestCase):
    def test_json_rpc_request_valid(self):
        req = JsonRpcRequest(method="tools/list", params={}, id=1)
        self.assertEqual(req.jsonrpc, "2.0")
        self.assertEqual(req.method, "tools/list")
        self.assertFalse(req.is_notification)

    def test_json_rpc_request_invalid_version(self):
        with self.assertRaises(ValidationError):
            JsonRpcRequest(method="tools/list", jsonrpc="1.0")

    def test_notification_has_no_id(self):
        req = JsonRpcRequest(method="notifications/initialized")
        self.assertTrue(req.is_notification)

    def test_response_keeps_empty_result_and_id(self):
        res = JsonRpcResponse(result={}, id=7).to_dict()
        self.assertEqual(res, {"jsonrpc": "2.0", "result": {}, "id": 7})

    def test_failure_response(self):
        res = JsonRpcResponse.failure(None, -32700, "Parse error").to_dict()
        self.assertEqual(res["error"], {"code": -32700, "message": "Parse error"})
        self.assertIsNone(res["id"])
        self.assertNotIn("result", res)

    def test_tool_definition(self):
        tool = Tool(name="get_city", description="desc", inputSchema={"type": "object"})
        self.assertEqual(tool.name, "get_city")

    def test_call_tool_request_defaults_arguments(self):
        self.assertEqual(CallToolRequest(name="get_city").arguments, {})

    def test_call_tool_result(self):
        res = CallToolResult(content=[{"type": "text", "text": "ok"}])
        self.assertFalse(res.isError)
        self.assertEqual(res.to_dict()["content"][0]["text"], "ok")

    def test_from_json_pretty_prints(self):
        res = CallToolResult.from_json({"data": [1, 2]})
        self.assertFalse(res.isError)
        self.assertEqual(res.content[0]["text"], json.dumps({"data": [1, 2]}, indent=2))

    def test_from_error_prefixes_message(self):
        res = CallToolResult.from_error(UpstreamError("City search failed: boom"))
        self.assertTrue(res.isError)
        self.assertEqual(res.content[0], {"type": "text", "text": "Error: City search failed: boom"})

if __name__ == "__main__":
    unittest.main()
