"""JSON-RPC dispatcher for the MCP endpoint (POST /call)."""
import logging

import cronogramas
import tools
from errors import CronogramasError, ToolNotFoundError

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_INFO = {"name": "cronogramas-mcp", "version": "1.0.0"}

INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


def rpc_result(result, request_id):
    return {"jsonrpc": "2.0", "result": result, "id": request_id}


def rpc_error(code, message, request_id):
    return {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": request_id}


class Dispatcher:
    """Maps JSON-RPC methods to handlers and builds the response envelope."""

    def __init__(self, activity_log):
        self.activity_log = activity_log
        self.methods = {
            "ping": self.ping,
            "initialize": self.initialize,
            "notifications/initialized": self.initialized,
            "tools/list": self.list_tools,
            "tools/call": self.call_tool,
        }

    def dispatch(self, body):
        """Return (response_body, http_status) for one request envelope."""
        if not isinstance(body, dict) or not body.get("jsonrpc") or not body.get("method"):
            request_id = body.get("id") if isinstance(body, dict) else None
            return rpc_error(INVALID_REQUEST, "Invalid Request", request_id), 400

        method = body["method"]
        request_id = body.get("id")
        handler = self.methods.get(method)
        if handler is None:
            return rpc_error(METHOD_NOT_FOUND, f"Method not found: {method}", request_id), 400

        try:
            result = handler(body)
        except Exception as e:
            logger.error(f"Error handling {method}: {e}", exc_info=True)
            return rpc_error(INTERNAL_ERROR, str(e), request_id or None), 500

        return rpc_result(result, request_id), 200

    def ping(self, body):
        return {}

    def initialized(self, body):
        return None

    def list_tools(self, body):
        return {"tools": tools.TOOLS}

    def initialize(self, body):
        try:
            projects = cronogramas.get_projects()
        except CronogramasError as e:
            self.activity_log.error("Error loading projects for the initial context", e)
            projects = []

        context = tools.projects_context(projects)
        result = {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": SERVER_INFO,
            "context": {
                "message": "Welcome to the Cronogramas MCP. Here is the initial context:",
                "projectsArray": projects,
                "projectsText": context,
                "projectsInstructions": tools.projects_instructions(context),
                "tono": "Keep a serious, somewhat grumpy tone with the user, but stay respectful",
            },
        }
        self.activity_log.info("Initializing Cronogramas MCP Server, loading context", result)
        return result

    def call_tool(self, body):
        params = body.get("params") or {}
        name = params.get("name")
        arguments = params.get("arguments") or {}

        if not tools.has_tool(name):
            error = ToolNotFoundError(name)
            self.activity_log.error(f"Error running tool {name}", error)
            raise error

        response = tools.call_tool(name, arguments)
        request = {"method": body["method"], "params": body.get("params"), "id": body.get("id")}
        if response.get("isError"):
            self.activity_log.error(f"Error running tool {name}", response["content"][0]["text"])
        self.activity_log.tool_call(name, request, response)
        return response
