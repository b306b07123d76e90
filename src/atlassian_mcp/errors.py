"""Error taxonomy for tool dispatch.

Dispatch errors subclass McpError so the protocol layer can answer with the
matching JSON-RPC error code. Unknown tools and tools whose backend is not
configured share METHOD_NOT_FOUND; the separate classes exist for logging.
"""
from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS, METHOD_NOT_FOUND


class BackendError(Exception):
    """Raised by a backend adapter when a search request fails."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ToolDispatchError(McpError):
    """Base class for failures surfaced to the calling agent."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(ErrorData(code=self.code, message=message))


class UnknownToolError(ToolDispatchError):
    """The requested tool name is not one this server knows."""

    code = METHOD_NOT_FOUND

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.tool_name = name


class BackendNotConfiguredError(ToolDispatchError):
    """The tool exists but its backend had no credentials at startup."""

    code = METHOD_NOT_FOUND


class InvalidArgumentsError(ToolDispatchError):
    code = INVALID_PARAMS


class InternalToolError(ToolDispatchError):
    """A backend call failed; the message is the backend's, unmodified."""

    code = INTERNAL_ERROR
