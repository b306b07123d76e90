"""Atlassian MCP Server - Expose Confluence and Jira search to AI assistants."""
import sys
import asyncio
import logging
import traceback
from typing import Optional

import jsonschema
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from . import __version__
from . import handlers
from . import tools
from .backends import Backends, build_backends
from .config import Settings, get_settings
from .errors import InvalidArgumentsError

SERVER_NAME = "mcp-atlassian"

logger = logging.getLogger("atlassian-mcp")


def configure_logging(level: str = "INFO") -> None:
    """Log to stderr; stdout carries the protocol stream."""
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
        force=True
    )


def create_server(backends: Backends) -> Server:
    """Create the MCP server bound to the configured backends."""
    app = Server(SERVER_NAME, version=__version__)

    @app.list_tools()
    async def list_tools() -> list[types.Tool]:
        """List the search tools for configured backends."""
        return tools.get_tools(backends)

    # Registered directly rather than via @app.call_tool() so that dispatch
    # failures reach the client as JSON-RPC errors with their own codes.
    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        arguments = req.params.arguments or {}
        logger.info(f"Tool call: {name} with arguments: {arguments}")

        tool = tools.get_tool(backends, name)
        if tool is not None:
            try:
                jsonschema.validate(instance=arguments, schema=tool.inputSchema)
            except jsonschema.ValidationError as e:
                logger.warning(f"Invalid arguments for {name}: {e.message}")
                raise InvalidArgumentsError(f"Input validation error: {e.message}") from e

        try:
            content = await handlers.call_tool(name, arguments, backends)
        except McpError as e:
            logger.error(f"Tool call {name} failed ({type(e).__name__}): {e.error.message}")
            raise
        except Exception as e:
            logger.error(f"Unexpected error during {name} call:")
            logger.error(f"  Error type: {type(e).__name__}")
            logger.error(f"  Error message: {str(e)}")
            logger.error(f"  Traceback:\n{traceback.format_exc()}")
            raise McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=f"{type(e).__name__}: {e}")) from e

        return types.ServerResult(types.CallToolResult(content=content, isError=False))

    app.request_handlers[types.CallToolRequest] = call_tool
    return app


async def serve(settings: Settings) -> None:
    """Run the MCP server over stdio until the client disconnects."""
    backends = build_backends(settings)
    app = create_server(backends)
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Atlassian MCP server running on stdio")
            await app.run(read_stream, write_stream, app.create_initialization_options())
    finally:
        await backends.aclose()


def main(settings: Optional[Settings] = None) -> None:
    """Console entry point."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Atlassian MCP server stopped")


if __name__ == "__main__":
    main()
