"""MCP tool handlers for Atlassian search.

All handlers follow a consistent pattern:
- Accept: arguments dict and the backend adapter for the tool
- Return: list[TextContent] with the raw records rendered by formatters
- Raise: ToolDispatchError subclasses, which carry the protocol error code

call_tool() is the single entry point used by the transport. It re-checks that
the tool's backend is configured instead of trusting the advertised list.
"""
from typing import Any
import logging
import math
import numbers

from mcp.types import TextContent

from . import formatters
from .backends import Backends, DEFAULT_LIMIT, MAX_LIMIT, SearchBackend, SearchQuery
from .errors import (
    BackendError,
    BackendNotConfiguredError,
    InternalToolError,
    InvalidArgumentsError,
    UnknownToolError,
)
from .tools import ToolName

logger = logging.getLogger("atlassian-mcp.handlers")

BACKEND_LABELS = {
    ToolName.CONFLUENCE_SEARCH: "Confluence",
    ToolName.JIRA_SEARCH: "Jira",
}


def resolve_limit(arguments: dict) -> int:
    """Read the optional limit argument and clamp it into [1, MAX_LIMIT]."""
    limit = arguments.get("limit")
    if limit is None:
        return DEFAULT_LIMIT
    if isinstance(limit, bool) or not isinstance(limit, numbers.Real):
        raise InvalidArgumentsError(f"limit must be a number, got {type(limit).__name__}")
    if not math.isfinite(limit):
        raise InvalidArgumentsError("limit must be a finite number")
    return max(1, min(int(limit), MAX_LIMIT))


def require_string(arguments: dict, key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise InvalidArgumentsError(f"Missing required string argument: {key}")
    return value


async def run_search(backend: SearchBackend, query: SearchQuery) -> list[TextContent]:
    """Execute a single search attempt and render the records as text."""
    try:
        records = await backend.search(query)
    except BackendError as e:
        raise InternalToolError(e.message) from e

    return [TextContent(type="text", text=formatters.format_results(records))]


async def handle_confluence_search(
    arguments: dict,
    backend: SearchBackend
) -> list[TextContent]:
    """Search Confluence content with a CQL expression.

    Results are expanded with their space and returned as-is.
    """
    query = SearchQuery(expression=require_string(arguments, "query"), limit=resolve_limit(arguments))
    logger.info(f"Confluence search: cql={query.expression!r} limit={query.limit}")
    return await run_search(backend, query)


async def handle_jira_search(
    arguments: dict,
    backend: SearchBackend
) -> list[TextContent]:
    """Search Jira issues with a JQL expression."""
    query = SearchQuery(expression=require_string(arguments, "jql"), limit=resolve_limit(arguments))
    logger.info(f"Jira search: jql={query.expression!r} maxResults={query.limit}")
    return await run_search(backend, query)


HANDLERS = {
    ToolName.CONFLUENCE_SEARCH: handle_confluence_search,
    ToolName.JIRA_SEARCH: handle_jira_search,
}


async def call_tool(name: str, arguments: Any, backends: Backends) -> list[TextContent]:
    """Validate and route one tool invocation to its backend adapter.

    Raises:
        UnknownToolError: name is not a known tool.
        BackendNotConfiguredError: the tool's backend is absent.
        InvalidArgumentsError: the query argument is missing or limit is not a number.
        InternalToolError: the backend request failed.
    """
    try:
        tool = ToolName(name)
    except ValueError:
        logger.warning(f"Unknown tool requested: {name}")
        raise UnknownToolError(name) from None

    backend = backends.get(tool.backend)
    if backend is None:
        logger.warning(f"Tool {name} requested but its backend is not configured")
        raise BackendNotConfiguredError(f"{BACKEND_LABELS[tool]} is not configured")

    if arguments is None:
        arguments = {}
    elif not isinstance(arguments, dict):
        raise InvalidArgumentsError("Tool arguments must be an object")

    return await HANDLERS[tool](arguments, backend)
