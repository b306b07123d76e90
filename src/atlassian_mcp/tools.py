"""MCP tool definitions for Atlassian search.

Tools are advertised only for backends that are configured. The Confluence
tool always precedes the Jira tool.
"""
import enum
from typing import Optional

from mcp.types import Tool

from .backends import Backends, MAX_LIMIT
from .config import BackendKind


class ToolName(str, enum.Enum):
    """Every tool this server knows, configured or not."""

    CONFLUENCE_SEARCH = "confluence_search"
    JIRA_SEARCH = "jira_search"

    @property
    def backend(self) -> BackendKind:
        return TOOL_BACKENDS[self]


TOOL_BACKENDS: dict[ToolName, BackendKind] = {
    ToolName.CONFLUENCE_SEARCH: BackendKind.CONFLUENCE,
    ToolName.JIRA_SEARCH: BackendKind.JIRA,
}


def _limit_schema() -> dict:
    return {
        "type": "number",
        "description": f"Results limit (1-{MAX_LIMIT})",
        "minimum": 1,
        "maximum": MAX_LIMIT,
    }


CONFLUENCE_SEARCH_TOOL = Tool(
    name=ToolName.CONFLUENCE_SEARCH.value,
    description="Search Confluence content using CQL",
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "CQL query string"
            },
            "limit": _limit_schema()
        },
        "required": ["query"]
    }
)

JIRA_SEARCH_TOOL = Tool(
    name=ToolName.JIRA_SEARCH.value,
    description="Search Jira issues using JQL",
    inputSchema={
        "type": "object",
        "properties": {
            "jql": {
                "type": "string",
                "description": "JQL query string"
            },
            "limit": _limit_schema()
        },
        "required": ["jql"]
    }
)


def get_tools(backends: Backends) -> list[Tool]:
    """Get the tools offered for the configured backends.

    An empty list is valid: no backend was configured.
    """
    tools = []
    if backends.confluence is not None:
        tools.append(CONFLUENCE_SEARCH_TOOL)
    if backends.jira is not None:
        tools.append(JIRA_SEARCH_TOOL)
    return tools


def get_tool(backends: Backends, name: str) -> Optional[Tool]:
    """Return the advertised tool with this name, if any."""
    for tool in get_tools(backends):
        if tool.name == name:
            return tool
    return None
