"""Atlassian MCP Server - Confluence and Jira search for AI assistants.

Modules:
- server: stdio MCP server implementation
- config: environment settings and backend credentials
- backends: Confluence and Jira search adapters
- tools: MCP tool definitions
- handlers: Tool dispatch and handlers
- formatters: Response formatting utilities
- errors: Dispatch error taxonomy
"""

__version__ = "1.0.0"

from . import formatters
from . import tools
from . import handlers

__all__ = ["formatters", "tools", "handlers", "__version__"]
