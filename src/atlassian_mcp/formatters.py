"""Formatting of search results for MCP text content."""
import json


def format_results(records: list[dict]) -> str:
    """Render backend records as indented JSON, unchanged in shape."""
    return json.dumps(records, indent=2, ensure_ascii=False)
