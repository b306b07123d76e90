"""Shared fixtures for Atlassian MCP tests."""
import pytest

from atlassian_mcp.backends import Backends
from atlassian_mcp.config import BackendKind
from atlassian_mcp.errors import BackendError

ENV_VARS = [
    "CONFLUENCE_URL",
    "CONFLUENCE_USERNAME",
    "CONFLUENCE_API_TOKEN",
    "JIRA_URL",
    "JIRA_USERNAME",
    "JIRA_API_TOKEN",
    "LOG_LEVEL",
]


class StubBackend:
    """In-memory adapter that records every search it receives."""

    def __init__(self, kind: BackendKind, records=None, error: str = None):
        self.kind = kind
        self.records = records if records is not None else []
        self.error = error
        self.queries = []
        self.closed = False

    async def search(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise BackendError(self.error)
        return self.records

    async def aclose(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's shell credentials out of the tests."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def confluence_stub():
    return StubBackend(BackendKind.CONFLUENCE, records=[{"id": "123", "title": "Runbook"}])


@pytest.fixture
def jira_stub():
    return StubBackend(BackendKind.JIRA, records=[{"key": "X-1", "fields": {"summary": "Broken build"}}])


@pytest.fixture
def all_backends(confluence_stub, jira_stub):
    return Backends(confluence=confluence_stub, jira=jira_stub)


@pytest.fixture
def make_stub():
    return StubBackend
