"""Backend adapters for Confluence and Jira search.

Each adapter wraps one authenticated httpx.AsyncClient and issues a single
bounded GET request per search. Adapters do no retries, pagination or local
filtering; the backend evaluates the query.

Adapters are only built for backends with complete credentials, so callers
hold them as Optional values (see Backends).
"""
from dataclasses import dataclass
from typing import Any, Optional
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .config import BackendConfig, BackendKind, Settings
from .errors import BackendError

logger = logging.getLogger("atlassian-mcp.backends")

DEFAULT_LIMIT = 10
MAX_LIMIT = 50

JIRA_API_PATH = "/rest/api/2"


class SearchQuery(BaseModel):
    """A bounded search: backend query language text plus a result cap."""

    model_config = ConfigDict(frozen=True)

    expression: str
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)


class SearchBackend:
    """Common request handling for the backend adapters.

    Subclasses set `kind`, `search_path` and `results_key`, and build the
    query parameters for their query language.
    """

    kind: BackendKind
    search_path: str
    results_key: str

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    def build_params(self, query: SearchQuery) -> dict[str, Any]:
        raise NotImplementedError

    async def search(self, query: SearchQuery) -> list[dict]:
        """Run one search request and return the backend's raw records.

        Raises:
            BackendError: on network failure, non-2xx status or a response
                body without the expected result list.
        """
        try:
            response = await self.client.get(self.search_path, params=self.build_params(query))
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.kind.value} search failed:")
            logger.error(f"  Status: {e.response.status_code}")
            logger.error(f"  URL: {e.request.url}")
            raise BackendError(str(e)) from e
        except httpx.RequestError as e:
            logger.error(f"{self.kind.value} search request error: {type(e).__name__}: {e}")
            raise BackendError(str(e)) from e
        except ValueError as e:
            logger.error(f"{self.kind.value} search returned a non-JSON body: {e}")
            raise BackendError(f"Invalid JSON response: {e}") from e

        results = body.get(self.results_key) if isinstance(body, dict) else None
        if not isinstance(results, list):
            raise BackendError(f"Malformed response: missing '{self.results_key}' list")

        logger.info(f"{self.kind.value} search returned {len(results)} records")
        return results

    async def aclose(self) -> None:
        await self.client.aclose()


class ConfluenceBackend(SearchBackend):
    """Confluence content search using CQL."""

    kind = BackendKind.CONFLUENCE
    search_path = "/rest/api/content/search"
    results_key = "results"

    def build_params(self, query: SearchQuery) -> dict[str, Any]:
        # Expanding the space keeps each result self-describing
        return {"cql": query.expression, "limit": query.limit, "expand": "space"}

    @classmethod
    def from_config(cls, config: BackendConfig) -> "ConfluenceBackend":
        client = httpx.AsyncClient(
            base_url=config.url,
            auth=(config.username, config.api_token),
            timeout=None,
        )
        return cls(client)


class JiraBackend(SearchBackend):
    """Jira issue search using JQL against the REST API v2."""

    kind = BackendKind.JIRA
    search_path = "/search"
    results_key = "issues"

    def build_params(self, query: SearchQuery) -> dict[str, Any]:
        return {"jql": query.expression, "maxResults": query.limit}

    @classmethod
    def from_config(cls, config: BackendConfig) -> "JiraBackend":
        client = httpx.AsyncClient(
            base_url=f"{config.url}{JIRA_API_PATH}",
            auth=(config.username, config.api_token),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=None,
        )
        return cls(client)


@dataclass(frozen=True)
class Backends:
    """The adapters available for this process; None means not configured."""

    confluence: Optional[ConfluenceBackend] = None
    jira: Optional[JiraBackend] = None

    def get(self, kind: BackendKind) -> Optional[SearchBackend]:
        if kind is BackendKind.CONFLUENCE:
            return self.confluence
        return self.jira

    async def aclose(self) -> None:
        for backend in (self.confluence, self.jira):
            if backend is not None:
                await backend.aclose()


def build_backends(settings: Settings) -> Backends:
    """Build an adapter for every backend whose credentials are complete."""
    confluence_config = settings.confluence
    jira_config = settings.jira

    backends = Backends(
        confluence=ConfluenceBackend.from_config(confluence_config) if confluence_config else None,
        jira=JiraBackend.from_config(jira_config) if jira_config else None,
    )

    if confluence_config:
        logger.info(f"Confluence search enabled for {confluence_config.url}")
    else:
        logger.info("Confluence not configured (CONFLUENCE_URL, CONFLUENCE_USERNAME, CONFLUENCE_API_TOKEN)")
    if jira_config:
        logger.info(f"Jira search enabled for {jira_config.url}")
    else:
        logger.info("Jira not configured (JIRA_URL, JIRA_USERNAME, JIRA_API_TOKEN)")

    return backends
