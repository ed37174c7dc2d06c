"""
GitHub repository search client.

Responsibility: Rate-limit, call /search/repositories, and map transport
failures to domain errors. No formatting here; see trend_analyzer.
"""

import logging

import httpx

from app.core.config import (
    GITHUB_ACCEPT,
    GITHUB_API_BASE,
    GITHUB_API_TIMEOUT,
    GITHUB_TOKEN,
    GITHUB_USER_AGENT,
    SEARCH_MAX_RESULTS,
)
from app.core.errors import SearchTimeoutError, SearchTransportError
from app.core.rate_limiter import RateLimiter
from app.schemas.search import SearchResult

logger = logging.getLogger(__name__)

SEARCH_PATH = "/search/repositories"


class GitHubSearchClient:
    """Searches GitHub repositories by stars. Every call waits on the shared rate limiter first."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        base_url: str = GITHUB_API_BASE,
        token: str = GITHUB_TOKEN,
        timeout: float = GITHUB_API_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._headers = {"User-Agent": GITHUB_USER_AGENT, "Accept": GITHUB_ACCEPT}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    async def search(self, term: str, max_results: int = SEARCH_MAX_RESULTS) -> SearchResult:
        """
        Return the top repositories for term, most starred first.

        Raises SearchTimeoutError when GitHub does not answer within the timeout,
        SearchTransportError on a non-2xx status or a connection failure.
        """
        await self.rate_limiter.wait()
        params = {
            "q": term,
            "sort": "stars",
            "order": "desc",
            "per_page": str(max_results),
        }
        logger.info("[github:search] IN  term=%r per_page=%d", term, max_results)
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(SEARCH_PATH, params=params)
        except httpx.TimeoutException as e:
            logger.warning("[github:search] timed out after %.1fs term=%r", self.timeout, term)
            raise SearchTimeoutError(term) from e
        except httpx.RequestError as e:
            logger.warning("[github:search] request failed: %s", e)
            raise SearchTransportError(None, f"GitHub API unreachable: {e}") from e

        if not response.is_success:
            logger.warning("[github:search] GitHub error %s: %s", response.status_code, response.text[:200])
            raise SearchTransportError(response.status_code)

        result = SearchResult.model_validate(response.json())
        logger.info("[github:search] OUT total_count=%d items=%d", result.total_count, len(result.items))
        return result
