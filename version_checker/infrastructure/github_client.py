"""GitHub REST API client implementation with rate limiting and retry logic."""
import asyncio
import base64
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type
)
from version_checker.domain.errors import (
    DescriptorReadFailure,
    NotificationCreateFailure,
    NotificationQueryFailure
)
from version_checker.domain.github_interface import IGitHubClient
from version_checker.domain.models import Notification, RepositoryRef


logger = logging.getLogger(__name__)


class RateLimitException(Exception):
    """Exception raised when rate limit is hit."""
    pass


class GitHubAPIError(Exception):
    """Exception raised when GitHub answers with an error status."""
    
    def __init__(self, status: int, message: str):
        super().__init__(f"GitHub API returned {status}: {message}")
        self.status = status


class GitHubRestClient(IGitHubClient):
    """GitHub REST API client with rate limiting and retry mechanisms.
    
    Implements the IGitHubClient port, providing an anti-corruption layer
    between the domain and GitHub's API. Only read-only calls are retried;
    issue creation is attempted once so a retry can never file a duplicate.
    """
    
    API_URL = "https://api.github.com"
    
    def __init__(
        self,
        access_token: Optional[str] = None,
        timeout_seconds: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.
        
        Args:
            access_token: GitHub token, requests are anonymous without one
            timeout_seconds: Total timeout applied to every request
            session: Existing session to use instead of creating one lazily
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None
        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "wordpress-version-checker",
        }
        if access_token:
            self._headers["Authorization"] = f"Bearer {access_token}"
    
    def _init_session(self) -> aiohttp.ClientSession:
        """Initialize the HTTP session (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session
    
    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send one request and return the decoded JSON body.
        
        Raises:
            RateLimitException: When the rate limit is exhausted
            GitHubAPIError: When GitHub answers with an error status
        """
        session = self._init_session()
        
        async with session.request(
            method,
            f"{self.API_URL}{path}",
            params=params,
            json=payload,
            headers=self._headers,
            timeout=self._timeout
        ) as response:
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining is not None:
                logger.debug(f"Rate limit remaining: {remaining}")
            
            if response.status in (403, 429) and remaining == "0":
                logger.warning(f"Rate limit exhausted on {method} {path}")
                raise RateLimitException(f"Rate limit exhausted on {method} {path}")
            
            if response.status >= 400:
                raise GitHubAPIError(response.status, await response.text())
            
            return await response.json(content_type=None)
    
    @retry(
        retry=retry_if_exception_type(RateLimitException),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=4, max=60),
        reraise=True
    )
    async def _get(self, path: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET with retry on rate limiting."""
        return await self._request("GET", path, params=params)
    
    async def get_file_contents(self, repository: RepositoryRef) -> str:
        """Read and decode a file through the contents endpoint.
        
        Args:
            repository: Repository and path of the file
            
        Returns:
            File contents decoded as UTF-8, invalid bytes replaced
        """
        path = (
            f"/repos/{repository.owner}/{repository.repo}"
            f"/contents/{quote(repository.path)}"
        )
        try:
            data = await self._get(path)
            if not isinstance(data, dict) or not isinstance(data.get("content"), str):
                raise ValueError(f"{repository.path} is not a file")
            raw = base64.b64decode(data["content"])
        except (
            RateLimitException,
            GitHubAPIError,
            aiohttp.ClientError,
            asyncio.TimeoutError,
            ValueError
        ) as e:
            raise DescriptorReadFailure(
                f"Couldn't read {repository.path} of {repository.full_name}: {e}"
            ) from e
        
        return raw.decode("utf-8", errors="replace")
    
    async def list_issues_by_creator(
        self,
        repository: RepositoryRef,
        creator: str
    ) -> List[Notification]:
        """List issues of any state created by the given login."""
        params = {"creator": creator, "state": "all", "per_page": "100"}
        try:
            data = await self._get(
                f"/repos/{repository.owner}/{repository.repo}/issues",
                params=params
            )
            if not isinstance(data, list):
                raise ValueError("issue listing is not a list")
            return [self._to_notification(item) for item in data]
        except (
            RateLimitException,
            GitHubAPIError,
            aiohttp.ClientError,
            asyncio.TimeoutError,
            ValueError
        ) as e:
            raise NotificationQueryFailure(
                f"Couldn't list issues of {repository.full_name}: {e}"
            ) from e
    
    async def create_issue(
        self,
        repository: RepositoryRef,
        title: str,
        body: str
    ) -> Notification:
        """Create an issue. Never retried."""
        try:
            data = await self._request(
                "POST",
                f"/repos/{repository.owner}/{repository.repo}/issues",
                payload={"title": title, "body": body}
            )
            notification = self._to_notification(data)
        except (
            RateLimitException,
            GitHubAPIError,
            aiohttp.ClientError,
            asyncio.TimeoutError,
            ValueError
        ) as e:
            raise NotificationCreateFailure(
                f"Couldn't create issue in {repository.full_name}: {e}"
            ) from e
        
        logger.info(f"Created issue #{notification.number} in {repository.full_name}")
        return notification
    
    @staticmethod
    def _to_notification(item: Any) -> Notification:
        """Transform a GitHub issue payload to a domain entity."""
        if not isinstance(item, dict) or "number" not in item:
            raise ValueError(f"unexpected issue payload: {item!r}")
        return Notification(
            number=item["number"],
            title=item.get("title", ""),
            state=item.get("state", "open"),
            creator=(item.get("user") or {}).get("login")
        )
    
    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None
