"""WordPress.org client resolving the latest released WordPress version."""
import asyncio
import logging
from typing import Optional

import aiohttp
from version_checker.domain.errors import FetchFailure
from version_checker.domain.version_source_interface import ILatestVersionSource


logger = logging.getLogger(__name__)


class WordPressVersionClient(ILatestVersionSource):
    """Reads the stable-check endpoint, which maps every release to a status.
    
    Example payload: {"6.4.1": "outdated", "6.4.2": "latest"}
    """
    
    STABLE_CHECK_URL = "https://api.wordpress.org/core/stable-check/1.0/"
    LATEST_STATUS = "latest"
    
    def __init__(
        self,
        timeout_seconds: float = 30.0,
        session: Optional[aiohttp.ClientSession] = None,
        url: str = STABLE_CHECK_URL
    ):
        self._url = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None
    
    async def fetch_latest_version(self) -> str:
        """Fetch the version whose status is "latest".
        
        Returns:
            Latest version string, e.g. "6.4.2"
            
        Raises:
            FetchFailure: On a non-200 status, transport error, timeout,
                invalid JSON or a payload without a latest entry
        """
        if self._session is None:
            self._session = aiohttp.ClientSession()
        
        try:
            async with self._session.get(self._url, timeout=self._timeout) as response:
                if response.status != 200:
                    raise FetchFailure(f"Request status code: {response.status}")
                releases = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            raise FetchFailure(f"Exception: {e}") from e
        
        if not isinstance(releases, dict):
            raise FetchFailure("Unexpected payload, expected an object of releases")
        
        for version, status in releases.items():
            if status == self.LATEST_STATUS:
                logger.info(f"Latest WordPress version is {version}")
                return version
        
        raise FetchFailure("Couldn't find latest version")
    
    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None
