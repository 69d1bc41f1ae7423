"""Latest-version source interface (port).

The infrastructure layer implements this against the WordPress.org API.
"""
from abc import ABC, abstractmethod


class ILatestVersionSource(ABC):
    """Abstract interface for retrieving the latest released version."""
    
    @abstractmethod
    async def fetch_latest_version(self) -> str:
        """Fetch the version currently marked as latest.
        
        Raises:
            FetchFailure: When the source is unreachable or the payload is unusable
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
