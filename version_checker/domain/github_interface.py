"""GitHub API interface (port) for reading readmes and managing issues.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from version_checker.domain.models import Notification, RepositoryRef


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations."""
    
    @abstractmethod
    async def get_file_contents(self, repository: RepositoryRef) -> str:
        """Read the descriptor file of a repository.
        
        Args:
            repository: Repository and path of the file to read
            
        Returns:
            Decoded UTF-8 file contents
            
        Raises:
            DescriptorReadFailure: When the file cannot be read
        """
        pass
    
    @abstractmethod
    async def list_issues_by_creator(
        self,
        repository: RepositoryRef,
        creator: str
    ) -> List[Notification]:
        """List open and closed issues of a repository created by one user.
        
        Raises:
            NotificationQueryFailure: When the listing call fails
        """
        pass
    
    @abstractmethod
    async def create_issue(
        self,
        repository: RepositoryRef,
        title: str,
        body: str
    ) -> Notification:
        """Create an issue in a repository.
        
        Raises:
            NotificationCreateFailure: When the issue cannot be created
        """
        pass
    
    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
