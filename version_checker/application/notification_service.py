"""Notification service filing at most one staleness issue per repository."""
import logging
from typing import Set
from version_checker.domain.github_interface import IGitHubClient
from version_checker.domain.models import RepositoryRef, SweepOutcome


logger = logging.getLogger(__name__)

ISSUE_TITLE = "The plugin hasn't been tested with the latest version of WordPress"


def build_issue_body(tested_version: str, latest_version: str) -> str:
    """Render the body of a staleness issue."""
    return (
        "There is a new WordPress version that the plugin hasn't been tested with. "
        "Please test it and then change the \"Tested up to\" field in the plugin readme.\n"
        "\n"
        f"**Tested up to:** {tested_version}\n"
        f"**Latest version:** {latest_version}\n"
        "\n"
        "You may then close this issue as it won't be done automatically."
    )


class NotificationService:
    """Deduplicates and files staleness issues.
    
    Issues previously created by the bot login, open or closed, count as an
    existing notification. The listing is a soft signal: two processes racing
    between list and create can both file an issue. Within one sweep the
    set of repositories already notified closes that gap; it is reset at
    every sweep so a deleted issue is filed again on the next tick.
    """
    
    def __init__(self, github_client: IGitHubClient, bot_login: str, dry_run: bool = False):
        """Initialize notification service.
        
        Args:
            github_client: GitHub API client implementation
            bot_login: Creator login identifying issues filed by this system
            dry_run: Log the issue that would be created instead of creating it
        """
        self._github_client = github_client
        self._bot_login = bot_login
        self._dry_run = dry_run
        self._notified: Set[RepositoryRef] = set()
    
    def begin_sweep(self) -> None:
        """Forget the repositories notified during the previous sweep."""
        self._notified.clear()
    
    async def notify_if_needed(
        self,
        repository: RepositoryRef,
        tested_version: str,
        latest_version: str
    ) -> SweepOutcome:
        """File a staleness issue unless one was filed before.
        
        Args:
            repository: Stale repository
            tested_version: Declared "Tested up to" version
            latest_version: Latest WordPress version
            
        Returns:
            NOTIFIED, ALREADY_NOTIFIED, or STALE in dry-run mode
            
        Raises:
            NotificationQueryFailure: Listing failed, nothing was created
            NotificationCreateFailure: Creation failed
        """
        if repository in self._notified:
            logger.info(f"Already notified {repository.full_name} during this sweep")
            return SweepOutcome.ALREADY_NOTIFIED
        
        if self._dry_run:
            logger.info(
                f"Dry run: would create issue in {repository.full_name} "
                f"(tested up to {tested_version}, latest {latest_version})"
            )
            return SweepOutcome.STALE
        
        existing = await self._github_client.list_issues_by_creator(repository, self._bot_login)
        if existing:
            logger.info(
                f"Repository {repository.full_name} already has {len(existing)} "
                f"issue(s) by {self._bot_login}, not creating another"
            )
            self._notified.add(repository)
            return SweepOutcome.ALREADY_NOTIFIED
        
        await self._github_client.create_issue(
            repository,
            ISSUE_TITLE,
            build_issue_body(tested_version, latest_version)
        )
        self._notified.add(repository)
        return SweepOutcome.NOTIFIED
