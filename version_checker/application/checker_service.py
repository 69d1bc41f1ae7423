"""Checker service orchestrating a sweep over the monitored repositories."""
import asyncio
import logging
import time
from typing import List, Sequence
from version_checker.application.notification_service import NotificationService
from version_checker.domain.errors import (
    FetchFailure,
    MalformedDescriptor,
    NotificationCreateFailure,
    NotificationQueryFailure
)
from version_checker.domain.github_interface import IGitHubClient
from version_checker.domain.models import (
    RepositoryRef,
    RepositoryResult,
    SweepMetrics,
    SweepOutcome
)
from version_checker.domain.version_source_interface import ILatestVersionSource
from version_checker.domain.versions import is_stale, parse_tested_version


logger = logging.getLogger(__name__)


class VersionCheckerService:
    """Application service for checking plugin readmes against WordPress.
    
    Fetches the latest version once per sweep and then checks every
    repository concurrently. A failing repository is logged and recorded;
    only a failed latest-version fetch aborts the sweep.
    """
    
    def __init__(
        self,
        repositories: Sequence[RepositoryRef],
        version_source: ILatestVersionSource,
        github_client: IGitHubClient,
        notifier: NotificationService,
        max_concurrency: int = 5
    ):
        """Initialize checker service.
        
        Args:
            repositories: Repositories to check on every sweep
            version_source: Latest-version source implementation
            github_client: GitHub API client implementation
            notifier: Service filing staleness issues
            max_concurrency: Number of repositories checked at once
        """
        self._repositories = tuple(repositories)
        self._version_source = version_source
        self._github_client = github_client
        self._notifier = notifier
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._lock = asyncio.Lock()
    
    @property
    def is_running(self) -> bool:
        return self._lock.locked()
    
    async def run_sweep(self) -> SweepMetrics:
        """Run one sweep unless another one is still in flight.
        
        Returns:
            SweepMetrics; skipped when a sweep was already running,
            aborted when the latest version couldn't be fetched
        """
        if self._lock.locked():
            logger.warning("Previous sweep is still running, skipping this one")
            return SweepMetrics(latest_version=None, skipped=True)
        
        async with self._lock:
            return await self._sweep()
    
    async def _sweep(self) -> SweepMetrics:
        start_time = time.time()
        
        try:
            latest = await self._version_source.fetch_latest_version()
        except FetchFailure as e:
            logger.error(f"Failed to fetch latest WordPress version. {e}")
            return SweepMetrics(
                latest_version=None,
                duration_seconds=time.time() - start_time,
                aborted=True
            )
        
        self._notifier.begin_sweep()
        logger.info(f"Checking {len(self._repositories)} repositories against WordPress {latest}")
        
        results: List[RepositoryResult] = await asyncio.gather(
            *(self._check_with_limit(repository, latest) for repository in self._repositories)
        )
        
        metrics = SweepMetrics(
            latest_version=latest,
            results=tuple(results),
            duration_seconds=time.time() - start_time
        )
        
        summary = ", ".join(
            f"{outcome.value}={metrics.count(outcome)}"
            for outcome in SweepOutcome
            if metrics.count(outcome)
        )
        logger.info(
            f"Sweep completed: {metrics.repositories_checked} repositories in "
            f"{metrics.duration_seconds:.2f} seconds ({summary or 'nothing to check'})"
        )
        
        return metrics
    
    async def _check_with_limit(self, repository: RepositoryRef, latest: str) -> RepositoryResult:
        async with self._semaphore:
            return await self.check_repository(repository, latest)
    
    async def check_repository(self, repository: RepositoryRef, latest: str) -> RepositoryResult:
        """Check one repository, never raising for expected failures.
        
        Args:
            repository: Repository to check
            latest: Latest WordPress version of this sweep
            
        Returns:
            RepositoryResult describing what happened
        """
        declared = None
        
        try:
            readme = await self._github_client.get_file_contents(repository)
            declared = parse_tested_version(readme)
            
            if not is_stale(declared, latest):
                logger.info(f"Repository {repository.full_name} is up to date ({declared})")
                return RepositoryResult(repository, SweepOutcome.CURRENT, declared)
            
            logger.info(
                f"Repository {repository.full_name} is tested up to {declared}, "
                f"latest is {latest}"
            )
            outcome = await self._notifier.notify_if_needed(repository, declared, latest)
            return RepositoryResult(repository, outcome, declared)
        
        except FetchFailure as e:
            logger.error(
                f"Couldn't get the readme of repository {repository.full_name} "
                f"at path {repository.path}. Error message: {e}"
            )
            return RepositoryResult(repository, SweepOutcome.FETCH_FAILURE, declared, str(e))
        except MalformedDescriptor as e:
            logger.error(
                f"Repository {repository.full_name} doesn't have a valid readme "
                f"at path {repository.path}. {e}"
            )
            return RepositoryResult(repository, SweepOutcome.PARSE_FAILURE, declared, str(e))
        except NotificationQueryFailure as e:
            logger.error(
                f"Couldn't list repository issues for repository {repository.full_name}. "
                f"Error message: {e}"
            )
            return RepositoryResult(repository, SweepOutcome.QUERY_FAILURE, declared, str(e))
        except NotificationCreateFailure as e:
            logger.error(
                f"Couldn't create an issue in repository {repository.full_name}. "
                f"Error message: {e}"
            )
            return RepositoryResult(repository, SweepOutcome.CREATE_FAILURE, declared, str(e))
        except Exception as e:
            logger.error(
                f"Unexpected error while checking repository {repository.full_name} "
                f"at path {repository.path}: {e}",
                exc_info=True
            )
            return RepositoryResult(repository, SweepOutcome.UNEXPECTED_FAILURE, declared, str(e))
    
    async def close(self) -> None:
        """Close connections."""
        await self._version_source.close()
        await self._github_client.close()
