"""Main entry point for the WordPress version checker.

This script wires the adapters into the application services and runs the
sweep scheduler.
"""
import asyncio
import os
import sys
import logging
from dotenv import load_dotenv
from version_checker.application.checker_service import VersionCheckerService
from version_checker.application.notification_service import NotificationService
from version_checker.application.scheduler import SweepScheduler
from version_checker.domain.errors import ConfigurationError
from version_checker.infrastructure.config import load_repositories, load_settings
from version_checker.infrastructure.github_client import GitHubRestClient
from version_checker.infrastructure.wordpress_client import WordPressVersionClient

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main():
    """Execute sweeps on the configured interval."""
    try:
        settings = load_settings()
        repositories = load_repositories(settings.repos_file)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)
    
    if not settings.github_token:
        logger.warning("GITHUB_TOKEN not set. Using unauthenticated requests (limited rate).")
    
    # Initialize infrastructure components
    github_client = GitHubRestClient(
        settings.github_token,
        timeout_seconds=settings.http_timeout_seconds
    )
    version_source = WordPressVersionClient(timeout_seconds=settings.http_timeout_seconds)
    
    # Initialize application services
    notifier = NotificationService(
        github_client,
        bot_login=settings.bot_login,
        dry_run=settings.dry_run
    )
    checker = VersionCheckerService(
        repositories=repositories,
        version_source=version_source,
        github_client=github_client,
        notifier=notifier,
        max_concurrency=settings.max_concurrency
    )
    scheduler = SweepScheduler(checker, settings.check_interval_seconds)
    
    try:
        if settings.run_once:
            metrics = await scheduler.run_once()
            
            # Log results
            if metrics is not None and not metrics.aborted:
                logger.info("=" * 50)
                logger.info("Sweep Metrics:")
                logger.info(f"  Latest version: {metrics.latest_version}")
                logger.info(f"  Repositories checked: {metrics.repositories_checked}")
                logger.info(f"  Issues created: {metrics.issues_created}")
                logger.info(f"  Errors: {metrics.errors_encountered}")
                logger.info("=" * 50)
        else:
            await scheduler.run_forever()
    finally:
        await checker.close()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
