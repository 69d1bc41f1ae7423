"""Stub ports for application-layer tests."""
from typing import Dict, List, Optional

from version_checker.domain.errors import (
    DescriptorReadFailure,
    FetchFailure,
    NotificationCreateFailure,
    NotificationQueryFailure
)
from version_checker.domain.github_interface import IGitHubClient
from version_checker.domain.models import Notification, RepositoryRef
from version_checker.domain.version_source_interface import ILatestVersionSource


class StubVersionSource(ILatestVersionSource):
    def __init__(self, latest: str = "6.4.2", fail: bool = False):
        self.latest = latest
        self.fail = fail
        self.calls = 0
        self.closed = False

    async def fetch_latest_version(self) -> str:
        self.calls += 1
        if self.fail:
            raise FetchFailure("Request status code: 500")
        return self.latest

    async def close(self) -> None:
        self.closed = True


class StubGitHubClient(IGitHubClient):
    """In-memory GitHub keeping created issues so later listings see them."""

    def __init__(self):
        self.readmes: Dict[str, str] = {}
        self.issues: Dict[str, List[Notification]] = {}
        self.failing_listings: set = set()
        self.failing_creations: set = set()
        self.read_calls: List[str] = []
        self.list_calls: List[tuple] = []
        self.created: List[tuple] = []
        self.closed = False

    async def get_file_contents(self, repository: RepositoryRef) -> str:
        self.read_calls.append(repository.full_name)
        if repository.full_name not in self.readmes:
            raise DescriptorReadFailure(f"404 for {repository.path}")
        return self.readmes[repository.full_name]

    async def list_issues_by_creator(self, repository: RepositoryRef, creator: str) -> List[Notification]:
        self.list_calls.append((repository.full_name, creator))
        if repository.full_name in self.failing_listings:
            raise NotificationQueryFailure("500 listing issues")
        return list(self.issues.get(repository.full_name, []))

    async def create_issue(self, repository: RepositoryRef, title: str, body: str) -> Notification:
        if repository.full_name in self.failing_creations:
            raise NotificationCreateFailure("422 creating issue")
        self.created.append((repository.full_name, title, body))
        notification = Notification(
            number=len(self.created),
            title=title,
            state="open",
            creator="wordpress-version-checker[bot]"
        )
        self.issues.setdefault(repository.full_name, []).append(notification)
        return notification

    async def close(self) -> None:
        self.closed = True


def readme(tested: Optional[str]) -> str:
    """A minimal plugin readme, without the label when tested is None."""
    lines = [
        "=== Example Plugin ===",
        "Contributors: someone",
        "Requires at least: 5.0",
    ]
    if tested is not None:
        lines.append(f"Tested up to: {tested}")
    lines += ["Stable tag: 1.2.3", "", "== Description ==", "Does things."]
    return "\n".join(lines)
