"""Domain models representing core business entities."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class RepositoryRef:
    """Immutable reference to a monitored plugin repository.

    Loaded once from static configuration and never modified at runtime.
    """
    owner: str
    repo: str
    path: str

    @property
    def full_name(self) -> str:
        """Returns the full repository name (owner/repo)."""
        return f"{self.owner}/{self.repo}"


class SweepOutcome(Enum):
    """Result of checking a single repository during a sweep."""
    CURRENT = "current"
    STALE = "stale"
    PARSE_FAILURE = "parse_failure"
    FETCH_FAILURE = "fetch_failure"
    ALREADY_NOTIFIED = "already_notified"
    NOTIFIED = "notified"
    QUERY_FAILURE = "query_failure"
    CREATE_FAILURE = "create_failure"
    UNEXPECTED_FAILURE = "unexpected_failure"

    @property
    def is_error(self) -> bool:
        return self in _ERROR_OUTCOMES


_ERROR_OUTCOMES = frozenset({
    SweepOutcome.PARSE_FAILURE,
    SweepOutcome.FETCH_FAILURE,
    SweepOutcome.QUERY_FAILURE,
    SweepOutcome.CREATE_FAILURE,
    SweepOutcome.UNEXPECTED_FAILURE,
})


@dataclass(frozen=True)
class Notification:
    """An issue filed in a repository."""
    number: int
    title: str
    state: str
    creator: Optional[str] = None


@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of one repository check."""
    repository: RepositoryRef
    outcome: SweepOutcome
    declared_version: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class SweepMetrics:
    """Metrics for a sweep operation."""
    latest_version: Optional[str]
    results: Tuple[RepositoryResult, ...] = field(default_factory=tuple)
    duration_seconds: float = 0.0
    aborted: bool = False
    skipped: bool = False

    @property
    def repositories_checked(self) -> int:
        return len(self.results)

    @property
    def issues_created(self) -> int:
        return self.count(SweepOutcome.NOTIFIED)

    @property
    def errors_encountered(self) -> int:
        return sum(1 for result in self.results if result.outcome.is_error)

    def count(self, outcome: SweepOutcome) -> int:
        """Number of repositories that ended with the given outcome."""
        return sum(1 for result in self.results if result.outcome is outcome)
