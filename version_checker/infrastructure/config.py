"""Settings and repository list loading from the environment."""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, TypeVar

from version_checker.domain.errors import ConfigurationError
from version_checker.domain.models import RepositoryRef


logger = logging.getLogger(__name__)

DEFAULT_BOT_LOGIN = "wordpress-version-checker[bot]"

_TRUE_VALUES = {"1", "true", "yes", "on"}

T = TypeVar("T")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, read once at startup."""
    github_token: Optional[str]
    bot_login: str
    repos_file: Path
    check_interval_hours: float
    http_timeout_seconds: float
    max_concurrency: int
    dry_run: bool
    run_once: bool
    log_level: str

    @property
    def check_interval_seconds(self) -> float:
        return self.check_interval_hours * 60 * 60


def _env_number(name: str, default: str, cast: Callable[[str], T]) -> T:
    raw = os.getenv(name, default)
    try:
        value = cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in _TRUE_VALUES


def load_settings() -> Settings:
    """Build settings from environment variables.
    
    Raises:
        ConfigurationError: When a numeric variable is invalid
    """
    return Settings(
        github_token=os.getenv("GITHUB_TOKEN") or None,
        bot_login=os.getenv("BOT_LOGIN", DEFAULT_BOT_LOGIN),
        repos_file=Path(os.getenv("REPOS_FILE", "data/repos.json")),
        check_interval_hours=_env_number("CHECK_INTERVAL_HOURS", "24", float),
        http_timeout_seconds=_env_number("HTTP_TIMEOUT_SECONDS", "30", float),
        max_concurrency=_env_number("MAX_CONCURRENCY", "5", int),
        dry_run=_env_flag("DRY_RUN"),
        run_once=_env_flag("RUN_ONCE"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def load_repositories(path: Path) -> List[RepositoryRef]:
    """Load the monitored repositories from a JSON file.
    
    The file holds a list of objects with "owner", "repo" and "path" keys.
    
    Args:
        path: Location of the JSON file
        
    Returns:
        Repository references in file order
        
    Raises:
        ConfigurationError: When the file is missing, unparsable or malformed
    """
    try:
        with open(path, encoding="utf-8") as f:
            entries = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Couldn't read repository list {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Repository list {path} is not valid JSON: {e}") from e
    
    if not isinstance(entries, list):
        raise ConfigurationError(f"Repository list {path} must be a JSON array")
    
    repositories = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"Entry {index} in {path} is not an object")
        invalid = [
            key for key in ("owner", "repo", "path")
            if not isinstance(entry.get(key), str) or not entry[key].strip()
        ]
        if invalid:
            raise ConfigurationError(
                f"Entry {index} in {path} needs a non-empty string for {', '.join(invalid)}"
            )
        repositories.append(
            RepositoryRef(owner=entry["owner"], repo=entry["repo"], path=entry["path"])
        )
    
    logger.info(f"Loaded {len(repositories)} repositories from {path}")
    return repositories
