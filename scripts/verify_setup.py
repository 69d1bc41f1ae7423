"""Verify that the setup is correct before running the version checker."""
import asyncio
import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from version_checker.domain.errors import ConfigurationError, FetchFailure
from version_checker.infrastructure.config import load_repositories, load_settings
from version_checker.infrastructure.wordpress_client import WordPressVersionClient

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


def check_settings():
    """Check that environment variables parse."""
    print("Checking environment variables...")
    
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ {e}")
        return False
    
    print("✅ Environment variables are valid")
    print(f"   BOT_LOGIN: {settings.bot_login}")
    print(f"   CHECK_INTERVAL_HOURS: {settings.check_interval_hours}")
    if settings.dry_run:
        print("   DRY_RUN enabled, no issues will be created")
    return True


def check_repository_list():
    """Check the repository list file."""
    print("\nChecking repository list...")
    
    path = Path(os.getenv("REPOS_FILE", "data/repos.json"))
    try:
        repositories = load_repositories(path)
    except ConfigurationError as e:
        print(f"❌ {e}")
        return False
    
    print(f"✅ {len(repositories)} repositories configured")
    for repository in repositories:
        print(f"   {repository.full_name}: {repository.path}")
    return True


def check_github_token():
    """Verify GitHub token is present."""
    print("\nChecking GitHub token...")
    
    token = os.getenv("GITHUB_TOKEN")
    if not token:
        print("⚠️  GITHUB_TOKEN not set, issues can't be created")
        return False
    
    print("✅ GitHub token set")
    print(f"   Token prefix: {token[:10]}...")
    return True


def check_latest_version():
    """Fetch the latest WordPress version once."""
    print("\nChecking WordPress.org API...")
    
    async def fetch():
        client = WordPressVersionClient()
        try:
            return await client.fetch_latest_version()
        finally:
            await client.close()
    
    try:
        latest = asyncio.run(fetch())
    except FetchFailure as e:
        print(f"❌ Failed to fetch latest WordPress version: {e}")
        return False
    
    print(f"✅ Latest WordPress version: {latest}")
    return True


def main():
    """Run all verification checks."""
    print("=" * 60)
    print("WordPress Version Checker - Setup Verification")
    print("=" * 60)
    
    checks = [
        ("Environment Variables", check_settings),
        ("Repository List", check_repository_list),
        ("GitHub Token", check_github_token),
        ("WordPress.org API", check_latest_version),
    ]
    
    results = {}
    for name, check_func in checks:
        results[name] = check_func()
    
    print("\n" + "=" * 60)
    print("Verification Summary")
    print("=" * 60)
    
    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"{status}: {name}")
    
    if all(results.values()):
        print("\n✅ All checks passed! Ready to run the checker.")
        print("\nNext steps:")
        print("  python check_versions.py")
        sys.exit(0)
    else:
        print("\n❌ Some checks failed. Please fix the issues above.")
        print("\nCommon solutions:")
        print("  - Set GITHUB_TOKEN: export GITHUB_TOKEN=your_token")
        print("  - Point REPOS_FILE at a JSON list of {owner, repo, path} entries")
        sys.exit(1)


if __name__ == "__main__":
    main()
