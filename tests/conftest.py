"""Shared fixtures for application-layer tests."""
import pytest

from stubs import StubGitHubClient, StubVersionSource, readme


@pytest.fixture
def version_source():
    return StubVersionSource()


@pytest.fixture
def github():
    return StubGitHubClient()


@pytest.fixture
def make_readme():
    return readme
