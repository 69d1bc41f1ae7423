"""Tests for tested-version parsing and staleness."""
import pytest
from version_checker.domain.errors import MalformedDescriptor
from version_checker.domain.versions import is_stale, parse_tested_version


@pytest.mark.parametrize("version", ["6.4", "6.4.2", "5", "6.5-beta1"])
def test_parse_returns_declared_version(make_readme, version):
    """Test that the value of the label line is returned as is."""
    assert parse_tested_version(make_readme(version)) == version


def test_parse_takes_last_token():
    """Test that only the last token of the label line is used."""
    assert parse_tested_version("Tested up to: WordPress 6.3") == "6.3"


def test_parse_handles_crlf_and_extra_spacing():
    """Test Windows line endings and padding around the value."""
    text = "=== Plugin ===\r\nTested up to:    6.2   \r\nStable tag: 1.0\r\n"
    
    assert parse_tested_version(text) == "6.2"


def test_parse_without_label_fails(make_readme):
    """Test that a readme lacking the label is malformed."""
    with pytest.raises(MalformedDescriptor):
        parse_tested_version(make_readme(None))


def test_parse_empty_text_fails():
    """Test that an empty readme is malformed."""
    with pytest.raises(MalformedDescriptor):
        parse_tested_version("")


def test_parse_label_is_case_sensitive():
    """Test that a lowercase label doesn't match."""
    with pytest.raises(MalformedDescriptor):
        parse_tested_version("tested up to: 6.4")


def test_parse_label_must_start_the_line():
    """Test that an indented label doesn't match."""
    with pytest.raises(MalformedDescriptor):
        parse_tested_version("  Tested up to: 6.4")


def test_parse_empty_label_line_fails():
    """Test that a label line carrying no value is malformed."""
    with pytest.raises(MalformedDescriptor):
        parse_tested_version("Tested up to:   \n")


def test_parse_first_label_line_wins():
    """Test that a later label line is ignored."""
    text = "Tested up to: 6.1\nTested up to: 6.4\n"
    
    assert parse_tested_version(text) == "6.1"


def test_parse_broken_first_label_line_does_not_fall_through():
    """Test that a malformed first label line isn't rescued by a later one."""
    text = "Tested up to:\nTested up to: 6.4\n"
    
    with pytest.raises(MalformedDescriptor):
        parse_tested_version(text)


@pytest.mark.parametrize(
    "declared, latest",
    [
        ("6.4", "6.4.2"),
        ("6.4.2", "6.4.2"),
        ("6", "6.4.2"),
        ("", "6.4.2"),
    ]
)
def test_not_stale_when_latest_starts_with_declared(declared, latest):
    """Test that a prefix of the latest version is current."""
    assert not is_stale(declared, latest)


@pytest.mark.parametrize(
    "declared, latest",
    [
        ("6.3", "6.4.2"),
        ("6.4.1", "6.4.2"),
        ("6.4.2", "6.4"),
        ("6.40", "6.4.2"),
        ("6.4.0", "6.4"),
    ]
)
def test_stale_when_latest_does_not_start_with_declared(declared, latest):
    """Test that anything that isn't a string prefix is stale."""
    assert is_stale(declared, latest)
