"""Extraction and comparison of WordPress compatibility versions."""
import re

from version_checker.domain.errors import MalformedDescriptor


TESTED_UP_TO_LABEL = "Tested up to:"

_TOKEN_PATTERN = re.compile(r"[^:\s]+")


def parse_tested_version(text: str) -> str:
    """Extract the declared "Tested up to" version from readme text.

    Only the first line starting with the label is considered. If that line
    carries no value the readme is reported as malformed even when a later
    line would have parsed.

    Args:
        text: Full decoded readme contents

    Returns:
        The last token following the label, e.g. "6.4"

    Raises:
        MalformedDescriptor: No label line exists or the first one is empty
    """
    for line in text.split("\n"):
        if not line.startswith(TESTED_UP_TO_LABEL):
            continue
        tokens = _TOKEN_PATTERN.findall(line[len(TESTED_UP_TO_LABEL):])
        if not tokens:
            raise MalformedDescriptor(
                f"'{TESTED_UP_TO_LABEL}' line has no version: {line.strip()!r}"
            )
        return tokens[-1]

    raise MalformedDescriptor(f"No '{TESTED_UP_TO_LABEL}' line found")


def is_stale(declared: str, latest: str) -> bool:
    """Whether a declared version lags the latest one.

    Plain string prefix comparison: "6.4" covers "6.4.2", "6.3" does not.
    """
    return not latest.startswith(declared)
