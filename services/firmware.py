"""Semantic version format checks for device firmware strings."""

from __future__ import annotations

import re

# https://semver.org/spec/v2.0.0.html
_NUMERIC = r"0|[1-9]\d*"
_PRERELEASE_IDENTIFIER = rf"(?:{_NUMERIC}|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_BUILD_IDENTIFIER = r"[0-9a-zA-Z-]+"

SEMVER_PATTERN = re.compile(
    rf"(?P<major>{_NUMERIC})\.(?P<minor>{_NUMERIC})\.(?P<patch>{_NUMERIC})"
    rf"(?:-(?P<prerelease>{_PRERELEASE_IDENTIFIER}(?:\.{_PRERELEASE_IDENTIFIER})*))?"
    rf"(?:\+(?P<buildmetadata>{_BUILD_IDENTIFIER}(?:\.{_BUILD_IDENTIFIER})*))?",
    re.ASCII,
)


def is_semantic_version(value: str) -> bool:
    """Return True when ``value`` is a complete SemVer 2.0.0 version string."""
    if not isinstance(value, str):
        return False
    return SEMVER_PATTERN.fullmatch(value) is not None
