"""
version.py

Responsibility: validate and parse semantic version strings.

The check is deliberately loose: `MAJOR.MINOR.PATCH` must be present at the start
of the string, anything after the third numeric group is accepted as a suffix
(`1.2.3-rc.1`, `1.2.3+build`, ...).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from releaser.errors import InvalidVersion

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)\.(\d+)(.*)$", re.DOTALL)

BUMP_PARTS = ("major", "minor", "patch")


@dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    suffix: str = ""

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}{self.suffix}"

    @property
    def sort_key(self) -> tuple[int, int, int, str]:
        return (self.major, self.minor, self.patch, self.suffix)


def _match_version(version: str) -> re.Match[str]:
    if not version:
        raise InvalidVersion("Version was not set")
    m = VERSION_PATTERN.match(version)
    if m is None:
        raise InvalidVersion(f"Version was set to '{version}', expected MAJOR.MINOR.PATCH[suffix]")
    return m


def validate_version(version: str) -> None:
    """
    Raise InvalidVersion unless `version` starts with three dot-separated numbers.
    """
    _match_version(version)


def parse_version(version: str) -> Version:
    major, minor, patch, suffix = _match_version(version).groups()
    return Version(major=int(major), minor=int(minor), patch=int(patch), suffix=suffix)


def version_sort_key(text: str) -> tuple[int, tuple[int, int, int, str], str]:
    """
    Sort key for arbitrary tag names.

    Tags parsed as versions (an optional leading `v` is tolerated) sort by
    (major, minor, patch, suffix); anything else sorts below every version,
    alphabetically among itself.
    """
    candidate = text[1:] if text[:1] in ("v", "V") else text
    m = VERSION_PATTERN.match(candidate)
    if m is None:
        return (0, (0, 0, 0, ""), text)
    major, minor, patch, suffix = m.groups()
    return (1, (int(major), int(minor), int(patch), suffix), text)


def bump_version(version: str, part: str) -> str:
    """
    Return the next version after `version`, incrementing `part` (major/minor/patch).

    Lower parts are reset to zero and any suffix is dropped.
    """
    if part not in BUMP_PARTS:
        raise InvalidVersion(f"Cannot bump '{part}', expected one of: {', '.join(BUMP_PARTS)}")
    v = parse_version(version)
    if part == "major":
        return str(Version(v.major + 1, 0, 0))
    if part == "minor":
        return str(Version(v.major, v.minor + 1, 0))
    return str(Version(v.major, v.minor, v.patch + 1))
