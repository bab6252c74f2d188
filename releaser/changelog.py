"""
changelog.py

Responsibility: decide how the first line of a changelog changes for a release.

Only the header line (line 0) is interpreted. It is parsed into exactly one of:
- `Released(version, date)`  e.g. `### 0.1.0 (2017-Apr-29)`
- `Unreleased(version)`      e.g. `### 0.1.0 - Unreleased`
- `Other(text)`              anything else, including an empty document

`compute_new_header` maps (header, target version, today) to a `ChangelogUpdate`
and `apply_update` applies it to a list of lines. Neither touches the filesystem.
"""

from __future__ import annotations

import datetime as _dt
import re
from dataclasses import dataclass
from typing import Union

from releaser.renderer import released_header, unreleased_header
from releaser.version import VERSION_PATTERN

HEADER_PREFIX = "### "

_UNRELEASED_RE = re.compile(r"^### (?P<version>.*?) - Unreleased")
_RELEASED_RE = re.compile(r"^### (?P<version>\S+)(?:\s+(?P<rest>.*))?$")


@dataclass(frozen=True)
class Released:
    version: str
    date: str | None = None


@dataclass(frozen=True)
class Unreleased:
    version: str


@dataclass(frozen=True)
class Other:
    text: str = ""


HeaderLine = Union[Released, Unreleased, Other]


@dataclass(frozen=True)
class NoChange:
    pass


@dataclass(frozen=True)
class ReplaceFirstLine:
    new_line: str


@dataclass(frozen=True)
class PrependLine:
    new_line: str


ChangelogUpdate = Union[NoChange, ReplaceFirstLine, PrependLine]


def parse_header_line(line: str) -> HeaderLine:
    """
    Classify a changelog header line.

    A line is `Released` only when the token after `### ` looks like a version;
    the version token ends at the first whitespace, so `### 0.2.0-rc (...)`
    names `0.2.0-rc`, never `0.2.0`.
    """
    line = line.rstrip("\r\n")

    m = _UNRELEASED_RE.match(line)
    if m:
        return Unreleased(version=m.group("version").strip())

    m = _RELEASED_RE.match(line)
    if m and VERSION_PATTERN.match(m.group("version")):
        rest = (m.group("rest") or "").strip()
        date = rest[1:-1] if rest.startswith("(") and rest.endswith(")") else (rest or None)
        return Released(version=m.group("version"), date=date)

    return Other(text=line)


def header_version(line: str) -> str | None:
    header = parse_header_line(line)
    if isinstance(header, (Released, Unreleased)):
        return header.version
    return None


def names_version(line: str, version: str) -> bool:
    """
    True when `line` is `### <version>` followed by whitespace or the end of the line.

    `version` is matched literally, so a version carrying a whitespace-separated
    suffix (`1.2.3 beta`) still matches its own header.
    """
    line = line.rstrip("\r\n")
    prefix = HEADER_PREFIX + version
    if not line.startswith(prefix):
        return False
    rest = line[len(prefix) :]
    return rest == "" or rest[0].isspace()


def compute_new_header(current_first_line: str, target_version: str, today: _dt.date) -> ChangelogUpdate:
    """
    Return the update that makes the changelog header describe `target_version`.

    - An Unreleased header (whatever version it names) is finalized in place.
    - A header naming exactly `target_version` is left alone, so re-running
      a release is idempotent.
    - Anything else gets a new header stacked above the existing history.
    """
    new_line = released_header(target_version, today)

    if isinstance(parse_header_line(current_first_line), Unreleased):
        return ReplaceFirstLine(new_line=new_line)
    if names_version(current_first_line, target_version):
        return NoChange()
    return PrependLine(new_line=new_line)


def compute_unreleased_header(current_first_line: str, next_version: str) -> ChangelogUpdate:
    """
    Open a development cycle for `next_version`.

    An existing Unreleased header is kept as is; otherwise a new
    `### <next_version> - Unreleased` line is stacked on top.
    """
    if isinstance(parse_header_line(current_first_line), Unreleased):
        return NoChange()
    return PrependLine(new_line=unreleased_header(next_version))


def apply_update(lines: list[str], update: ChangelogUpdate, *, eol: str = "") -> list[str]:
    """
    Apply `update` to the document lines; only line 0 changes.

    `eol` is appended to every line this inserts, e.g. a carriage return when
    the lines were split on newlines from a CRLF file.
    """
    if isinstance(update, NoChange):
        return list(lines)
    if isinstance(update, ReplaceFirstLine):
        return [update.new_line + eol, *lines[1:]]
    if isinstance(update, PrependLine):
        return [update.new_line + eol, eol, *lines]
    raise TypeError(f"Unknown changelog update: {update!r}")
