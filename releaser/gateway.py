"""
gateway.py

Responsibility: the only place releaser reads or writes release files.

Each operation reads the file, runs the pure rules from `changelog.py` /
`version_file.py`, and writes the fully computed result back in one call.
With `config.dryrun` set, the new content is logged instead of written.
"""

from __future__ import annotations

import datetime as _dt
import logging
from pathlib import Path
from typing import Callable

from releaser.changelog import (
    ChangelogUpdate,
    HeaderLine,
    NoChange,
    Released,
    apply_update,
    compute_new_header,
    compute_unreleased_header,
    header_version,
    parse_header_line,
)
from releaser.config import ReleaserConfig
from releaser.errors import ChangelogNotFound, FileNotFound, InvalidVersion, MissingArgument
from releaser.version import validate_version
from releaser.version_file import count_matches, rewrite

log = logging.getLogger(__name__)


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF files byte-for-byte
    with path.open("r", encoding="utf-8", newline="") as f:
        return f.read()


def _split_document(text: str) -> list[str]:
    # split on "\n" only; "\n".join() restores the text exactly, CRs included
    return text.split("\n") if text else []


def _first_line(lines: list[str]) -> str:
    return lines[0].rstrip("\r") if lines else ""


class ReleaseFileGateway:
    def __init__(
        self,
        config: ReleaserConfig,
        *,
        today: Callable[[], _dt.date] = _dt.date.today,
    ) -> None:
        self._config = config
        self._today = today

    @property
    def config(self) -> ReleaserConfig:
        return self._config

    def _changelog_path(self, path: str | Path | None) -> Path:
        return Path(path) if path is not None else self._config.changelog_file

    def _read_changelog(self, path: Path) -> str:
        if not path.is_file():
            raise ChangelogNotFound(f"Changelog file does not exist: {path}")
        return _read_text(path)

    def _write(self, path: Path, text: str) -> None:
        if self._config.dryrun:
            log.info("Dry run, not writing %s. New content:\n%s", path, text)
            return
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
        log.debug("Wrote %s", path)

    def _update_changelog(self, path: Path, text: str, update: ChangelogUpdate) -> ChangelogUpdate:
        if isinstance(update, NoChange):
            log.info("Changelog %s already up to date", path)
            return update
        lines = _split_document(text)
        eol = "\r" if lines and lines[0].endswith("\r") else ""
        new_lines = apply_update(lines, update, eol=eol)
        if not lines:
            # empty document: header plus a final newline
            new_lines = new_lines[:1] + [""]
        new_text = "\n".join(new_lines)
        log.info("Changelog %s new first line: %s", path, update.new_line)
        self._write(path, new_text)
        return update

    def bump_changelog(self, target_version: str, path: str | Path | None = None) -> ChangelogUpdate:
        """
        Make the first changelog line announce `target_version` released today.

        Returns the applied update; `NoChange` when the header already names it.
        """
        validate_version(target_version)
        changelog = self._changelog_path(path)
        text = self._read_changelog(changelog)
        update = compute_new_header(_first_line(_split_document(text)), target_version, self._today())
        return self._update_changelog(changelog, text, update)

    def start_unreleased(self, next_version: str, path: str | Path | None = None) -> ChangelogUpdate:
        validate_version(next_version)
        changelog = self._changelog_path(path)
        text = self._read_changelog(changelog)
        update = compute_unreleased_header(_first_line(_split_document(text)), next_version)
        return self._update_changelog(changelog, text, update)

    def _header_line(self, changelog: Path) -> str:
        return _first_line(_split_document(self._read_changelog(changelog)))

    def changelog_header(self, path: str | Path | None = None) -> HeaderLine:
        changelog = self._changelog_path(path)
        header = parse_header_line(self._header_line(changelog))
        if isinstance(header, Released):
            log.debug("Changelog %s: %s released on %s", changelog, header.version, header.date or "unknown date")
        return header

    def changelog_version(self, path: str | Path | None = None) -> str:
        """
        Return the version named by the first changelog line (released or not).
        """
        changelog = self._changelog_path(path)
        first_line = self._header_line(changelog)
        version = header_version(first_line)
        if version is None:
            raise InvalidVersion(f"First line of {changelog} does not name a version: {first_line!r}")
        validate_version(version)
        log.debug("Version from %s: %s", changelog, version)
        return version

    def bump_version_file(self, path: str | Path, pattern: str, target_version: str) -> str:
        """
        Rewrite every line of `path` starting with `pattern` to `pattern"target_version"`.

        Returns the new file text. A file without any matching line is left as is.
        """
        if not pattern:
            raise MissingArgument("Line pattern was not set")
        validate_version(target_version)
        version_file = Path(path)
        if not version_file.is_file():
            raise FileNotFound(f"Version file does not exist: {version_file}")

        text = _read_text(version_file)
        matches = count_matches(text, pattern)
        if matches == 0:
            log.warning("No line in %s starts with %r, nothing to update", version_file, pattern)
            return text

        new_text = rewrite(text, pattern, target_version)
        log.info("Set version %s in %s (%d line(s))", target_version, version_file, matches)
        if new_text != text:
            self._write(version_file, new_text)
        return new_text
