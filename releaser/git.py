"""
git.py

Responsibility: isolate all interaction with the local `git` executable.

This module must be the only place that:
- Spawns `git` subprocesses
- Interprets their output / exit codes

Nothing here talks to a remote; tags are created locally and pushing is left
to the caller's CI.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from releaser.errors import GitError, NoRecognizedTag, ReleaseVerificationError
from releaser.version import version_sort_key

log = logging.getLogger(__name__)


class GitTagReader:
    def __init__(self, cwd: str | Path = ".", git: str = "git") -> None:
        self._cwd = Path(cwd)
        self._git = git

    def _run(self, *args: str) -> str:
        """
        Run a git command, returning stdout or raising a GitError on failure.
        """
        cmd = [self._git, *args]
        log.debug("Running: %s", " ".join(cmd))
        try:
            r = subprocess.run(
                cmd,
                cwd=str(self._cwd),
                check=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
            )
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {self._git}") from e
        except subprocess.CalledProcessError as e:
            raise GitError(f"Command failed: {' '.join(cmd)}\n\n{(e.stderr or '').strip()}") from e
        return r.stdout

    def is_repository(self) -> bool:
        try:
            out = self._run("rev-parse", "--is-inside-work-tree")
        except GitError:
            return False
        return out.strip() == "true"

    def list_tags(self) -> list[str]:
        """
        Return all tag names, lowest version first.
        """
        if not self.is_repository():
            raise NoRecognizedTag(f"Not inside a git repository: {self._cwd}")
        out = self._run("tag", "--list")
        tags = [line.strip() for line in out.splitlines() if line.strip()]
        return sorted(tags, key=version_sort_key)

    def latest_tag(self) -> str:
        tags = self.list_tags()
        if not tags:
            raise NoRecognizedTag(f"No git tags found in {self._cwd}")
        return tags[-1]

    def tag_exists(self, name: str) -> bool:
        return name in self.list_tags()

    def verify_release(self, version: str) -> None:
        """
        Fail if `version` was already tagged, i.e. it was released before.
        """
        if self.tag_exists(version):
            raise ReleaseVerificationError(f"Version {version} is already tagged in git")
        log.info("Version %s is not yet tagged", version)

    def create_tag(self, name: str, message: str | None = None, *, dryrun: bool = False) -> None:
        if dryrun:
            log.info("Dry run, not creating git tag %s", name)
            return
        self._run("tag", "-a", name, "-m", message or f"Release {name}")
        log.info("Created git tag %s", name)
