"""
errors.py

Responsibility: the exception types raised across releaser.

Every failure a release step can report derives from `ReleaserError`, so the CLI
can log it and exit non-zero without catching unrelated bugs.
"""

from __future__ import annotations


class ReleaserError(RuntimeError):
    pass


class MissingArgument(ReleaserError):
    pass


class FileNotFound(ReleaserError):
    pass


class ChangelogNotFound(FileNotFound):
    pass


class InvalidVersion(ReleaserError, ValueError):
    pass


class NoRecognizedTag(ReleaserError):
    pass


class GitError(ReleaserError):
    pass


class ConfigError(ReleaserError):
    pass


class ReleaseVerificationError(ReleaserError):
    pass
