"""
releaser package

Release bookkeeping helpers: keep the changelog header, version files and git
tags in step with the version being released.

Key responsibilities are split across modules:
- `version.py`: validate / parse / bump semantic version strings
- `changelog.py`: pure rules for the changelog header line (no I/O)
- `version_file.py`: pure rewrite of a version-declaration line (no I/O)
- `renderer.py`: Jinja2 templates for header lines
- `config.py`: `.releaserrc` settings -> `ReleaserConfig`
- `gateway.py`: the only module reading/writing release files (dry-run aware)
- `git.py`: isolated `git` subprocess calls (tags)
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
