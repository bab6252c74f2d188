"""
cli.py

Responsibility: CLI entrypoint for releaser.

Typical release flow in CI:
1) `releaser verify`                        -> changelog is finalized and not yet tagged
2) `releaser bump-file VERSION.sh VERSION= "$(releaser changelog-version)"`
3) `releaser tag`                           -> local annotated git tag

Values (versions, tag names) are printed to stdout; all diagnostics go to stderr
through logging. This module orchestrates only:
- Settings: `config.py`
- File reads/writes: `gateway.py`
- git: `git.py`
"""

from __future__ import annotations

import argparse
import logging

from releaser import __version__
from releaser.changelog import Other, Unreleased
from releaser.config import LOG_LEVELS, ReleaserConfig, load_config
from releaser.errors import InvalidVersion, ReleaserError, ReleaseVerificationError
from releaser.gateway import ReleaseFileGateway
from releaser.git import GitTagReader
from releaser.log import setup_logging
from releaser.version import BUMP_PARTS, bump_version, validate_version

log = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> ReleaserConfig:
    config = load_config(args.config)
    # CLI overrides
    return config.with_overrides(
        changelog_file=args.changelog,
        log_level=args.log_level,
        dryrun=True if args.dry_run else None,
    )


def validate_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    validate_version(args.version)
    log.debug("Version %s is valid", args.version)
    return 0


def changelog_version_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    print(ReleaseFileGateway(config).changelog_version())
    return 0


def bump_changelog_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    ReleaseFileGateway(config).bump_changelog(args.version)
    return 0


def bump_file_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    ReleaseFileGateway(config).bump_version_file(args.path, args.pattern, args.version)
    return 0


def next_version_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    print(bump_version(args.version, args.part))
    return 0


def start_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    ReleaseFileGateway(config).start_unreleased(args.version)
    return 0


def last_tag_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    print(GitTagReader(args.repo).latest_tag())
    return 0


def _verified_release_version(args: argparse.Namespace, config: ReleaserConfig) -> str:
    gateway = ReleaseFileGateway(config)
    header = gateway.changelog_header()
    if isinstance(header, Unreleased):
        raise ReleaseVerificationError(
            f"Changelog {config.changelog_file} still marks {header.version} as Unreleased"
        )
    if isinstance(header, Other):
        raise InvalidVersion(f"First line of {config.changelog_file} does not name a version")
    version = gateway.changelog_version()
    GitTagReader(args.repo).verify_release(version)
    return version


def verify_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    print(_verified_release_version(args, config))
    return 0


def tag_cmd(args: argparse.Namespace, config: ReleaserConfig) -> int:
    version = _verified_release_version(args, config)
    GitTagReader(args.repo).create_tag(version, args.message, dryrun=config.dryrun)
    print(version)
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="releaser", description="releaser - changelog and version bookkeeping")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--config", default=None, help="Settings file (default: ./.releaserrc if present)")
    p.add_argument("--changelog", default=None, help="Changelog path (overrides changelog_file)")
    p.add_argument("--log-level", default=None, choices=LOG_LEVELS, help="Log verbosity (default: info)")
    p.add_argument("--dry-run", action="store_true", help="Compute and log changes without writing files")
    sub = p.add_subparsers(dest="command", required=True)

    v = sub.add_parser("validate", help="Check that VERSION looks like MAJOR.MINOR.PATCH")
    v.add_argument("version")
    v.set_defaults(func=validate_cmd)

    cv = sub.add_parser("changelog-version", help="Print the version named by the changelog header")
    cv.set_defaults(func=changelog_version_cmd)

    bc = sub.add_parser("bump-changelog", help="Release VERSION today in the changelog header")
    bc.add_argument("version")
    bc.set_defaults(func=bump_changelog_cmd)

    bf = sub.add_parser("bump-file", help='Set PATTERN"VERSION" on every line of PATH starting with PATTERN')
    bf.add_argument("path", help="Version file, e.g. VERSION.sh")
    bf.add_argument("pattern", help="Literal line prefix, e.g. VERSION=")
    bf.add_argument("version")
    bf.set_defaults(func=bump_file_cmd)

    nv = sub.add_parser("next-version", help="Print the version after VERSION")
    nv.add_argument("version")
    nv.add_argument("part", choices=BUMP_PARTS)
    nv.set_defaults(func=next_version_cmd)

    st = sub.add_parser("start", help="Open an Unreleased changelog entry for VERSION")
    st.add_argument("version")
    st.set_defaults(func=start_cmd)

    for name, help_text, func in (
        ("last-tag", "Print the highest git tag", last_tag_cmd),
        ("verify", "Check the changelog version is released and not yet tagged", verify_cmd),
        ("tag", "Create a local git tag for the changelog version", tag_cmd),
    ):
        g = sub.add_parser(name, help=help_text)
        g.add_argument("--repo", default=".", help="Git working tree (default: .)")
        if name == "tag":
            g.add_argument("--message", "-m", default=None, help="Tag message (default: 'Release VERSION')")
        g.set_defaults(func=func)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level or "info")
    try:
        config = _config_from_args(args)
        setup_logging(config.log_level)
        return int(args.func(args, config))
    except ReleaserError as e:
        log.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
