import subprocess

import pytest

from releaser import git as git_module
from releaser.errors import GitError, NoRecognizedTag, ReleaseVerificationError
from releaser.git import GitTagReader


class FakeGit:
    """Stands in for `subprocess.run`, answering git commands from a table."""

    def __init__(self, tags=(), inside_repo=True):
        self.tags = list(tags)
        self.inside_repo = inside_repo
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        args = cmd[1:]
        if args[:1] == ["rev-parse"]:
            if not self.inside_repo:
                raise subprocess.CalledProcessError(128, cmd, "", "fatal: not a git repository")
            return subprocess.CompletedProcess(cmd, 0, "true\n", "")
        if args == ["tag", "--list"]:
            return subprocess.CompletedProcess(cmd, 0, "".join(f"{t}\n" for t in self.tags), "")
        if args[:2] == ["tag", "-a"]:
            self.tags.append(args[2])
            return subprocess.CompletedProcess(cmd, 0, "", "")
        raise AssertionError(f"unexpected git call: {cmd}")


@pytest.fixture
def fake_git(monkeypatch):
    fake = FakeGit()
    monkeypatch.setattr(git_module.subprocess, "run", fake)
    return fake


def test_latest_tag_sorts_by_version(fake_git):
    fake_git.tags = ["0.9.0", "0.10.0", "0.2.0", "docs"]
    reader = GitTagReader()
    assert reader.list_tags() == ["docs", "0.2.0", "0.9.0", "0.10.0"]
    assert reader.latest_tag() == "0.10.0"


def test_latest_tag_without_tags(fake_git):
    with pytest.raises(NoRecognizedTag):
        GitTagReader().latest_tag()


def test_latest_tag_outside_repository(fake_git):
    fake_git.inside_repo = False
    with pytest.raises(NoRecognizedTag):
        GitTagReader().latest_tag()


def test_verify_release(fake_git):
    fake_git.tags = ["0.1.0"]
    reader = GitTagReader()
    reader.verify_release("0.2.0")
    with pytest.raises(ReleaseVerificationError):
        reader.verify_release("0.1.0")


def test_create_tag(fake_git):
    reader = GitTagReader()
    reader.create_tag("0.2.0")
    assert ["git", "tag", "-a", "0.2.0", "-m", "Release 0.2.0"] in fake_git.calls
    assert reader.tag_exists("0.2.0")


def test_create_tag_dry_run(fake_git):
    GitTagReader().create_tag("0.2.0", dryrun=True)
    assert fake_git.calls == []


def test_missing_git_executable(monkeypatch):
    def _missing(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(git_module.subprocess, "run", _missing)
    reader = GitTagReader(git="no-such-git")
    with pytest.raises(GitError):
        reader.create_tag("0.2.0")
    assert reader.is_repository() is False
