import datetime as dt
import subprocess

import pytest

from releaser import cli
from releaser import git as git_module
from releaser.renderer import released_header


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RELEASER_LOG_LEVEL", raising=False)
    return tmp_path


def _fake_git(tags):
    def run(cmd, **kwargs):
        args = cmd[1:]
        if args[:1] == ["rev-parse"]:
            return subprocess.CompletedProcess(cmd, 0, "true\n", "")
        if args == ["tag", "--list"]:
            return subprocess.CompletedProcess(cmd, 0, "".join(f"{t}\n" for t in tags), "")
        if args[:2] == ["tag", "-a"]:
            tags.append(args[2])
            return subprocess.CompletedProcess(cmd, 0, "", "")
        raise AssertionError(f"unexpected git call: {cmd}")

    return run


def test_validate_ok_and_failure(workdir, capsys):
    assert cli.main(["validate", "1.2.3"]) == 0
    assert cli.main(["validate", "1.2"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "releaser ERROR" in err


def test_changelog_version_prints_only_value(workdir, capsys):
    (workdir / "CHANGELOG.md").write_text("### 0.3.1 (2017-Apr-29)\n", encoding="utf-8")
    assert cli.main(["--log-level", "debug", "changelog-version"]) == 0
    out, err = capsys.readouterr()
    assert out == "0.3.1\n"
    assert "0.3.1" in err


def test_bump_changelog_uses_rc_file(workdir, capsys):
    (workdir / "docs").mkdir()
    changelog = workdir / "docs" / "CHANGELOG.md"
    changelog.write_text("### 0.1.0 - Unreleased\n", encoding="utf-8")
    (workdir / ".releaserrc").write_text('changelog_file="docs/CHANGELOG.md"\n', encoding="utf-8")

    assert cli.main(["bump-changelog", "0.1.0"]) == 0
    assert changelog.read_text(encoding="utf-8") == released_header("0.1.0", dt.date.today()) + "\n"
    assert capsys.readouterr().out == ""


def test_dry_run_flag(workdir):
    changelog = workdir / "CHANGELOG.md"
    changelog.write_text("### 0.1.0 - Unreleased\n", encoding="utf-8")
    assert cli.main(["--dry-run", "bump-changelog", "0.2.0"]) == 0
    assert changelog.read_text(encoding="utf-8") == "### 0.1.0 - Unreleased\n"


def test_missing_changelog(workdir, capsys):
    assert cli.main(["bump-changelog", "0.2.0"]) == 1
    assert "does not exist" in capsys.readouterr().err


def test_bump_file(workdir):
    version_file = workdir / "VERSION.sh"
    version_file.write_text('VERSION="0.1.0"\nOTHER="x"\n', encoding="utf-8")
    assert cli.main(["bump-file", "VERSION.sh", "VERSION=", "0.2.0"]) == 0
    assert version_file.read_text(encoding="utf-8") == 'VERSION="0.2.0"\nOTHER="x"\n'


def test_next_version(workdir, capsys):
    assert cli.main(["next-version", "1.2.3", "minor"]) == 0
    assert capsys.readouterr().out == "1.3.0\n"


def test_start(workdir):
    changelog = workdir / "CHANGELOG.md"
    changelog.write_text("### 0.2.0 (2017-Apr-30)\n", encoding="utf-8")
    assert cli.main(["start", "0.3.0"]) == 0
    assert changelog.read_text(encoding="utf-8").splitlines()[:3] == [
        "### 0.3.0 - Unreleased",
        "",
        "### 0.2.0 (2017-Apr-30)",
    ]


def test_last_tag(workdir, monkeypatch, capsys):
    monkeypatch.setattr(git_module.subprocess, "run", _fake_git(["0.1.0", "0.10.0", "0.9.0"]))
    assert cli.main(["last-tag"]) == 0
    assert capsys.readouterr().out == "0.10.0\n"


def test_verify_and_tag(workdir, monkeypatch, capsys):
    tags = ["0.1.0"]
    monkeypatch.setattr(git_module.subprocess, "run", _fake_git(tags))
    (workdir / "CHANGELOG.md").write_text("### 0.2.0 (2017-Apr-30)\n", encoding="utf-8")

    assert cli.main(["verify"]) == 0
    assert capsys.readouterr().out == "0.2.0\n"

    assert cli.main(["tag"]) == 0
    assert tags == ["0.1.0", "0.2.0"]
    capsys.readouterr()

    assert cli.main(["verify"]) == 1
    assert "already tagged" in capsys.readouterr().err


def test_verify_rejects_unreleased(workdir, monkeypatch, capsys):
    monkeypatch.setattr(git_module.subprocess, "run", _fake_git([]))
    (workdir / "CHANGELOG.md").write_text("### 0.2.0 - Unreleased\n", encoding="utf-8")
    assert cli.main(["verify"]) == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert "Unreleased" in err


def test_bad_arguments_exit_2(workdir):
    with pytest.raises(SystemExit) as exc:
        cli.main(["bump-file", "VERSION.sh"])
    assert exc.value.code == 2
