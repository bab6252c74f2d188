"""
version_file.py

Responsibility: rewrite the version-declaration line of a version file.

A line "matches" when it starts with the caller's literal prefix (e.g. `VERSION=`).
The remainder of a matching line is replaced by the quoted new version.
Lines are delimited by "\\n" only (a trailing "\\r" belongs to the line ending),
so form feeds and other Unicode separators stay part of the line they are on.
"""

from __future__ import annotations


def _split_ending(line: str) -> tuple[str, str]:
    if line.endswith("\r"):
        return line[:-1], "\r"
    return line, ""


def count_matches(file_contents: str, line_pattern: str) -> int:
    return sum(1 for line in file_contents.split("\n") if _split_ending(line)[0].startswith(line_pattern))


def rewrite(file_contents: str, line_pattern: str, new_version: str) -> str:
    """
    Return `file_contents` with every line starting with `line_pattern` set to
    `line_pattern"new_version"`.

    Non-matching lines and all line endings are kept as they are, so when
    nothing matches the input is returned unchanged.
    """
    out: list[str] = []
    for line in file_contents.split("\n"):
        body, ending = _split_ending(line)
        if body.startswith(line_pattern):
            out.append(f'{line_pattern}"{new_version}"{ending}')
        else:
            out.append(line)
    return "\n".join(out)
