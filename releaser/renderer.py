"""
renderer.py

Responsibility: render changelog header lines from Jinja2 templates.

Rules:
- Undefined template variables are an error (StrictUndefined), never an empty string.
- Dates are rendered as `%Y-%b-%d` (e.g. `2017-Apr-30`).

This module intentionally does NOT read or write files.
"""

from __future__ import annotations

import datetime as _dt

from jinja2 import Environment, StrictUndefined, TemplateError

from releaser.errors import ReleaserError

DATE_FORMAT = "%Y-%b-%d"

RELEASED_HEADER = "### {{ version }} ({{ date }})"
UNRELEASED_HEADER = "### {{ version }} - Unreleased"


class RenderError(ReleaserError):
    pass


_env = Environment(
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=True,
)


def format_date(day: _dt.date) -> str:
    return day.strftime(DATE_FORMAT)


def render_line(template_text: str, **context: object) -> str:
    try:
        return _env.from_string(template_text).render(**context)
    except TemplateError as e:
        raise RenderError(f"Failed rendering header template: {template_text!r}") from e


def released_header(version: str, today: _dt.date) -> str:
    return render_line(RELEASED_HEADER, version=version, date=format_date(today))


def unreleased_header(version: str) -> str:
    return render_line(UNRELEASED_HEADER, version=version)
