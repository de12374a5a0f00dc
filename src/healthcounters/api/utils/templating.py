"""Minimal {{KEY}} placeholder substitution for the dashboard page and script."""

import re, json
from pathlib import Path
from typing import Mapping

from markupsafe import escape

PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


def _to_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render(template: str, values: Mapping) -> str:
    """
    Replace every {{KEY}} token whose KEY is in values.

    One regex pass with whole-key lookup, so PERSON and PERSON_NAME can never
    clobber each other. Unknown tokens are left exactly as written.
    """
    if not values:
        return template

    def _sub(m):
        key = m.group(1)
        if key not in values:
            return m.group(0)
        return _to_text(values[key])

    return PLACEHOLDER.sub(_sub, template)


def render_file(path, values: Mapping) -> str:
    """Read a UTF-8 template and render it. FileNotFoundError propagates to the caller."""
    text = Path(path).read_text(encoding="utf-8")
    return render(text, values)


def html_values(values: Mapping) -> dict:
    return {k: str(escape(_to_text(v))) for k, v in values.items()}


def js_string(value) -> str:
    """Escape for use inside a single-quoted JavaScript string literal."""
    s = json.dumps(_to_text(value), ensure_ascii=False)[1:-1]
    return s.replace("'", "\\'").replace("</", "<\\/")


def js_values(values: Mapping) -> dict:
    return {k: js_string(v) for k, v in values.items()}
