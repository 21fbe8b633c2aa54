"""Server-rendered HTML pages."""

from __future__ import annotations

from pathlib import Path
from string import Template

_PAGES = Path(__file__).parent


def load_template(name: str) -> Template:
    """Load a page from this package for ``safe_substitute``.

    Pages use ``$name`` placeholders, leaving CSS braces untouched.
    Unknown placeholders are left as written.

    Raises:
        FileNotFoundError: If no page with that name ships here.
    """
    return Template((_PAGES / name).read_text(encoding="utf-8"))
