from __future__ import annotations

import hashlib
import pathlib
from datetime import date, datetime
from typing import Any, Dict, Optional

import yaml

from .config import (
    HYPHEN_RUN,
    SLUG_STRIP,
    WHITESPACE_RUN,
)

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Written forms accepted besides ISO 8601.
_DATE_FORMATS = (
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %b %Y",
    "%d %B %Y",
    "%m/%d/%Y",
    "%Y/%m/%d",
)


def slugify(title: str) -> str:
    s = SLUG_STRIP.sub("", (title or "").lower())
    s = WHITESPACE_RUN.sub("-", s.strip())
    return HYPHEN_RUN.sub("-", s).strip("-")


def post_slug(title: str) -> str:
    """
    File stem for a post. Titles with nothing left after `slugify` (e.g.
    non-Latin scripts) get `post-<hash of the title>` instead.
    """
    slug = slugify(title)
    if slug:
        return slug
    digest = hashlib.sha256((title or "").strip().encode("utf-8")).hexdigest()[:12]
    return f"post-{digest}"


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def parse_date(v) -> Optional[date]:
    """
    Coerce a date-like value to a `date`; None when it can't be read.
    """
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if not isinstance(v, str):
        return None
    s = v.strip().strip('"').strip("'")
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def format_display_date(value=None) -> str:
    """
    Render a date as `Sep 15, 2025`.

    - Absent/blank input: today.
    - Unparseable input is returned unchanged.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        d = date.today()
    else:
        d = parse_date(value)
        if d is None:
            return value if isinstance(value, str) else str(value)
    return f"{_MONTHS[d.month - 1]} {d.day}, {d.year}"


def iso_today() -> str:
    return date.today().isoformat()


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}
