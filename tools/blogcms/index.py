from __future__ import annotations

import json
import pathlib
from typing import List

from .config import INDEX_IMAGE_PREFIX, INDEX_LINK_PREFIX
from .models import BlogDocument, IndexEntry
from .utils import format_display_date


def build_index_entry(
    document: BlogDocument,
    filename: str,
    image_prefix: str = INDEX_IMAGE_PREFIX,
    link_prefix: str = INDEX_LINK_PREFIX,
) -> IndexEntry:
    name = document.feature_image.name
    return IndexEntry(
        title=document.title,
        date=format_display_date(document.date),
        image=f"{image_prefix.rstrip('/')}/{name}" if name else "",
        link=f"{link_prefix.rstrip('/')}/{filename}",
        category=document.category,
    )


def add_to_index(entries: List[IndexEntry], entry: IndexEntry) -> List[IndexEntry]:
    """Newest first: the entry goes to the front of a new list."""
    return [entry] + list(entries)


def load_index(path: pathlib.Path) -> List[IndexEntry]:
    if not path.exists():
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        print(f"! could not read post index {path}: {e}")
        return []
    if not isinstance(data, list):
        print(f"! post index {path} is not a list, starting fresh")
        return []
    return [IndexEntry.from_dict(item) for item in data if isinstance(item, dict)]


def dump_index(entries: List[IndexEntry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=4, ensure_ascii=False)


def save_index(path: pathlib.Path, entries: List[IndexEntry]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_index(entries), encoding="utf-8")
    print(f"✓ updated {path.name} ({len(entries)} posts)")
