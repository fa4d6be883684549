#!/usr/bin/env python3
"""
Blog page renderer driven by `blog-manifest.yml`.

- Each manifest post -> <output_dir>/<slug>.html, merged into the page template
  title, category/author/date markers, h1, JSON-LD, main column, sticky video
- Post sources: YAML/JSON documents, or HTML exports split into sections
  (first heading dropped when it repeats the post title)
- JSON-LD: custom payload when valid, else FAQPage (with FAQs) or Article
- Post index (blogs.json) gets new posts prepended, newest first; posts
  already indexed under the same link are left alone
- Posts missing a title, category or sections are reported and skipped
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import List, Optional

import yaml

from .compositor import load_template
from .config import MANIFEST_PATH
from .index import add_to_index, load_index, save_index
from .posts import load_post_document, publish_post
from .settings import load_settings


def run_manifest(manifest_path: pathlib.Path) -> int:
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8")) or {}
    if not isinstance(manifest, dict):
        raise RuntimeError(f"Manifest must contain a mapping: {manifest_path}")

    base_dir = manifest_path.parent
    settings = load_settings(manifest, base_dir)

    template = load_template(settings["template"])
    if template is None:
        return 1

    index = load_index(settings["index"])
    known_links = {e.link for e in index}
    failures = 0
    added = 0

    for entry in manifest.get("posts", []) or []:
        if not isinstance(entry, dict):
            print(f"! ignoring manifest entry {entry!r}")
            continue
        try:
            document = load_post_document(entry, base_dir)
        except (OSError, ValueError, RuntimeError, yaml.YAMLError) as e:
            print(f"! could not load {entry.get('source')}: {e}", file=sys.stderr)
            failures += 1
            continue

        try:
            index_entry = publish_post(document, template, settings)
        except OSError as e:
            print(
                f"! could not write {document.title or entry.get('source')}: {e}",
                file=sys.stderr,
            )
            failures += 1
            continue
        if index_entry is None:
            failures += 1
            continue
        if index_entry.link in known_links:
            print(f"- {index_entry.link} already indexed")
            continue
        index = add_to_index(index, index_entry)
        known_links.add(index_entry.link)
        added += 1

    if added:
        save_index(settings["index"], index)
    return 1 if failures else 0


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Render blog posts listed in a manifest into HTML pages.",
    )
    parser.add_argument(
        "manifest",
        nargs="?",
        type=pathlib.Path,
        default=MANIFEST_PATH,
        help=f"Path to the blog manifest (default: {MANIFEST_PATH.name} at the repo root).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    manifest_path = parse_args(argv).manifest
    if not manifest_path.exists():
        print(
            f"ERROR: {manifest_path.name} missing at {manifest_path.parent}",
            file=sys.stderr,
        )
        sys.exit(1)

    sys.exit(run_manifest(manifest_path))


if __name__ == "__main__":
    main()
