from __future__ import annotations

import pathlib
from typing import Any, Dict

from .config import (
    BLOGS_OUT,
    CONTENT_IMAGE_PREFIX,
    DEFAULT_VIDEO_URL,
    INDEX_IMAGE_PREFIX,
    INDEX_LINK_PREFIX,
    INDEX_PATH,
    PAGE_TEMPLATE,
)


def get_nested_value(settings: dict, keys: list[str], default_value):
    """
    Read nested mapping value by key path.
    """
    current = settings
    for key in keys:
        if not isinstance(current, dict):
            return default_value
        if key not in current:
            return default_value
        current = current[key]
    return current


def get_setting_str(settings: dict, keys: list[str], default_value: str) -> str:
    """
    Read a string setting from nested path with fallback.
    """
    value = get_nested_value(settings, keys, default_value)
    if value is None:
        return default_value
    text = str(value).strip()
    return text or default_value


def get_setting_path(
    settings: dict, keys: list[str], default_value: pathlib.Path, base_dir: pathlib.Path
) -> pathlib.Path:
    """
    Read a path setting; relative paths resolve against `base_dir`.
    """
    value = get_nested_value(settings, keys, None)
    if value is None or not str(value).strip():
        return default_value
    path = pathlib.Path(str(value).strip())
    if not path.is_absolute():
        path = base_dir / path
    return path


def load_settings(manifest: Dict[str, Any], base_dir: pathlib.Path) -> Dict[str, Any]:
    """
    Site settings from the manifest's `settings:` mapping over the defaults.
    """
    raw = manifest.get("settings") or {}
    if not isinstance(raw, dict):
        raise RuntimeError("Manifest `settings` must be a mapping")
    return {
        "template": get_setting_path(raw, ["template"], PAGE_TEMPLATE, base_dir),
        "output_dir": get_setting_path(raw, ["output_dir"], BLOGS_OUT, base_dir),
        "index": get_setting_path(raw, ["index"], INDEX_PATH, base_dir),
        "default_video_url": get_setting_str(
            raw, ["default_video_url"], DEFAULT_VIDEO_URL
        ),
        "content_image_prefix": get_setting_str(
            raw, ["images", "content_prefix"], CONTENT_IMAGE_PREFIX
        ),
        "index_image_prefix": get_setting_str(
            raw, ["images", "index_prefix"], INDEX_IMAGE_PREFIX
        ),
        "index_link_prefix": get_setting_str(
            raw, ["index_link_prefix"], INDEX_LINK_PREFIX
        ),
    }
