from __future__ import annotations

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .config import TEMPLATE_DIR

# Fragments carry user markup through untouched, so no autoescaping.
_ENV = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)


def render_fragment(name: str, **context) -> str:
    return _ENV.get_template(name).render(**context)
