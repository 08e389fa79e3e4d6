"""Catalog file loader.

Reads extra sections from a YAML or JSON file so new surfaces can be added
without touching the built-in catalog::

    sections:
      - name: lists
        label: Lists
        endpoints:
          - id: get-list
            method: GET
            path: /2/lists/:id
            path_params: [{name: id}]
"""

from pathlib import Path

import yaml

from .base import Endpoint
from .builder import Section


def load_sections(file_path: Path) -> list[Section]:
    """Parse a catalog file into a list of Section."""
    text = file_path.read_text(encoding="utf-8")
    # JSON is a subset of YAML, so one loader covers both formats.
    doc = yaml.safe_load(text) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"{file_path}: expected a mapping with a 'sections' list")

    return [_parse_section(raw) for raw in doc.get("sections", [])]


def _parse_section(raw: dict) -> Section:
    name = raw["name"]
    return Section(
        name=name,
        label=raw.get("label", name.replace("_", " ").title()),
        endpoints=[_parse_endpoint(ep) for ep in raw.get("endpoints", [])],
    )


def _parse_endpoint(raw: dict) -> Endpoint:
    data = dict(raw)
    # Accept the camelCase keys used by exported catalogs.
    for camel, snake in (
        ("pathParams", "path_params"),
        ("queryParams", "query_params"),
        ("bodyParams", "body_params"),
        ("expansionOptions", "expansion_options"),
        ("authType", "auth_type"),
    ):
        if camel in data:
            data[snake] = data.pop(camel)
    return Endpoint(**data)
