"""Postman Collection v2.1 parser.

Loads exported collection files and flattens their folder tree
into a list of Endpoint models.
"""

import json
from pathlib import Path

import yaml

from .base import Endpoint

YAML_SUFFIXES = (".yaml", ".yml")


def load_collection(file_path: Path) -> dict:
    """Read a collection document (JSON, or YAML for .yaml/.yml files).

    Decode errors propagate; a top level that is not a mapping raises ValueError.
    """
    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in YAML_SUFFIXES:
        collection = yaml.safe_load(text)
    else:
        collection = json.loads(text)

    if not isinstance(collection, dict):
        raise ValueError(f"{file_path} is not a collection document")
    return collection


def parse_postman(file_path: Path) -> list[Endpoint]:
    """Parse a Postman collection file into a flat list of Endpoint."""
    collection = load_collection(file_path)
    return flatten(collection.get("item"))


def flatten(items: list[dict] | None, group_path: tuple[str, ...] = ()) -> list[Endpoint]:
    """Walk the collection tree depth-first and return its request nodes in order.

    Folder names accumulate into each endpoint's group. Nodes that are
    neither requests nor folders are skipped.
    """
    endpoints: list[Endpoint] = []
    if not isinstance(items, (list, tuple)):
        return endpoints
    for item in items:
        if not isinstance(item, dict):
            continue
        if item.get("request") is not None:
            endpoints.append(Endpoint.from_item(item, group_path))
        elif isinstance(item.get("item"), list):
            folder = str(item.get("name") or "")
            endpoints.extend(flatten(item["item"], group_path + (folder,)))
    return endpoints
