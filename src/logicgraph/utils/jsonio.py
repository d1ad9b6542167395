"""JSON / YAML document IO."""
import json
from pathlib import Path
from typing import Any, Dict

import yaml

from ..core.exceptions import DocumentError
from ..core.schema import GraphDocument, parse

_YAML_SUFFIXES = (".yaml", ".yml")


def read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f: return json.load(f)


def write_json(path: str, data: Any) -> None:
    with open(path, "w", encoding="utf-8") as f: json.dump(data, f, indent=2)


def _is_yaml(path: str) -> bool:
    return Path(path).suffix.lower() in _YAML_SUFFIXES


def read_document(path: str) -> GraphDocument:
    """
    Load and validate a GraphData document.
    The format follows the suffix: .yaml/.yml is YAML, anything else JSON.
    """
    try:
        if _is_yaml(path):
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        else:
            data = read_json(path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DocumentError(f"cannot read graph document {path}: {e}") from e
    return parse(GraphDocument, data)


def write_document(path: str, data: Dict[str, Any]) -> None:
    """Write a GraphData mapping (e.g. Graph.to_json()) as YAML or JSON by suffix."""
    if _is_yaml(path):
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
    else:
        write_json(path, data)
