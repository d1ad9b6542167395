# src/logicgraph/config/layering.py
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from ..core.exceptions import DocumentError

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Token expansion
# -----------------------------------------------------------------------------

_TOKEN_RE = re.compile(r"\$\{([^}]+)\}")


def _expand_token(tok: str, env: Dict[str, str]) -> str:
    """
    Expand a single ${...} token:
      - ${ENV:VAR} -> env.get("VAR", "")
      - ${HOME}    -> env HOME or Path.home()
      - ${VAR}     -> env.get("VAR", "")
    Unknown tokens expand to "".
    """
    if tok.startswith("ENV:"):
        return env.get(tok[4:], "") or ""
    if tok == "HOME":
        return env.get("HOME") or str(Path.home())
    return env.get(tok, "") or ""


def expand_tokens(obj: Any, env: Optional[Dict[str, str]] = None) -> Any:
    """Recursively expand ${...} inside every string of a dict/list/scalar tree."""
    env = os.environ if env is None else env
    if isinstance(obj, str):
        return _TOKEN_RE.sub(lambda m: _expand_token(m.group(1), env), obj)
    if isinstance(obj, list):
        return [expand_tokens(x, env) for x in obj]
    if isinstance(obj, dict):
        return {k: expand_tokens(v, env) for k, v in obj.items()}
    return obj


# -----------------------------------------------------------------------------
# Layer files
# -----------------------------------------------------------------------------

def split_layer_paths(value: Optional[str]) -> List[str]:
    """Split an os.pathsep-separated env value into non-empty path entries."""
    if not value:
        return []
    return [p.strip() for p in value.split(os.pathsep) if p.strip()]


def load_layer(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Read one YAML (.yaml/.yml) or JSON layer.
    Raises DocumentError when the file is unreadable or not a mapping.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
        if p.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise DocumentError(f"cannot read config layer {p}: {e}") from e
    if not isinstance(data, dict):
        raise DocumentError(f"config layer {p} must contain a mapping, got {type(data).__name__}")
    return data


# -----------------------------------------------------------------------------
# Merging helpers
# -----------------------------------------------------------------------------

def deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow types: last wins.
    Mappings: deep merge.
    Lists: last wins.
    """
    out = dict(a)
    for k, v in b.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def merge_layers(paths: Iterable[str | os.PathLike[str]]) -> Dict[str, Any]:
    """Merge layer files in order. Missing files are skipped with a warning."""
    merged: Dict[str, Any] = {}
    for p in paths:
        if not Path(p).is_file():
            logger.warning("config layer %s not found, skipping", p)
            continue
        merged = deep_merge(merged, load_layer(p))
    return merged
