# src/logicgraph/config/manager.py
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .layering import deep_merge, expand_tokens, load_layer, merge_layers, split_layer_paths
from .types import GraphConfig

logger = logging.getLogger(__name__)

ENV_CONFIG = "LOGICGRAPH_CONFIG"
DEFAULTS_FILE = Path(__file__).resolve().parent / "defaults" / "default.yaml"


class ConfigManager:
    """
    Layered configuration loader.

    Layers, lowest priority first:
      1. packaged defaults/default.yaml
      2. files listed in $LOGICGRAPH_CONFIG (os.pathsep separated, YAML or JSON)
      3. `extra_layers` passed to the constructor
      4. `overrides` mapping
    ${ENV:VAR} / ${VAR} tokens are expanded in every string after merging.
    """

    def __init__(
        self,
        extra_layers: Optional[List[str]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        self._env = dict(os.environ) if env is None else dict(env)
        self._extra_layers = [str(p) for p in (extra_layers or [])]
        self._overrides = dict(overrides or {})
        self._sources: List[str] = []
        self._merged: Dict[str, Any] = {}

    def layer_paths(self) -> List[str]:
        paths = [str(DEFAULTS_FILE)] if DEFAULTS_FILE.is_file() else []
        paths += split_layer_paths(self._env.get(ENV_CONFIG))
        paths += self._extra_layers
        return paths

    def load(self) -> Dict[str, Any]:
        paths = self.layer_paths()
        merged = merge_layers(paths)
        if self._overrides:
            merged = deep_merge(merged, self._overrides)
        self._merged = expand_tokens(merged, self._env)
        self._sources = [p for p in paths if Path(p).is_file()]
        logger.debug("config merged from %s", self._sources)
        return self._merged

    def finalize(self) -> GraphConfig:
        """Merge every layer and return the resolved GraphConfig."""
        return GraphConfig.from_dict(self.load())

    def debug_sources(self) -> str:
        return "\n".join(self._sources) if self._sources else "(defaults only)"


def load_config(path: Optional[str] = None, **overrides: Any) -> GraphConfig:
    """Convenience: defaults + env layers + an optional explicit file + keyword overrides."""
    layers = [path] if path else None
    return ConfigManager(extra_layers=layers, overrides=overrides or None).finalize()


__all__ = ["ConfigManager", "load_config", "load_layer", "ENV_CONFIG"]
