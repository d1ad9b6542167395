"""Layered configuration for graphs."""
from .types import GraphConfig, DEFAULT_WORLD
from .manager import ConfigManager, load_config

__all__ = ["GraphConfig", "DEFAULT_WORLD", "ConfigManager", "load_config"]

if __name__ == "__main__":
    # Optional: export LOGICGRAPH_CONFIG=/path/to/site.yaml before running
    mgr = ConfigManager()
    cfg = mgr.finalize()

    print("\n--- Which files were merged ---")
    print(mgr.debug_sources())

    print("\n--- Resolved GraphConfig ---")
    print(cfg.to_dict())
