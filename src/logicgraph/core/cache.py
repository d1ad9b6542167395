"""Per-entity memoization."""
from typing import Any, Callable, Dict, Optional


class Cache:
    """
    Memoize-until-invalidated map owned by a single entity.

    No TTL, no size bound, no locking. Owners must clear the right keys from
    every mutator; nothing here detects stale values.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}

    def use_cache(self, key: str, compute: Callable[[], Any]) -> Any:
        """Return the stored value for `key`, computing and storing it on a miss."""
        if key not in self._entries:
            self._entries[key] = compute()
        return self._entries[key]

    def clear(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def has(self, key: str) -> bool:
        return key in self._entries

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
