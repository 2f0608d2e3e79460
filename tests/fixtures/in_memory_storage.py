"""In-memory implementation of KeyValueStore for testing."""

from __future__ import annotations

import json
from typing import Any, List, Mapping, Optional

from marketplace.infrastructure.storage import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory implementation of KeyValueStore for fast testing.

    Registered Lua scripts are executed by equivalent Python functions looked
    up by script name.
    """

    def __init__(self) -> None:
        self._data: dict[str, str] = {}
        self._sorted_sets: dict[str, list[tuple[str, float]]] = {}
        self._script_cache: dict[str, str] = {}
        self._script_sources: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        return [self._data.get(key) for key in keys]

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> int:
        if key in self._data:
            del self._data[key]
            return 1
        return 0

    def _zadd_one(self, key: str, member: str, score: float) -> bool:
        members = self._sorted_sets.setdefault(key, [])
        existed = any(m == member for m, _ in members)
        members[:] = [(m, s) for m, s in members if m != member]
        members.append((member, score))
        # Keep sorted by score (descending)
        members.sort(key=lambda x: x[1], reverse=True)
        return not existed

    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        """Add members to sorted set."""
        return sum(
            1 for member, score in mapping.items() if self._zadd_one(key, member, score)
        )

    async def zrevrange(self, key: str, start: int, end: int) -> list[str]:
        """Get range from sorted set (already sorted descending)."""
        members = [m for m, _ in self._sorted_sets.get(key, [])]
        # Redis zrevrange is inclusive on both ends
        slice_end = None if end == -1 else end + 1
        return members[start:slice_end]

    async def zrem(self, key: str, member: str) -> int:
        """Remove member from sorted set."""
        if key not in self._sorted_sets:
            return 0
        original_len = len(self._sorted_sets[key])
        self._sorted_sets[key] = [
            (m, s) for m, s in self._sorted_sets[key] if m != member
        ]
        return 1 if len(self._sorted_sets[key]) < original_len else 0

    async def zcard(self, key: str) -> int:
        return len(self._sorted_sets.get(key, []))

    async def register_script(self, name: str, script: str) -> str:
        """Register a script (return mock SHA1)."""
        self._script_cache[name] = f"sha1_{name}"
        self._script_sources[name] = script
        return f"sha1_{name}"

    async def run_script(self, name: str, keys: List[str], args: List[str]) -> Any:
        """Execute script by name."""
        if name not in self._script_cache:
            raise ValueError(f"Script '{name}' not registered")
        handlers = {
            "create_vendor": self._execute_create_vendor,
            "transition_vendor_status": self._execute_transition_vendor_status,
            "create_category": self._execute_create_category,
            "create_product": self._execute_create_product,
            "update_product": self._execute_update_product,
        }
        if name not in handlers:
            raise NotImplementedError(f"Script not implemented: {name}")
        return handlers[name](keys, args)

    def _execute_create_vendor(self, keys: List[str], args: List[str]) -> list[Any]:
        vendor_key, email_key, slug_key, all_key, status_key = keys
        vendor_json, vendor_id, created_ts = args[0], args[1], float(args[2])

        if email_key in self._data:
            return [2, ""]
        if slug_key in self._data:
            return [3, ""]

        self._data[vendor_key] = vendor_json
        self._data[email_key] = vendor_id
        self._data[slug_key] = vendor_id
        self._zadd_one(all_key, vendor_id, created_ts)
        self._zadd_one(status_key, vendor_id, created_ts)
        return [1, vendor_json]

    def _execute_transition_vendor_status(
        self, keys: List[str], args: List[str]
    ) -> list[Any]:
        vendor_key, from_status_key, to_status_key = keys
        new_json, expected_status, vendor_id = args[0], args[1], args[2]
        created_ts, expected_updated_at = float(args[3]), args[4]

        current_raw = self._data.get(vendor_key)
        if not current_raw:
            return [2, ""]
        current = json.loads(current_raw)
        if (
            current.get("status") != expected_status
            or (current.get("updated_at") or "") != expected_updated_at
        ):
            return [0, current_raw]

        self._data[vendor_key] = new_json
        if from_status_key != to_status_key:
            self._sorted_sets[from_status_key] = [
                (m, s)
                for m, s in self._sorted_sets.get(from_status_key, [])
                if m != vendor_id
            ]
            self._zadd_one(to_status_key, vendor_id, created_ts)
        return [1, new_json]

    def _execute_create_category(self, keys: List[str], args: List[str]) -> list[Any]:
        category_key, name_key, slug_key, all_key = keys
        category_json, category_id, created_ts = args[0], args[1], float(args[2])

        if name_key in self._data:
            return [2, ""]
        if slug_key in self._data:
            return [3, ""]

        self._data[category_key] = category_json
        self._data[name_key] = category_id
        self._data[slug_key] = category_id
        self._zadd_one(all_key, category_id, created_ts)
        return [1, category_json]

    def _execute_create_product(self, keys: List[str], args: List[str]) -> list[Any]:
        product_key, slug_key, all_key, vendor_products_key = keys
        product_json, product_id, created_ts = args[0], args[1], float(args[2])

        if slug_key in self._data:
            return [3, ""]

        self._data[product_key] = product_json
        self._data[slug_key] = product_id
        self._zadd_one(all_key, product_id, created_ts)
        self._zadd_one(vendor_products_key, product_id, created_ts)
        return [1, product_json]

    def _execute_update_product(self, keys: List[str], args: List[str]) -> list[Any]:
        (product_key,) = keys
        if product_key not in self._data:
            return [2, ""]
        self._data[product_key] = args[0]
        return [1, args[0]]

    def clear(self) -> None:
        """Clear all data."""
        self._data.clear()
        self._sorted_sets.clear()
