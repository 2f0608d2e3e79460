"""Storage abstractions and Redis implementation for repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional

import redis.asyncio as redis
from redis.exceptions import NoScriptError, RedisError

from ..domain.errors import DependencyError
from .database import DatabaseClient


class KeyValueStore(ABC):
    """Abstract key-value store with minimal operations used by repositories."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    async def delete(self, key: str) -> int:
        pass

    @abstractmethod
    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        pass

    @abstractmethod
    async def zrevrange(self, key: str, start: int, end: int) -> list[str]:
        pass

    @abstractmethod
    async def zrem(self, key: str, member: str) -> int:
        pass

    @abstractmethod
    async def zcard(self, key: str) -> int:
        pass

    @abstractmethod
    async def register_script(self, name: str, script: str) -> str:
        """Load ``script`` under ``name`` and return its SHA1."""
        pass

    @abstractmethod
    async def run_script(self, name: str, keys: List[str], args: List[str]) -> Any:
        """Execute a previously registered script by name."""
        pass


class RedisKeyValueStore(KeyValueStore):
    """Redis-backed implementation of KeyValueStore.

    Redis failures surface as ``DependencyError`` so use cases never see
    driver-specific exceptions.
    """

    def __init__(self, db_client: DatabaseClient):
        self._db_client = db_client
        self._script_shas: Dict[str, str] = {}
        self._script_sources: Dict[str, str] = {}

    @asynccontextmanager
    async def _connection(self) -> AsyncGenerator[redis.Redis, None]:
        try:
            async with self._db_client.get_connection() as conn:
                yield conn
        except RedisError as e:
            raise DependencyError("Vendor store is unavailable", details=str(e)) from e

    async def get(self, key: str) -> Optional[str]:
        async with self._connection() as conn:
            return await conn.get(key)

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        if not keys:
            return []
        async with self._connection() as conn:
            return await conn.mget(keys)

    async def set(self, key: str, value: str) -> None:
        async with self._connection() as conn:
            await conn.set(key, value)

    async def delete(self, key: str) -> int:
        async with self._connection() as conn:
            return await conn.delete(key)

    async def zadd(self, key: str, mapping: Mapping[str, float]) -> int:
        async with self._connection() as conn:
            return await conn.zadd(key, mapping)

    async def zrevrange(self, key: str, start: int, end: int) -> list[str]:
        async with self._connection() as conn:
            return await conn.zrevrange(key, start, end)

    async def zrem(self, key: str, member: str) -> int:
        async with self._connection() as conn:
            return await conn.zrem(key, member)

    async def zcard(self, key: str) -> int:
        async with self._connection() as conn:
            return await conn.zcard(key)

    async def register_script(self, name: str, script: str) -> str:
        async with self._connection() as conn:
            sha = await conn.script_load(script)
        self._script_shas[name] = sha
        self._script_sources[name] = script
        return sha

    async def run_script(self, name: str, keys: List[str], args: List[str]) -> Any:
        if name not in self._script_sources:
            raise ValueError(f"Script '{name}' not registered")
        async with self._connection() as conn:
            try:
                return await conn.evalsha(
                    self._script_shas[name], len(keys), *keys, *args
                )
            except NoScriptError:
                # Script cache was flushed (e.g. Redis restart); reload once.
                sha = await conn.script_load(self._script_sources[name])
                self._script_shas[name] = sha
                return await conn.evalsha(sha, len(keys), *keys, *args)
