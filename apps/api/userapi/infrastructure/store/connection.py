import logging
import os
from typing import Optional

import redis
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from userapi.core.ports.record_store import RecordStore
from userapi.infrastructure.store.memory_store import InMemoryRecordStore
from userapi.infrastructure.store.postgres_store import PostgresRecordStore
from userapi.infrastructure.store.redis_store import RedisRecordStore

logger = logging.getLogger("user_store")

STORE_BACKEND = os.environ.get("USER_STORE_BACKEND", "redis").lower()
REDIS_URL = os.environ.get("REDIS_URL", "redis://redis:6379/0")
DATABASE_URL = os.environ.get("DATABASE_URL")
USERS_TABLE = os.environ.get("USERS_TABLE", "users")

store: Optional[RecordStore] = None
_pool: Optional[ConnectionPool] = None


def _redis_store() -> RedisRecordStore:
    client = redis.Redis.from_url(
        REDIS_URL,
        decode_responses=True,
        socket_connect_timeout=2,
        socket_timeout=2,
    )
    return RedisRecordStore(client)


def _postgres_store() -> PostgresRecordStore:
    global _pool
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")
    _pool = ConnectionPool(
        conninfo=DATABASE_URL,
        min_size=1,
        max_size=5,
        max_idle=5,
        timeout=10,
        # Dict rows so records come back keyed by column.
        kwargs={"row_factory": dict_row},
    )
    return PostgresRecordStore(_pool)


def init_store() -> None:
    global store
    if store is not None:
        return
    if STORE_BACKEND == "redis":
        store = _redis_store()
    elif STORE_BACKEND == "postgres":
        store = _postgres_store()
    elif STORE_BACKEND == "memory":
        store = InMemoryRecordStore()
    else:
        raise RuntimeError(f"Unknown USER_STORE_BACKEND: {STORE_BACKEND}")
    logger.info("Record store initialized", extra={"backend": STORE_BACKEND})


def close_store() -> None:
    global store, _pool
    if isinstance(store, RedisRecordStore):
        store.client.close()
    if _pool is not None:
        _pool.close()
        _pool = None
    store = None


def get_store() -> RecordStore:
    if store is None:
        raise RuntimeError("Record store is not initialized")
    return store


def get_table() -> str:
    return USERS_TABLE
