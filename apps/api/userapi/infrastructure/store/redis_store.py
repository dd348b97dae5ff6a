import json
import logging
from typing import List, Optional

import redis

from userapi.core.ports.record_store import Record, StoreError

logger = logging.getLogger("user_store")


class RedisRecordStore:
    """
    One Redis hash per table: field = email, value = the JSON-encoded record.
    HGET/HVALS/HSET/HDEL keep every call a single round trip.
    """

    def __init__(self, client: redis.Redis, key_prefix: str = "table") -> None:
        self.client = client
        self.key_prefix = key_prefix

    def _key(self, table: str) -> str:
        return f"{self.key_prefix}:{table}"

    def get(self, table: str, key: str) -> Optional[Record]:
        try:
            raw = self.client.hget(self._key(table), key)
        except redis.RedisError as exc:
            logger.warning("Redis HGET failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError(f"undecodable record in {table}") from exc

    def scan(self, table: str) -> List[Record]:
        try:
            values = self.client.hvals(self._key(table))
        except redis.RedisError as exc:
            logger.warning("Redis HVALS failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
        records: List[Record] = []
        for raw in values:
            try:
                records.append(json.loads(raw))
            except json.JSONDecodeError:
                # Hand the raw text on so the caller reports it as a decode failure.
                records.append(raw)
        return records

    def put(self, table: str, record: Record) -> None:
        try:
            self.client.hset(self._key(table), record["email"], json.dumps(record))
        except redis.RedisError as exc:
            logger.warning("Redis HSET failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc

    def delete(self, table: str, key: str) -> None:
        try:
            self.client.hdel(self._key(table), key)
        except redis.RedisError as exc:
            logger.warning("Redis HDEL failed: %s", exc.__class__.__name__)
            raise StoreError(str(exc)) from exc
