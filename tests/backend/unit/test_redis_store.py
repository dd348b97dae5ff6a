import json

import pytest

redis = pytest.importorskip("redis")

from userapi.core.ports.record_store import StoreError  # noqa: E402
from userapi.infrastructure.store.redis_store import RedisRecordStore  # noqa: E402


class FakeRedis:
    """Hash-only stand-in for redis.Redis with decode_responses=True."""

    def __init__(self):
        self.hashes = {}
        self.down = False

    def _check(self):
        if self.down:
            raise redis.ConnectionError("connection refused")

    def hget(self, name, key):
        self._check()
        return self.hashes.get(name, {}).get(key)

    def hvals(self, name):
        self._check()
        return list(self.hashes.get(name, {}).values())

    def hset(self, name, key, value):
        self._check()
        self.hashes.setdefault(name, {})[key] = value
        return 1

    def hdel(self, name, key):
        self._check()
        return 1 if self.hashes.get(name, {}).pop(key, None) is not None else 0


@pytest.fixture
def fake():
    return FakeRedis()


def test_put_and_get_use_one_hash_per_table(fake):
    store = RedisRecordStore(fake)
    record = {"email": "a@b.com", "firstName": "A", "lastName": "B"}

    store.put("users", record)

    assert json.loads(fake.hashes["table:users"]["a@b.com"]) == record
    assert store.get("users", "a@b.com") == record
    assert store.get("users", "missing@b.com") is None
    assert store.get("other", "a@b.com") is None


def test_scan_returns_all_records(fake):
    store = RedisRecordStore(fake)
    store.put("users", {"email": "a@b.com"})
    store.put("users", {"email": "c@d.com"})

    assert sorted(r["email"] for r in store.scan("users")) == ["a@b.com", "c@d.com"]
    assert store.scan("empty") == []


def test_scan_passes_through_undecodable_values(fake):
    fake.hashes["table:users"] = {"a@b.com": "{broken"}
    assert RedisRecordStore(fake).scan("users") == ["{broken"]


def test_get_undecodable_value_is_store_error(fake):
    fake.hashes["table:users"] = {"a@b.com": "{broken"}
    with pytest.raises(StoreError):
        RedisRecordStore(fake).get("users", "a@b.com")


def test_delete_is_idempotent(fake):
    store = RedisRecordStore(fake)
    store.put("users", {"email": "a@b.com"})

    store.delete("users", "a@b.com")
    store.delete("users", "a@b.com")

    assert store.get("users", "a@b.com") is None


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.get("users", "a@b.com"),
        lambda s: s.scan("users"),
        lambda s: s.put("users", {"email": "a@b.com"}),
        lambda s: s.delete("users", "a@b.com"),
    ],
)
def test_redis_errors_become_store_errors(fake, call):
    fake.down = True
    with pytest.raises(StoreError):
        call(RedisRecordStore(fake))


def test_custom_key_prefix(fake):
    store = RedisRecordStore(fake, key_prefix="svc")
    store.put("users", {"email": "a@b.com"})
    assert "svc:users" in fake.hashes
