import sys
from pathlib import Path

import pytest

# Ensure apps/api is on path for imports inside the API package (e.g., `userapi.application.user_repository`).
ROOT = Path(__file__).resolve().parents[1]
API_PATH = ROOT / "apps" / "api"
if str(API_PATH) not in sys.path:
    sys.path.insert(0, str(API_PATH))

from userapi.core.ports.record_store import StoreError  # noqa: E402
from userapi.infrastructure.store.memory_store import InMemoryRecordStore  # noqa: E402


class RecordingStore(InMemoryRecordStore):
    """In-memory store that records calls and can be told to fail per operation."""

    def __init__(self):
        super().__init__()
        self.calls = []
        self.fail_on = set()

    def _call(self, op, *args):
        self.calls.append((op,) + args)
        if op in self.fail_on:
            raise StoreError(f"{op} unavailable")

    def get(self, table, key):
        self._call("get", table, key)
        return super().get(table, key)

    def scan(self, table):
        self._call("scan", table)
        return super().scan(table)

    def put(self, table, record):
        self._call("put", table, record)
        super().put(table, record)

    def delete(self, table, key):
        self._call("delete", table, key)
        super().delete(table, key)

    def ops(self, name):
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def store():
    return RecordingStore()
