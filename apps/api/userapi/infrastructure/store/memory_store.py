from typing import Dict, List, Optional

from userapi.core.ports.record_store import Record


class InMemoryRecordStore:
    """Process-local store; records live only as long as the instance."""

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[str, Record]] = {}

    def get(self, table: str, key: str) -> Optional[Record]:
        record = self._tables.get(table, {}).get(key)
        return dict(record) if record is not None else None

    def scan(self, table: str) -> List[Record]:
        return [dict(record) for record in self._tables.get(table, {}).values()]

    def put(self, table: str, record: Record) -> None:
        self._tables.setdefault(table, {})[record["email"]] = dict(record)

    def delete(self, table: str, key: str) -> None:
        self._tables.get(table, {}).pop(key, None)
