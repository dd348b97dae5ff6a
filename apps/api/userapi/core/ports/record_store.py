from typing import Any, Dict, List, Optional, Protocol

Record = Dict[str, Any]


class StoreError(Exception):
    """Raised by a record store when the backend cannot be reached or refuses a call."""


class RecordStore(Protocol):
    def get(self, table: str, key: str) -> Optional[Record]:
        ...

    def scan(self, table: str) -> List[Record]:
        ...

    def put(self, table: str, record: Record) -> None:
        ...

    def delete(self, table: str, key: str) -> None:
        ...
