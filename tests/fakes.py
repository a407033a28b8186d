from __future__ import annotations

import threading
from typing import Any, Sequence

from lunchmap.errors import StoreError


class FakeStore:
    """In-memory RecordStore that records every call."""

    def __init__(self, rows: Sequence[dict] | None = None, id_field: str = "id") -> None:
        self.id_field = id_field
        self.rows: dict[str, dict] = {str(row[id_field]): dict(row) for row in rows or []}
        self.calls: list[tuple[str, tuple]] = []
        self.fail_on: set[str] = set()
        self._lock = threading.Lock()

    def _record(self, name: str, *args: Any) -> None:
        with self._lock:
            self.calls.append((name, args))
        if name in self.fail_on:
            raise StoreError(f"{name} failed")

    def count(self, name: str) -> int:
        return sum(1 for call, _ in self.calls if call == name)

    def query_range(self, field: str, minimum: float, maximum: float) -> list[dict]:
        self._record("query_range", field, minimum, maximum)
        return [dict(row) for row in self.rows.values() if minimum <= row[field] <= maximum]

    def query_by_id_list(self, ids: Sequence[str]) -> list[dict]:
        self._record("query_by_id_list", tuple(ids))
        return [dict(self.rows[i]) for i in ids if i in self.rows]

    def query_equals(self, field: str, value: Any) -> list[dict]:
        self._record("query_equals", field, value)
        return [dict(row) for row in self.rows.values() if row.get(field) == value]

    def get(self, record_id: str) -> dict | None:
        self._record("get", record_id)
        row = self.rows.get(record_id)
        return dict(row) if row else None

    def insert(self, fields: dict) -> dict:
        self._record("insert", fields)
        self.rows[str(fields[self.id_field])] = dict(fields)
        return dict(fields)

    def write(self, record_id: str, fields: dict) -> None:
        self._record("write", record_id, fields)
        if record_id in self.rows:
            self.rows[record_id].update(fields)

    def delete(self, record_id: str) -> None:
        self._record("delete", record_id)
        self.rows.pop(record_id, None)


def restaurant_row(rid: str, lat: float, lng: float, **extra: Any) -> dict:
    row = {
        "id": rid,
        "name": f"Restaurant {rid}",
        "latitude": lat,
        "longitude": lng,
        "average_rating": 0.0,
        "review_count": 0,
    }
    row.update(extra)
    return row
