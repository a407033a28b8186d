"""Record store capability and its Supabase implementation.

The store is modelled as a narrow capability rather than a generic query
builder: the search services only need a single-field range query, an
"id in list" query capped at a small batch size, an equality query and a
partial write. Any backend able to answer those can stand in for Supabase.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, Sequence

from supabase import Client

from ..errors import StoreError

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordStore(Protocol):
    """Operations the services need from one table/collection."""

    def query_range(self, field: str, minimum: float, maximum: float) -> list[Record]: ...

    def query_by_id_list(self, ids: Sequence[str]) -> list[Record]: ...

    def query_equals(self, field: str, value: Any) -> list[Record]: ...

    def get(self, record_id: str) -> Record | None: ...

    def insert(self, fields: Record) -> Record: ...

    def write(self, record_id: str, fields: Record) -> None: ...

    def delete(self, record_id: str) -> None: ...


class SupabaseRecordStore:
    """RecordStore backed by one Supabase (PostgREST) table."""

    def __init__(self, client: Client, table: str, *, id_field: str = "id", max_ids_per_query: int = 10) -> None:
        self.client = client
        self.table = table
        self.id_field = id_field
        self.max_ids_per_query = max_ids_per_query

    def _execute(self, action: str, run: Callable[[], Any]) -> list[Record]:
        try:
            response = run()
        except Exception as exc:
            logger.warning(f"Supabase {action} on '{self.table}' failed: {exc}")
            raise StoreError(f"Store {action} on '{self.table}' failed: {exc}") from exc
        return list(response.data or [])

    def query_range(self, field: str, minimum: float, maximum: float) -> list[Record]:
        return self._execute(
            "range query",
            lambda: self.client.table(self.table).select("*").gte(field, minimum).lte(field, maximum).execute(),
        )

    def query_by_id_list(self, ids: Sequence[str]) -> list[Record]:
        if len(ids) > self.max_ids_per_query:
            raise StoreError(
                f"'id in list' queries accept at most {self.max_ids_per_query} ids, got {len(ids)}."
            )
        if not ids:
            return []
        return self._execute(
            "id list query",
            lambda: self.client.table(self.table).select("*").in_(self.id_field, list(ids)).execute(),
        )

    def query_equals(self, field: str, value: Any) -> list[Record]:
        return self._execute(
            "equality query",
            lambda: self.client.table(self.table).select("*").eq(field, value).execute(),
        )

    def get(self, record_id: str) -> Record | None:
        rows = self._execute(
            "get",
            lambda: self.client.table(self.table).select("*").eq(self.id_field, record_id).limit(1).execute(),
        )
        return rows[0] if rows else None

    def insert(self, fields: Record) -> Record:
        rows = self._execute("insert", lambda: self.client.table(self.table).insert(fields).execute())
        return rows[0] if rows else dict(fields)

    def write(self, record_id: str, fields: Record) -> None:
        self._execute(
            "update",
            lambda: self.client.table(self.table).update(fields).eq(self.id_field, record_id).execute(),
        )

    def delete(self, record_id: str) -> None:
        self._execute(
            "delete",
            lambda: self.client.table(self.table).delete().eq(self.id_field, record_id).execute(),
        )
