"""Fetch records by id against a store that caps 'id in list' queries."""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, Generic, Iterable, Sequence, TypeVar

from ...config import settings
from ...data.store import Record, RecordStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Firestore-style backends reject "in" filters with more than 10 values.
DEFAULT_BATCH_SIZE = 10


def dedupe(ids: Iterable[str]) -> list[str]:
    """Drop repeated ids, keeping first-seen order."""
    return list(dict.fromkeys(ids))


def chunk(ids: Sequence[str], size: int) -> list[list[str]]:
    if size < 1:
        raise ValueError(f"Chunk size must be at least 1, got {size}.")
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]


class BatchedLookup(Generic[T]):
    """Resolve an arbitrary number of ids with one store call per chunk.

    Chunks are independent and run on a thread pool. The first failing chunk
    aborts the lookup: pending chunks are cancelled, finished ones are
    discarded and that chunk's exception is raised. Ids the store does not
    know are simply missing from the result.
    """

    def __init__(
        self,
        store: RecordStore,
        parse: Callable[[Record], T],
        *,
        batch_size: int | None = None,
        max_parallel_requests: int | None = None,
        id_field: str = "id",
    ) -> None:
        self.store = store
        self.parse = parse
        self.batch_size = batch_size or settings.id_batch_size or DEFAULT_BATCH_SIZE
        self.max_parallel_requests = max_parallel_requests or settings.max_parallel_requests
        self.id_field = id_field

    def fetch_by_ids(self, ids: Iterable[str]) -> list[T]:
        unique_ids = dedupe(ids)
        if not unique_ids:
            return []

        chunks = chunk(unique_ids, self.batch_size)
        if len(chunks) == 1:
            rows = self.store.query_by_id_list(chunks[0])
        else:
            rows = self._fetch_chunks_in_parallel(chunks)

        seen: set[str] = set()
        results: list[T] = []
        for row in rows:
            key = str(row.get(self.id_field))
            if key in seen:
                continue
            seen.add(key)
            results.append(self.parse(row))
        return results

    def _fetch_chunks_in_parallel(self, chunks: list[list[str]]) -> list[Record]:
        logger.debug(f"Fetching {sum(len(c) for c in chunks)} ids in {len(chunks)} chunks of <= {self.batch_size}")
        workers = min(self.max_parallel_requests, len(chunks))
        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            futures = [executor.submit(self.store.query_by_id_list, ids) for ids in chunks]
            done, _ = wait(futures, return_when=FIRST_EXCEPTION)
            for future in futures:
                if future in done and future.exception() is not None:
                    error = future.exception()
                    logger.warning(f"Chunk lookup failed, aborting batch of {len(chunks)} chunks: {error}")
                    raise error
            rows: list[Record] = []
            for future in futures:
                rows.extend(future.result())
            return rows
        finally:
            executor.shutdown(wait=False, cancel_futures=True)
