from __future__ import annotations

import contextvars
import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor, wait

from dlcity.domain.centers import CenterEntry, CenterRegistry
from dlcity.schemas.centers import CenterResult
from dlcity.services.fetcher import CenterDatesFetcher

logger = logging.getLogger(__name__)


class AvailabilityAggregator:
    """Fans one dates fetch per center out to worker threads and joins them.

    Workers only put results on a queue; the calling thread is the single
    consumer and builds the aggregate after every worker has finished.
    """

    def __init__(self, fetcher: CenterDatesFetcher, *, max_workers: int | None = None):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._fetcher = fetcher
        self._max_workers = max_workers

    def _run_one(self, entry: CenterEntry, results: queue.Queue[CenterResult]) -> None:
        try:
            result = self._fetcher.fetch_one(entry)
        except Exception as exc:
            logger.exception("unexpected failure fetching center %s", entry.center_id)
            result = CenterResult(
                center_id=entry.center_id,
                center_name=entry.name,
                error=f"error fetching data: {exc}",
            )
        results.put_nowait(result)

    def fetch_all(self, registry: CenterRegistry) -> dict[str, CenterResult]:
        entries = list(registry)
        if not entries:
            return {}

        started = time.perf_counter()
        # Sized so no producer ever blocks on put.
        results: queue.Queue[CenterResult] = queue.Queue(maxsize=len(entries))
        workers = min(self._max_workers or len(entries), len(entries))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="center-fetch") as pool:
            # Each task runs in a copy of the caller's context so tracing and
            # other context variables follow the request into the workers.
            futures = [
                pool.submit(contextvars.copy_context().run, self._run_one, entry, results)
                for entry in entries
            ]
            wait(futures)

        aggregate: dict[str, CenterResult] = {}
        while True:
            try:
                result = results.get_nowait()
            except queue.Empty:
                break
            aggregate[result.center_name] = result

        failed = sum(1 for r in aggregate.values() if not r.ok)
        logger.info(
            "fetched %d centers (%d ok, %d failed) in %d ms",
            len(aggregate),
            len(aggregate) - failed,
            failed,
            int((time.perf_counter() - started) * 1000),
        )
        return aggregate
