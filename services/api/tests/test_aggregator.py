from __future__ import annotations

import contextvars
import threading

import pytest
from dlcity.domain.centers import CenterRegistry, default_registry
from dlcity.services.aggregator import AvailabilityAggregator
from dlcity.services.fetcher import CenterDatesFetcher
from stubs import StubUpstreamClient, ok, refuse

KUTAISI_BODY = b'[{"bookingDate":"2024-01-01","bookingDateStatus":1}]'


def test_one_entry_per_center_when_all_succeed(fetcher, registry):
    aggregate = AvailabilityAggregator(fetcher).fetch_all(registry)

    assert set(aggregate) == {"Kutaisi", "Batumi", "Telavi"}
    assert all(r.ok for r in aggregate.values())
    assert aggregate["Batumi"].center_id == 3


def test_every_fetch_failing_still_yields_every_center(endpoints):
    stub = StubUpstreamClient(default=refuse)
    reg = default_registry()

    aggregate = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints)).fetch_all(reg)

    assert len(aggregate) == len(reg) == 10
    for result in aggregate.values():
        assert result.error
        assert result.dates == []
    assert len(stub.calls) == 10


def test_mixed_outcomes_are_isolated_per_center(endpoints):
    stub = StubUpstreamClient(default=refuse).on(2, lambda url: ok(KUTAISI_BODY))
    reg = default_registry()

    aggregate = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints)).fetch_all(reg)

    kutaisi = aggregate["Kutaisi"]
    assert kutaisi.error is None
    assert [(d.booking_date, d.booking_date_status) for d in kutaisi.dates] == [("2024-01-01", 1)]
    for name, result in aggregate.items():
        if name == "Kutaisi":
            continue
        assert result.error
        assert result.dates == []


def test_unexpected_exception_in_one_fetch_does_not_abort_batch(endpoints, registry):
    def boom(url):
        raise RuntimeError("boom")

    stub = StubUpstreamClient().on(3, boom)

    aggregate = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints)).fetch_all(registry)

    assert len(aggregate) == 3
    assert aggregate["Batumi"].error == "error fetching data: boom"
    assert aggregate["Kutaisi"].ok
    assert aggregate["Telavi"].ok


def test_fetches_run_concurrently(endpoints, registry):
    # Every call waits for all the others; run one at a time this would time out.
    barrier = threading.Barrier(len(registry), timeout=5)

    def wait_for_everyone(url):
        barrier.wait()
        return ok()

    stub = StubUpstreamClient(default=wait_for_everyone)

    aggregate = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints)).fetch_all(registry)

    assert all(r.ok for r in aggregate.values())
    assert not barrier.broken


def test_capped_worker_pool_still_fetches_every_center(endpoints):
    reg = CenterRegistry.from_mapping({i: f"Center {i}" for i in range(1, 41)})
    stub = StubUpstreamClient()

    aggregate = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints), max_workers=4).fetch_all(reg)

    assert len(aggregate) == 40
    assert len(stub.calls) == 40


def test_empty_registry(fetcher, stub):
    assert AvailabilityAggregator(fetcher).fetch_all(CenterRegistry([])) == {}
    assert stub.calls == []


def test_invalid_worker_cap(fetcher):
    with pytest.raises(ValueError):
        AvailabilityAggregator(fetcher, max_workers=0)


def test_repeated_runs_give_equal_aggregates(endpoints):
    stub = StubUpstreamClient(default=refuse).on(2, lambda url: ok(KUTAISI_BODY))
    aggregator = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints))
    reg = default_registry()

    first = aggregator.fetch_all(reg)
    second = aggregator.fetch_all(reg)

    assert first == second


def test_workers_see_the_callers_context(endpoints, registry):
    request_tag: contextvars.ContextVar[str] = contextvars.ContextVar("request_tag", default="unset")
    seen = []

    def record(url):
        seen.append(request_tag.get())
        return ok()

    stub = StubUpstreamClient(default=record)
    aggregator = AvailabilityAggregator(CenterDatesFetcher(stub, endpoints))

    token = request_tag.set("req-42")
    try:
        aggregator.fetch_all(registry)
    finally:
        request_tag.reset(token)

    assert seen == ["req-42"] * len(registry)
