from __future__ import annotations

import pytest
from dlcity.api.deps import get_endpoints, get_registry, get_upstream_client
from dlcity.domain.centers import CenterRegistry
from dlcity.main import app
from dlcity.services.fetcher import CenterDatesFetcher
from dlcity.services.upstream.endpoints import UpstreamEndpoints
from fastapi.testclient import TestClient
from stubs import BASE_URL, StubUpstreamClient


@pytest.fixture()
def registry() -> CenterRegistry:
    return CenterRegistry.from_mapping({2: "Kutaisi", 3: "Batumi", 4: "Telavi"})


@pytest.fixture()
def endpoints() -> UpstreamEndpoints:
    return UpstreamEndpoints(base_url=BASE_URL, category_code=4)


@pytest.fixture()
def stub() -> StubUpstreamClient:
    return StubUpstreamClient()


@pytest.fixture()
def fetcher(stub, endpoints) -> CenterDatesFetcher:
    return CenterDatesFetcher(stub, endpoints)


@pytest.fixture()
def client(stub, registry, endpoints):
    app.dependency_overrides[get_upstream_client] = lambda: stub
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_endpoints] = lambda: endpoints
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
