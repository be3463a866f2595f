"""Shared fixtures: isolated settings, stub providers and an app client."""

from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from pos_pricing.core.config import Settings
from pos_pricing.db.dal import Database
from pos_pricing.db.migrate import apply_migrations
from pos_pricing.main import create_app
from pos_pricing.services.http_client import HttpError
from pos_pricing.services.rates.base import RateProvider
from pos_pricing.services.rates.fetcher import RateFetcher
from pos_pricing.services.rates.rate_service import RateService
from pos_pricing.services.rates.store import MemoryRateStore, SqliteRateStore


class StubProvider(RateProvider):
    name = "stub"

    def __init__(self, payload: Optional[Dict[str, Any]] = None, error: bool = False):
        self.payload = payload if payload is not None else {"rate": 36.5, "date": "2024-05-21"}
        self.error = error
        self.calls = 0

    def fetch_payload(self) -> Dict[str, Any]:
        self.calls += 1
        if self.error:
            raise HttpError("connection refused")
        return self.payload


@pytest.fixture
def settings(tmp_path) -> Settings:
    s = Settings(data_dir=tmp_path, rate_provider="static", static_rate=40.0, _env_file=None)
    s.init_post_load()
    return s


@pytest.fixture
def db(settings) -> Database:
    apply_migrations(settings.db_path)
    return Database(settings.db_path)


@pytest.fixture
def provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def memory_service(provider) -> RateService:
    return RateService(MemoryRateStore(), RateFetcher(provider))


@pytest.fixture
def sqlite_service(db, provider) -> RateService:
    return RateService(SqliteRateStore(db), RateFetcher(provider))


@pytest.fixture
def client(settings, sqlite_service) -> TestClient:
    app = create_app(settings_override=settings, rate_service=sqlite_service)
    with TestClient(app) as c:
        yield c
