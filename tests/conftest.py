from __future__ import annotations

import pytest

from sales_client_sdk.auth_store import AuthStore
from sales_client_sdk.config import ClientConfig
from sales_client_sdk.http_client import HttpClient

BASE_URL = "http://127.0.0.1:8080"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig()


@pytest.fixture
def store(tmp_path) -> AuthStore:
    return AuthStore(base_dir=tmp_path)


@pytest.fixture
def http(config: ClientConfig, store: AuthStore) -> HttpClient:
    return HttpClient(config, store)


@pytest.fixture
def logged_in(store: AuthStore) -> AuthStore:
    store.set_token("tok-123")
    store.set_user_id(7)
    store.set_role("cashier")
    return store
