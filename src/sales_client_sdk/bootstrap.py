from __future__ import annotations

from dataclasses import dataclass

import requests

from .auth_store import AuthStore
from .clients import ChatClient, ProductsClient, SalesClient, UsersClient
from .config import ClientConfig, load_config
from .http_client import HttpClient
from .session import SessionManager


@dataclass
class Services:
    config: ClientConfig
    store: AuthStore
    http: HttpClient
    session: SessionManager
    products: ProductsClient
    sales: SalesClient
    users: UsersClient
    chat: ChatClient


def build_services(
    config: ClientConfig | None = None,
    store: AuthStore | None = None,
    http_session: requests.Session | None = None,
) -> Services:
    """Wire the store, transport, session and resource clients once."""
    config = config or load_config()
    store = store or AuthStore(
        base_dir=config.data_dir,
        default_host=config.default_host,
        default_port=config.default_port,
    )
    http = HttpClient(config=config, store=store, session=http_session)
    return Services(
        config=config,
        store=store,
        http=http,
        session=SessionManager(http, store),
        products=ProductsClient(http=http),
        sales=SalesClient(http=http),
        users=UsersClient(http=http),
        chat=ChatClient(http=http),
    )
