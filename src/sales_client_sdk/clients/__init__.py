from .base import BaseClient, ResourceClient
from .chat_client import ChatClient
from .products_client import ProductsClient
from .sales_client import SalesClient
from .users_client import UsersClient

__all__ = [
    "BaseClient",
    "ChatClient",
    "ProductsClient",
    "ResourceClient",
    "SalesClient",
    "UsersClient",
]
