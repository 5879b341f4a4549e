from __future__ import annotations

from ..models import Product, ProductQuery
from .base import ResourceClient


class ProductsClient(ResourceClient[Product]):
    path = "/v1/products"
    list_key = "products"
    item_key = "product"
    model = Product
    query_model = ProductQuery
    noun = "Product"
