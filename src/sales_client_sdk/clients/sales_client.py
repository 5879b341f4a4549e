from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List

from ..models import Product, Sale, SaleFormOptions, SaleQuery, User, WireModel
from .base import ResourceClient

logger = logging.getLogger(__name__)


class SalesClient(ResourceClient[Sale]):
    path = "/v1/sales"
    list_key = "sales"
    item_key = "sale"
    model = Sale
    query_model = SaleQuery
    noun = "Sale"

    def list_all_users(self) -> List[User]:
        """Users for the cashier dropdown; any failure yields an empty list."""
        return self._dropdown("/v1/user", "users", User)

    def list_all_products(self) -> List[Product]:
        """Products for the product dropdown; any failure yields an empty list."""
        return self._dropdown("/v1/products", "products", Product)

    def load_form_options(self) -> SaleFormOptions:
        """Fetch both dropdown lists in parallel and join them."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="sale-form") as pool:
            users = pool.submit(self.list_all_users)
            products = pool.submit(self.list_all_products)
            return SaleFormOptions(users=users.result(), products=products.result())

    def _dropdown(self, path: str, key: str, model: type[WireModel]) -> List[Any]:
        try:
            response = self._request("GET", path)
            if response.status_code != 200:
                logger.warning("dropdown_fetch_rejected", extra={"resource": key, "status_code": response.status_code})
                return []
            raw_items = self._payload(response).get(key) or []
            return [model.from_wire(item) for item in raw_items]
        except Exception as exc:
            logger.warning("dropdown_fetch_failed", extra={"resource": key, "reason": str(exc)})
            return []
