"""HTTP client for the order API that keeps an ``OrderCache`` in step with the server."""

import logging
from typing import Any, List, Optional
from urllib.parse import quote

import httpx

from .cache import OrderCache
from .schemas import Order, OrderStatus, coerce_order

logger = logging.getLogger(__name__)


class OrdersApiError(Exception):
    """The order API answered with an error status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class OrdersClient:
    """Wraps an ``httpx.Client`` whose base URL points at the API root."""

    def __init__(self, http: httpx.Client, cache: Optional[OrderCache] = None):
        self.http = http
        self.cache = cache if cache is not None else OrderCache()

    def _check(self, response: httpx.Response) -> Any:
        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = body.get("detail", response.text) if isinstance(body, dict) else response.text
            logger.warning("%s %s failed: %s %s", response.request.method, response.request.url, response.status_code, detail)
            raise OrdersApiError(response.status_code, str(detail))
        return response.json()

    def fetch_orders(self) -> List[Order]:
        payload = self._check(self.http.get("/orders"))
        return self.cache.set_orders(coerce_order(raw) for raw in payload)

    def fetch_order(self, order_number: str) -> Order:
        payload = self._check(self.http.get("/orders", params={"orderNumber": order_number}))
        return coerce_order(payload)

    def create_order(self, order: Any) -> Order:
        body = coerce_order(order).to_document()
        saved = coerce_order(self._check(self.http.post("/orders", json=body)))
        self.fetch_orders()
        return saved

    def update_order_status(self, order_number: str, status: OrderStatus) -> Order:
        payload = self._check(
            self.http.put("/orders", params={"orderNumber": order_number}, json={"status": status})
        )
        self.fetch_orders()
        return coerce_order(payload)

    def update_order(self, order: Any) -> Order:
        order = coerce_order(order)
        order_number = order.order_number.strip()
        if not order_number:
            raise ValueError("Order number is required")
        path = "/orders/" + quote(order_number, safe="")
        updated = coerce_order(self._check(self.http.put(path, json=order.to_document())))
        self.fetch_orders()
        return updated

    def delete_order(self, order_number: str) -> str:
        self._check(self.http.delete("/orders", params={"orderNumber": order_number}))
        self.fetch_orders()
        return order_number
