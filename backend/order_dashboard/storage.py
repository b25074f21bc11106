"""JSON document store for orders.

Every operation reads the whole document, changes it in memory and writes the
whole document back. Writes append without checking for an existing order
number; duplicates are resolved when reading via ``merge_orders``. A
process-local lock serializes read-modify-write cycles inside one process,
separate processes sharing the file still overwrite each other.
"""

import json
import logging
import os
import tempfile
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, List, Union

from pydantic import ValidationError

from .config import get_settings
from .exceptions import OrderNotFound, StorageFailure, ValidationMissing
from .normalization import find_winner_index, merge_orders, normalize_order_number
from .schemas import Order, OrderStatus

logger = logging.getLogger(__name__)


class OrderStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.RLock()

    # -------------------- document I/O --------------------

    def _load(self) -> List[Order]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read orders document %s: %s", self.path, exc)
            raise StorageFailure("Failed to read orders", path=str(self.path)) from exc
        if not isinstance(payload, list):
            logger.error("Orders document %s is not a JSON array", self.path)
            raise StorageFailure("Orders document must be a JSON array", path=str(self.path))
        try:
            return [Order.model_validate(item) for item in payload]
        except ValidationError as exc:
            logger.error("Orders document %s holds an invalid record: %s", self.path, exc)
            raise StorageFailure("Orders document holds an invalid record", path=str(self.path)) from exc

    def _save(self, orders: List[Order]) -> None:
        payload = json.dumps([order.to_document() for order in orders], indent=2, ensure_ascii=False)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".orders-", suffix=".json", dir=str(self.path.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("Failed to write orders document %s: %s", self.path, exc)
            raise StorageFailure("Failed to save orders", path=str(self.path)) from exc

    # -------------------- reads --------------------

    def list_orders(self) -> List[Order]:
        with self._lock:
            return merge_orders(self._load())

    def get(self, order_number: Any) -> Order:
        key = normalize_order_number(order_number)
        for order in self.list_orders():
            if order.order_number == key:
                return order
        logger.debug("Order %r not found", key)
        raise OrderNotFound("Order not found", order_number=key)

    # -------------------- writes --------------------

    def create(self, record: Any) -> Order:
        order = record if isinstance(record, Order) else Order.model_validate(record)
        key = normalize_order_number(order.order_number)
        if not key:
            raise ValidationMissing("Order number is required")
        updates = {"order_number": key}
        if not order.id:
            updates["id"] = str(uuid.uuid4())
        if not order.transaction_date:
            updates["transaction_date"] = datetime.now(timezone.utc).isoformat()
        order = order.model_copy(update=updates)
        with self._lock:
            orders = self._load()
            orders.append(order)
            self._save(orders)
        logger.info("Created order %s (id=%s)", order.order_number, order.id)
        return order

    def update_status(self, order_number: Any, status: OrderStatus) -> Order:
        key = normalize_order_number(order_number)
        if not key:
            raise ValidationMissing("Order number is required")
        if not status:
            raise ValidationMissing("Status is required", order_number=key)
        with self._lock:
            orders = self._load()
            index = find_winner_index(orders, key)
            if index is None:
                logger.debug("Order %r not found for status update", key)
                raise OrderNotFound("Order not found", order_number=key)
            orders[index] = orders[index].model_copy(update={"status": status})
            self._save(orders)
        logger.info("Order %s status -> %s", key, status)
        return orders[index]

    def update_full(self, order_number: Any, record: Any) -> Order:
        key = normalize_order_number(order_number)
        if not key:
            raise ValidationMissing("Order number is required")
        replacement = record if isinstance(record, Order) else Order.model_validate(record)
        with self._lock:
            orders = self._load()
            index = find_winner_index(orders, key)
            if index is None:
                logger.debug("Order %r not found for replacement", key)
                raise OrderNotFound("Order not found", order_number=key)
            updates = {"order_number": key}
            if not replacement.id:
                updates["id"] = orders[index].id
            replacement = replacement.model_copy(update=updates)

            positions = [i for i, order in enumerate(orders) if normalize_order_number(order.order_number) == key]
            first = positions[0]
            kept = [order for i, order in enumerate(orders) if i not in positions]
            kept.insert(first, replacement)
            self._save(kept)
        logger.info("Replaced order %s (%d stored record(s) collapsed)", key, len(positions))
        return replacement

    def delete(self, order_number: Any) -> int:
        key = normalize_order_number(order_number)
        if not key:
            raise ValidationMissing("Order number is required")
        with self._lock:
            orders = self._load()
            kept = [order for order in orders if normalize_order_number(order.order_number) != key]
            self._save(kept)
        removed = len(orders) - len(kept)
        logger.info("Deleted order %s (%d record(s) removed)", key, removed)
        return removed


settings = get_settings()
store = OrderStore(settings.get_orders_path())


def get_store() -> OrderStore:
    return store


@contextmanager
def override_store(path: Union[str, Path]) -> Iterator[OrderStore]:
    """Used mainly in tests to temporarily point to another orders document."""

    global store
    old_store = store
    try:
        store = OrderStore(path)
        yield store
    finally:
        store = old_store
