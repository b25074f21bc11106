"""Client-held order collection kept consistent with the server's canonical list.

An ``OrderCache`` belongs to whoever creates it (a view, a script, a test);
there is no module-level instance. It canonicalizes with the same
``merge_orders`` the store uses so both sides agree on keys and winners.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from .normalization import find_winner_index, merge_orders, normalize_order_number
from .schemas import DEFAULT_STATUS, Order, OrderStatus, coerce_order, order_total

logger = logging.getLogger(__name__)


class OrderCache:
    def __init__(self, persist_path: Optional[Union[str, Path]] = None):
        self.persist_path = Path(persist_path) if persist_path else None
        self.orders: List[Order] = self._load_persisted()

    @property
    def order_count(self) -> int:
        return len(self.orders)

    # -------------------- persistence --------------------

    def _load_persisted(self) -> List[Order]:
        if self.persist_path is None or not self.persist_path.exists():
            return []
        try:
            raw = json.loads(self.persist_path.read_text(encoding="utf-8"))
            return [self._normalized(coerce_order(item)) for item in raw]
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Ignoring unreadable order cache %s: %s", self.persist_path, exc)
            return []

    def _persist(self) -> None:
        if self.persist_path is None:
            return
        try:
            self.persist_path.parent.mkdir(parents=True, exist_ok=True)
            self.persist_path.write_text(
                json.dumps([order.to_document() for order in self.orders], indent=2),
                encoding="utf-8",
            )
        except OSError:
            logger.exception("Failed to save orders to %s", self.persist_path)

    @staticmethod
    def _normalized(order: Order) -> Order:
        return order.model_copy(update={"order_number": normalize_order_number(order.order_number)})

    def _index_of(self, order_number: Any) -> Optional[int]:
        key = normalize_order_number(order_number)
        for index, order in enumerate(self.orders):
            if order.order_number == key:
                return index
        return None

    # -------------------- mutations --------------------

    def set_orders(self, orders: Iterable[Any]) -> List[Order]:
        self.orders = merge_orders(coerce_order(order) for order in orders)
        self._persist()
        logger.debug("Cache holds %d order(s)", self.order_count)
        return self.orders

    def add_order(self, order: Any) -> Order:
        order = self._normalized(coerce_order(order))
        self.orders.append(order)
        self._persist()
        return order

    def update_order(self, order: Any) -> Optional[Order]:
        order = self._normalized(coerce_order(order))
        index = self._index_of(order.order_number)
        if index is None:
            return None
        self.orders[index] = order
        self._persist()
        return order

    def update_order_status(self, order_number: Any, status: Optional[OrderStatus]) -> Optional[Order]:
        """Collapse every cached copy of the order to the latest one and set its status."""
        key = normalize_order_number(order_number)
        winner = find_winner_index(self.orders, key)
        if winner is None:
            logger.debug("Order %r not in cache", key)
            return None
        updated = self.orders[winner].model_copy(update={"status": status or DEFAULT_STATUS})
        collapsed: List[Order] = []
        for index, order in enumerate(self.orders):
            if index == winner:
                collapsed.append(updated)
            elif order.order_number != key:
                collapsed.append(order)
        self.orders = collapsed
        self._persist()
        return updated

    def delete_order(self, order_number: Any) -> int:
        key = normalize_order_number(order_number)
        before = self.order_count
        self.orders = [order for order in self.orders if order.order_number != key]
        self._persist()
        return before - self.order_count

    def delete_order_line(self, order_number: Any, line_id: Any) -> Optional[Order]:
        index = self._index_of(order_number)
        if index is None:
            return None
        order = self.orders[index]
        lines = [line for line in order.lines if line.id != str(line_id)]
        self.orders[index] = order.model_copy(update={"lines": lines, "amount": order_total(lines)})
        self._persist()
        return self.orders[index]

    def rehydrate(self) -> List[Order]:
        self.orders = self._load_persisted()
        return self.orders
