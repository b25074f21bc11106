"""Order number normalization and duplicate resolution.

Used by both the authoritative store and the client-side cache so the two
always agree on which record represents an order number.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .schemas import Order

logger = logging.getLogger(__name__)


def normalize_order_number(value: Any) -> str:
    """Dedup key for an order number: stringified, trimmed, upper-cased."""
    if value is None:
        return ""
    return str(value).strip().upper()


def parse_transaction_date(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 transaction date, or return ``None`` if it is unusable.

    Date-only strings and a trailing ``Z`` are accepted. Naive values are read
    as UTC so every parsed date is comparable with every other.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def is_later(candidate: Optional[datetime], current: Optional[datetime]) -> bool:
    """Strictly-later comparison; any unparseable side compares false."""
    if candidate is None or current is None:
        return False
    return candidate > current


def _checked_date(order: Order) -> Optional[datetime]:
    parsed = parse_transaction_date(order.transaction_date)
    if parsed is None:
        logger.warning(
            "Unparseable transactionDate %r on order %r; it cannot take part in date comparisons",
            order.transaction_date,
            order.order_number,
        )
    return parsed


def merge_orders(orders: Iterable[Order]) -> List[Order]:
    """Collapse duplicates to one order per normalized order number.

    A record replaces the current winner for its key only when its transaction
    date is strictly later, so equal dates keep the first record seen and a
    record with an unparseable date never displaces anything. The result is in
    order of first appearance of each key and carries normalized numbers.
    """
    winners: Dict[str, Order] = {}
    winner_dates: Dict[str, Optional[datetime]] = {}
    for order in orders:
        key = normalize_order_number(order.order_number)
        candidate_date = _checked_date(order)
        if key not in winners or is_later(candidate_date, winner_dates[key]):
            winners[key] = order.model_copy(update={"order_number": key})
            winner_dates[key] = candidate_date
    return list(winners.values())


def find_winner_index(orders: Sequence[Order], order_number: Any) -> Optional[int]:
    """Position of the record ``merge_orders`` would keep for ``order_number``."""
    key = normalize_order_number(order_number)
    winner: Optional[int] = None
    winner_date: Optional[datetime] = None
    for index, order in enumerate(orders):
        if normalize_order_number(order.order_number) != key:
            continue
        candidate_date = parse_transaction_date(order.transaction_date)
        if winner is None or is_later(candidate_date, winner_date):
            winner = index
            winner_date = candidate_date
    return winner
