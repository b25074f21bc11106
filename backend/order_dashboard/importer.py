"""Load seed or legacy orders into the orders document."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .normalization import normalize_order_number
from .schemas import Order, coerce_order
from .storage import OrderStore


@dataclass
class ImportStats:
    created: int = 0
    skipped: int = 0


def load_existing_order_numbers(store: OrderStore) -> set[str]:
    return {order.order_number for order in store.list_orders() if order.order_number}


def parse_row(row: dict) -> Order:
    """Upconvert one legacy record (plain-string addresses, numeric ids)."""
    return coerce_order(row)


def import_orders(store: OrderStore, source_path: Path) -> ImportStats:
    stats = ImportStats()
    existing = load_existing_order_numbers(store)
    with source_path.open(encoding="utf-8") as fh:
        rows = json.load(fh)
    for row in rows:
        order = parse_row(row)
        order_number = normalize_order_number(order.order_number)
        if not order_number or order_number in existing:
            stats.skipped += 1
            continue
        store.create(order)
        existing.add(order_number)
        stats.created += 1
    return stats
