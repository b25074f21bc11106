"""Dashboard and report aggregates over the canonical order list."""

from typing import Dict, Iterable

from ..schemas import STATUS_CHOICES, CustomerTotals, Order, OrdersSummary


def summarize_orders(orders: Iterable[Order]) -> OrdersSummary:
    orders = list(orders)
    total_amount = sum((order.amount or 0) for order in orders)
    by_status: Dict[str, int] = {status: 0 for status in STATUS_CHOICES}
    by_customer: Dict[str, CustomerTotals] = {}

    for order in orders:
        by_status[order.status] = by_status.get(order.status, 0) + 1
        totals = by_customer.setdefault(order.customer or "Unassigned", CustomerTotals())
        totals.count += 1
        totals.amount += order.amount or 0

    return OrdersSummary(
        total_orders=len(orders),
        total_amount=total_amount,
        average_amount=total_amount / len(orders) if orders else 0,
        unique_customers=len({order.customer for order in orders}),
        by_status=by_status,
        by_customer=by_customer,
    )
