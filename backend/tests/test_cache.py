import json

from order_dashboard.cache import OrderCache
from order_dashboard.schemas import Order


def _raw(number, date, **fields):
    return {"orderNumber": number, "transactionDate": date, **fields}


def test_set_orders_uses_the_server_key():
    cache = OrderCache()
    cache.set_orders([_raw("ab-1 ", "2024-01-01", customer="A"), _raw("AB-1", "2024-02-01", customer="B")])

    assert cache.order_count == 1
    assert cache.orders[0].order_number == "AB-1"
    assert cache.orders[0].customer == "B"


def test_add_order_appends_without_dedup():
    cache = OrderCache()
    cache.add_order(_raw("x1", "2024-01-01"))
    cache.add_order(_raw("X1", "2024-02-01"))
    assert cache.order_count == 2


def test_update_order_replaces_matching_record():
    cache = OrderCache()
    cache.set_orders([_raw("x1", "2024-01-01", customer="A")])

    assert cache.update_order(_raw(" x1", "2024-01-01", customer="Z")).customer == "Z"
    assert cache.orders[0].customer == "Z"
    assert cache.update_order(_raw("nope", "2024-01-01")) is None


def test_update_order_status_collapses_to_latest():
    cache = OrderCache()
    cache.add_order(_raw("x1", "2024-01-01", customer="old"))
    cache.add_order(_raw("y2", "2024-01-01"))
    cache.add_order(_raw("x1", "2024-05-01", customer="new"))

    updated = cache.update_order_status("X1", "Approved")

    assert updated.customer == "new"
    assert updated.status == "Approved"
    assert [o.order_number for o in cache.orders] == ["Y2", "X1"]
    assert cache.update_order_status("x1", "").status == "Pending"
    assert cache.update_order_status("zz", "Shipped") is None


def test_delete_order_and_line():
    cache = OrderCache()
    cache.set_orders(
        [
            _raw(
                "x1",
                "2024-01-01",
                lines=[
                    {"id": "a", "item": "Bolt", "quantity": 1, "price": 2, "amount": 2},
                    {"id": "b", "item": "Nut", "quantity": 3, "price": 1, "amount": 3},
                ],
            ),
            _raw("y2", "2024-01-01"),
        ]
    )
    assert cache.orders[0].amount == 5

    trimmed = cache.delete_order_line("x1", "a")
    assert [line.id for line in trimmed.lines] == ["b"]
    assert trimmed.amount == 3
    assert cache.delete_order_line("zz", "a") is None

    assert cache.delete_order("X1") == 1
    assert cache.delete_order("X1") == 0
    assert [o.order_number for o in cache.orders] == ["Y2"]


def test_persisted_state_rehydrates(tmp_path):
    path = tmp_path / "cache.json"
    cache = OrderCache(path)
    cache.set_orders([Order(order_number="x1", transaction_date="2024-01-01", status="Shipped")])

    reopened = OrderCache(path)
    assert reopened.order_count == 1
    assert reopened.orders[0].status == "Shipped"

    stored = json.loads(path.read_text(encoding="utf-8"))
    stored[0]["status"] = ""
    stored[0]["orderNumber"] = " x1 "
    path.write_text(json.dumps(stored), encoding="utf-8")

    rehydrated = reopened.rehydrate()
    assert rehydrated[0].status == "Pending"
    assert rehydrated[0].order_number == "X1"


def test_unreadable_persisted_state_starts_empty(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("oops", encoding="utf-8")
    assert OrderCache(path).orders == []
