from decimal import Decimal

import pytest

from storefront.domain.exceptions import InsufficientStockError, InvalidArgumentError, InvalidStateError
from storefront.domain.models import Order, OrderStatus, Product


def make_product(price="10.00", stock=5, product_id=1):
    return Product(id=product_id, name="Mouse", price=Decimal(price), stock=stock, category="Peripherals")


def test_order_totals_follow_items_and_discount():
    order = Order(customer_id="c-1", customer_name="Alice")
    order.add_item(make_product("10.00"), 3)
    order.add_item(make_product("2.50", product_id=2), 2)

    assert order.subtotal == Decimal("35.00")
    order.apply_discount(Decimal("5"))
    assert order.total == Decimal("30.00")


def test_total_never_negative():
    order = Order(customer_id="c-1", customer_name="Alice")
    order.add_item(make_product("10.00"), 1)
    order.apply_discount(Decimal("25"))
    assert order.total == 0


def test_item_captures_price_at_order_time():
    product = make_product("10.00")
    order = Order(customer_id="c-1", customer_name="Alice")
    order.add_item(product, 2)

    product.price = Decimal("99.00")
    product.name = "Renamed"

    assert order.items[0].unit_price == Decimal("10.00")
    assert order.items[0].product_name == "Mouse"
    assert order.items[0].subtotal == Decimal("20.00")


def test_reduce_stock_refuses_to_go_negative():
    product = make_product(stock=2)
    with pytest.raises(InsufficientStockError):
        product.reduce_stock(3)
    assert product.stock == 2


def test_apply_update_changes_only_given_fields():
    product = make_product()
    product.apply_update({"name": "Trackball", "stock": 0})
    assert product.name == "Trackball"
    assert product.stock == 0
    assert product.price == Decimal("10.00")


def test_update_status_rejects_unknown():
    order = Order(customer_id="c-1", customer_name="Alice")
    with pytest.raises(InvalidArgumentError):
        order.update_status("SHIPPED")
    assert order.status == OrderStatus.PENDING


@pytest.mark.parametrize("status, allowed", [
    (OrderStatus.PENDING, True),
    (OrderStatus.PROCESSING, True),
    (OrderStatus.COMPLETED, False),
    (OrderStatus.CANCELLED, False),
])
def test_can_be_cancelled(status, allowed):
    order = Order(customer_id="c-1", customer_name="Alice", status=status)
    assert order.can_be_cancelled() is allowed


def test_cancel_completed_order_fails():
    order = Order(customer_id="c-1", customer_name="Alice", status=OrderStatus.COMPLETED)
    with pytest.raises(InvalidStateError):
        order.cancel()


def test_computed_totals_are_serialized():
    order = Order(customer_id="c-1", customer_name="Alice")
    order.add_item(make_product("4.00"), 2)
    data = order.model_dump()
    assert data["subtotal"] == Decimal("8.00")
    assert data["total"] == Decimal("8.00")
    assert data["items"][0]["subtotal"] == Decimal("8.00")
