from decimal import Decimal

import pytest
from sqlalchemy import event, func, select

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.schemas import CartItemIn, OrderCreate
from storefront.services.cart_service import CartService
from storefront.services.order_service import OrderService
from tests.conftest import make_product

ADDRESS = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "street": "12 Analytical Row",
    "city": "London",
    "postal_code": "N1 9GU",
}


class RecordingNotifications:
    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    def send_order_placed(self, user_id, order_id, total):
        if self.fail:
            raise ConnectionError("broker down")
        self.sent.append((user_id, order_id, total))


def count(db, model):
    return db.scalar(select(func.count()).select_from(model))


def order_payload(*lines):
    return OrderCreate(
        address=ADDRESS,
        items=[
            {"product_id": p.id, "quantity": qty, "price": str(price)}
            for p, qty, price in lines
        ],
    )


@pytest.fixture
def notifications():
    return RecordingNotifications()


@pytest.fixture
def svc(db, notifications):
    return OrderService(db, notification_service=notifications)


@pytest.fixture
def filled_cart(db, lock_service, user, catalog):
    carts = CartService(db, lock_service)
    carts.add_item(user.id, CartItemIn(product_id=catalog["tee"].id, quantity=2))
    carts.add_item(user.id, CartItemIn(product_id=catalog["hoodie"].id, quantity=1))
    return carts


def test_place_order_persists_order_and_items(db, svc, user, catalog, filled_cart):
    tee, hoodie = catalog["tee"], catalog["hoodie"]

    order, created = svc.place_order(user.id, order_payload((tee, 2, "35.00"), (hoodie, 1, "55.00")))

    assert created is True
    assert order.status == "pending"
    assert order.total == Decimal("125.00")
    assert order.address["city"] == "London"
    assert [(i.product_id, i.quantity, i.price) for i in order.items] == [
        (tee.id, 2, Decimal("35.00")),
        (hoodie.id, 1, Decimal("55.00")),
    ]
    assert sum(i.price * i.quantity for i in order.items) == order.total


def test_place_order_clears_cart(db, svc, user, catalog, filled_cart):
    svc.place_order(user.id, order_payload((catalog["tee"], 2, "35.00")))

    assert filled_cart.list_cart(user.id) == []


def test_place_order_leaves_other_carts_alone(db, svc, user, other_user, catalog, filled_cart):
    filled_cart.add_item(other_user.id, CartItemIn(product_id=catalog["tee"].id, quantity=1))

    svc.place_order(user.id, order_payload((catalog["tee"], 2, "35.00")))

    assert len(filled_cart.list_cart(other_user.id)) == 1


def test_rollback_when_last_line_item_fails(db, svc, user, catalog, filled_cart, notifications):
    tee, hoodie = catalog["tee"], catalog["hoodie"]

    def fail_on_hoodie(mapper, connection, target):
        if target.product_id == hoodie.id:
            raise RuntimeError("insert failed")

    event.listen(OrderItemModel, "before_insert", fail_on_hoodie)
    try:
        with pytest.raises(RuntimeError):
            svc.place_order(user.id, order_payload((tee, 2, "35.00"), (hoodie, 1, "55.00")))
    finally:
        event.remove(OrderItemModel, "before_insert", fail_on_hoodie)

    assert count(db, OrderModel) == 0
    assert count(db, OrderItemModel) == 0
    # koszyk czyszczony w tej samej transakcji, wiec tez zostaje
    assert count(db, CartItemModel) == 2
    assert notifications.sent == []


def test_server_price_is_captured_not_client_price(db, svc, user, catalog):
    tee = catalog["tee"]

    order, _ = svc.place_order(user.id, order_payload((tee, 3, "34.995")))

    assert order.items[0].price == Decimal("35.00")
    assert order.total == Decimal("105.00")


def test_tampered_price_is_rejected(db, svc, user, catalog, filled_cart):
    with pytest.raises(ValueError):
        svc.place_order(user.id, order_payload((catalog["tee"], 2, "0.01")))

    assert count(db, OrderModel) == 0
    assert len(filled_cart.list_cart(user.id)) == 2


def test_missing_product_is_rejected(db, svc, user, catalog):
    db.delete(catalog["zip"])
    db.commit()

    with pytest.raises(ValueError):
        svc.place_order(user.id, order_payload((catalog["zip"], 1, "45.00")))

    assert count(db, OrderModel) == 0


def test_total_above_numeric_range_is_rejected(db, svc, user):
    pricey = make_product(db, "Gold Jacket", "99999999.00", "Jackets")

    with pytest.raises(ValueError):
        svc.place_order(user.id, order_payload((pricey, 2, "99999999.00")))

    assert count(db, OrderModel) == 0


def test_idempotency_key_replays_existing_order(db, svc, user, catalog, notifications):
    payload = order_payload((catalog["tee"], 1, "35.00"))

    first, created_first = svc.place_order(user.id, payload, idempotency_key="checkout-1")
    again, created_again = svc.place_order(user.id, payload, idempotency_key="checkout-1")

    assert created_first is True
    assert created_again is False
    assert again.id == first.id
    assert count(db, OrderModel) == 1
    assert len(notifications.sent) == 1


def test_idempotency_key_is_scoped_to_user(db, svc, user, other_user, catalog):
    payload = order_payload((catalog["tee"], 1, "35.00"))

    first, _ = svc.place_order(user.id, payload, idempotency_key="same")
    second, created = svc.place_order(other_user.id, payload, idempotency_key="same")

    assert created is True
    assert second.id != first.id


def test_notification_sent_after_commit(svc, user, catalog, notifications):
    order, _ = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))

    assert notifications.sent == [(user.id, order.id, Decimal("35.00"))]


def test_notification_failure_does_not_fail_order(db, user, catalog):
    svc = OrderService(db, notification_service=RecordingNotifications(fail=True))

    order, created = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))

    assert created is True
    assert count(db, OrderModel) == 1


def test_list_orders_newest_first(svc, user, catalog):
    first, _ = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))
    second, _ = svc.place_order(user.id, order_payload((catalog["hoodie"], 1, "55.00")))

    assert [o.id for o in svc.list_orders(user.id)] == [second.id, first.id]


def test_get_order_checks_owner(svc, user, other_user, catalog):
    order, _ = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))

    with pytest.raises(PermissionError):
        svc.get_order(order.id, other_user.id)

    assert svc.get_order(order.id, other_user.id, is_admin=True).id == order.id

    with pytest.raises(LookupError):
        svc.get_order(9999, user.id)


def test_status_lifecycle(svc, user, catalog):
    order, _ = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))

    assert svc.update_status(order.id, "shipped").status == "shipped"
    assert svc.update_status(order.id, "delivered").status == "delivered"

    with pytest.raises(ValueError):
        svc.update_status(order.id, "pending")


def test_status_cannot_skip_shipping(svc, user, catalog):
    order, _ = svc.place_order(user.id, order_payload((catalog["tee"], 1, "35.00")))

    with pytest.raises(ValueError):
        svc.update_status(order.id, "delivered")
