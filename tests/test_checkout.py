import asyncio

import pytest

from checkout import CheckoutSession, lookup_coupon, quote
from errors import AddressNotFound, EmptyCart, InsufficientFunds, InvalidCoupon, NotAuthenticated
from schemas import CartLine, Order
from state import AppState


def line(price, quantity=1, pid="p"):
    return CartLine(id=pid, product_id=pid, name=pid, price=price, quantity=quantity)


def test_save10_on_fifty_dollars():
    session = CheckoutSession()
    session.apply_coupon("SAVE10")
    q = session.quote([line(25, 2)])
    assert q.subtotal == 50
    assert q.discount == 10
    assert q.shipping == 0
    assert q.total == 40


def test_codes_are_case_insensitive():
    assert lookup_coupon("welcome20").code == "WELCOME20"
    assert lookup_coupon("First50").discount == 50


@pytest.mark.parametrize("code", [" SAVE10", "SAVE10 ", "SAVE 10"])
def test_codes_must_match_exactly(code):
    with pytest.raises(InvalidCoupon):
        lookup_coupon(code)


def test_unknown_code_leaves_state_unchanged():
    session = CheckoutSession()
    session.apply_coupon("SAVE10")
    with pytest.raises(InvalidCoupon):
        session.apply_coupon("FOO123")
    assert session.coupon.code == "SAVE10"
    q = session.quote([line(50)])
    assert (q.subtotal, q.discount, q.total) == (50, 10, 40)


def test_new_coupon_replaces_old_one():
    session = CheckoutSession()
    session.apply_coupon("SAVE10")
    session.apply_coupon("WELCOME20")
    assert session.quote([line(100)]).discount == 20


def test_remove_coupon():
    session = CheckoutSession()
    session.apply_coupon("SAVE10")
    session.remove_coupon()
    assert session.quote([line(100)]).total == 100


def test_discount_is_clamped_to_subtotal():
    q = quote([line(30)], lookup_coupon("FIRST50"))
    assert q.discount == 30
    assert q.total == 0


def test_shipping_is_added_after_clamping():
    q = quote([line(30)], lookup_coupon("FIRST50"), shipping=5)
    assert q.total == 5


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def state(state):
    state.auth.login("john@example.com", "secret")
    return state


def test_empty_cart_cannot_be_placed(state):
    with pytest.raises(EmptyCart):
        run(state.place_order())
    assert len(state.orders) == 0
    assert state.events.drain()[-1].title == "Cart is empty"


def test_wallet_needs_enough_balance(state):
    state.add_to_cart("1")
    balance = state.wallet.balance
    with pytest.raises(InsufficientFunds):
        run(state.place_order(payment_method_id="wallet"))
    assert len(state.orders) == 0
    assert state.cart.item_count == 1
    assert state.wallet.balance == balance


def test_other_methods_ignore_wallet_balance(state):
    state.add_to_cart("1")
    order = run(state.place_order(payment_method_id="card"))
    assert order.payment_method == "Credit/Debit Card"
    assert state.wallet.balance == 250


def test_successful_order_snapshots_cart_and_clears_it(state):
    state.auth.login("john@example.com", "secret")
    state.add_to_cart("3", 1, color="Black")
    state.add_to_cart("2", 2)
    before = state.cart.lines

    order = run(state.place_order(payment_method_id="jazzcash"))

    assert len(state.orders) == 1
    assert state.orders.get(order.id) == order
    assert state.cart.is_empty()
    assert order.status == "pending"
    assert order.user_id == "1"
    assert [(i.id, i.name, i.price, i.quantity, i.image) for i in order.items] == [
        (l.product_id, l.name, l.price, l.quantity, l.image) for l in before
    ]
    assert order.total == pytest.approx(449.99 + 2 * 899.99)
    assert order.shipping_address == state.addresses.default()


def test_wallet_order_debits_and_records_coupon(state):
    state.wallet.balance = 1000
    state.add_to_cart("3")
    state.apply_coupon("first50")
    order = run(state.place_order(payment_method_id="wallet"))
    assert order.coupon_code == "FIRST50"
    assert order.discount == 50
    assert order.total == pytest.approx(399.99)
    assert state.checkout.coupon is None
    assert state.wallet.balance == pytest.approx(1000 - 399.99)
    assert state.wallet.transactions[0].type == "debit"
    assert state.wallet.transactions[0].description == f"Order #{order.id}"


def test_order_snapshot_is_not_linked_to_catalog(state):
    state.add_to_cart("4")
    order = run(state.place_order(payment_method_id="card"))
    state.catalog.update(state.catalog.get("4").model_copy(update={"name": "Renamed", "price": 1}))
    assert state.orders.get(order.id).items[0].name == "Dining Table Set"
    assert state.orders.get(order.id).items[0].price == 799.99


def test_unknown_address_is_rejected(state):
    state.add_to_cart("4")
    with pytest.raises(AddressNotFound):
        run(state.place_order(address_id="missing", payment_method_id="card"))
    assert state.cart.item_count == 1


def test_signed_out_user_cannot_place(settings):
    state = AppState(settings)
    state.add_to_cart("4")
    with pytest.raises(NotAuthenticated):
        run(state.place_order(payment_method_id="card"))
    assert len(state.orders) == 0
    assert state.cart.item_count == 1
    assert state.events.drain()[-1].kind == "error"


def test_insufficient_funds_emits_error_notice(state):
    state.add_to_cart("1")
    state.events.drain()
    with pytest.raises(InsufficientFunds):
        run(state.place_order(payment_method_id="wallet"))
    notices = state.events.drain()
    assert [(n.kind, n.title) for n in notices] == [("error", "Insufficient wallet balance")]


def test_concurrent_placements_commit_once(state):
    state.settings.checkout_delay = 0.05
    state.add_to_cart("4")

    async def place_twice():
        return await asyncio.gather(
            state.place_order(payment_method_id="card"),
            state.place_order(payment_method_id="card"),
            return_exceptions=True,
        )

    first, second = run(place_twice())
    assert isinstance(first, Order)
    assert isinstance(second, EmptyCart)
    assert len(state.orders) == 1
    assert state.cart.is_empty()
