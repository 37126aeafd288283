"""Unit tests for the OrderService use cases.

These tests drive the service through an in-memory repository stub so the
pricing and workflow rules can be checked without a database.
"""

from decimal import Decimal

import pytest

from apps.orders.domain import (
    ConcurrentModification,
    InvalidQuantity,
    InvalidSize,
    NoTransitionAvailable,
    NotFound,
    Order,
    OrderService,
    OrderStatus,
    Size,
    order_code_for,
)


class InMemoryRepository:
    """Repository stub keeping orders in a dict keyed by order code."""

    def __init__(self):
        self.rows = {}
        self.next_id = 1

    def create(self, order):
        order.id = self.next_id
        order.order_code = order_code_for(order.id)
        self.next_id += 1
        self.rows[order.order_code] = order
        return order

    def find_by_customer(self, customer_id):
        return [o for o in self.rows.values() if o.customer_id == customer_id]

    def find_by_code(self, order_code):
        try:
            return self.rows[order_code]
        except KeyError:
            raise NotFound(order_code) from None

    def list_all(self):
        return sorted(self.rows.values(), key=lambda o: o.id, reverse=True)

    def transition_status(self, order_code, current, new):
        order = self.rows.get(order_code)
        if order is None or order.status != current:
            return False
        order.status = new
        return True

    def delete_by_code(self, order_code):
        if self.rows.pop(order_code, None) is None:
            raise NotFound(order_code)
        return 1


class RacingRepository(InMemoryRepository):
    """Stub whose conditional update always loses to a concurrent writer."""

    def transition_status(self, order_code, current, new):
        return False


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def svc(repo):
    return OrderService(repo)


def test_place_order_prices_and_allocates(svc):
    """Happy path: M x 3 costs 2700, starts PROCESSING and gets a code."""
    order = svc.place_order("alice@example.com", "M", 3)
    assert order.total_amount == Decimal("2700")
    assert order.size is Size.M
    assert order.status is OrderStatus.PROCESSING
    assert order.order_code == "ODR#00001"


def test_place_order_invalid_size_stores_nothing(svc, repo):
    with pytest.raises(InvalidSize):
        svc.place_order("bob", "XXXL", 1)
    assert repo.rows == {}


def test_place_order_invalid_quantity_stores_nothing(svc, repo):
    with pytest.raises(InvalidQuantity):
        svc.place_order("bob", "S", 0)
    assert repo.rows == {}


def test_advance_twice_then_no_transition(svc):
    order = svc.place_order("carol", "L", 1)
    assert svc.advance_status(order.order_code).status is OrderStatus.DELIVERING
    assert svc.advance_status(order.order_code).status is OrderStatus.DELIVERED
    with pytest.raises(NoTransitionAvailable):
        svc.advance_status(order.order_code)
    assert svc.get_order(order.order_code).status is OrderStatus.DELIVERED


def test_advance_unknown_code(svc):
    with pytest.raises(NotFound):
        svc.advance_status("ODR#99999")


def test_advance_detects_concurrent_change():
    svc = OrderService(RacingRepository())
    order = svc.place_order("dave", "XS", 2)
    with pytest.raises(ConcurrentModification):
        svc.advance_status(order.order_code)


def test_report_counts_and_sums(svc):
    svc.place_order("erin", "XS", 1)
    svc.place_order("erin", "XXL", 2)
    report = svc.report()
    assert report.total_orders == 2
    assert report.total_amount == Decimal("3000")
    assert [o.order_code for o in report.orders] == ["ODR#00002", "ODR#00001"]


def test_delete_then_not_found(svc):
    order = svc.place_order("frank", "XL", 1)
    assert svc.delete_order(order.order_code) == 1
    with pytest.raises(NotFound):
        svc.get_order(order.order_code)
    with pytest.raises(NotFound):
        svc.delete_order(order.order_code)


class LaggingRepository(InMemoryRepository):
    """Stub where another order lands right after the listing is read."""

    def list_all(self):
        orders = super().list_all()
        self.create(Order(id=None, customer_id="late", size=Size.XL, quantity=1, total_amount=Decimal("1100")))
        return orders


def test_report_totals_match_listed_orders():
    repo = LaggingRepository()
    svc = OrderService(repo)
    svc.place_order("gina", "M", 2)

    report = svc.report()
    assert len(repo.rows) == 2
    assert [o.customer_id for o in report.orders] == ["gina"]
    assert report.total_orders == 1
    assert report.total_amount == Decimal("1800")


def test_advance_unrecognized_status(svc, repo):
    order = svc.place_order("hank", "S", 1)
    order.status = "ON_HOLD"
    with pytest.raises(NoTransitionAvailable) as exc_info:
        svc.advance_status(order.order_code)
    assert exc_info.value.status == "ON_HOLD"
    assert repo.rows[order.order_code].status == "ON_HOLD"
