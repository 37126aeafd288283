"""Repository layer for persisting orders.

This module contains the repository used by the order service to read and
write the ``orders`` table. It keeps a thin interface that speaks domain
``Order`` objects so the domain layer is not coupled to Django ORM details.
All store access goes through the injected ``Storage`` adapter.
"""

from decimal import Decimal
from typing import List

from .domain import (
    AllocationFailed,
    InvalidInput,
    NotFound,
    Order,
    OrderStatus,
    Size,
    order_code_for,
)
from .models import OrderModel
from .storage import Storage


def _known(enum_cls, value):
    # rows written outside the app may hold values the enum does not know
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _to_domain(obj: OrderModel) -> Order:
    return Order(
        id=obj.id,
        order_code=obj.order_code,
        customer_id=obj.customer_id,
        size=_known(Size, obj.size),
        quantity=obj.quantity,
        total_amount=Decimal(obj.total_amount),
        status=_known(OrderStatus, obj.status),
        created_at=obj.created_at,
    )


def _require_code(order_code: str) -> str:
    if not order_code or not order_code.strip():
        raise InvalidInput("Order ID required")
    return order_code


class OrderRepository:
    """Repository that persists Order domain objects using Django ORM.

    Args:
        storage: Storage adapter owning the connection alias and the
            transactional unit of work.
    """

    def __init__(self, storage: Storage):
        self.storage = storage

    def create(self, order: Order) -> Order:
        """Persist a new order and allocate its order code.

        Both writes run in one unit of work: the row is inserted with an
        empty placeholder code, the store-assigned identity is read back,
        the code is derived from it and written to the same row. Readers
        never observe the placeholder.

        Args:
            order: Domain ``Order`` to persist. Its ``id`` and
                ``order_code`` are ignored.

        Returns:
            A new ``Order`` carrying the identity, code and creation time.

        Raises:
            AllocationFailed: If the store did not return an identity.
            StorageUnavailable: If any statement fails (nothing is kept).
            CommitFailed: If the commit fails (nothing is kept).
        """
        with self.storage.unit_of_work() as storage:
            obj = storage.orders().create(
                order_code="",
                customer_id=order.customer_id,
                size=Size(order.size).value,
                quantity=order.quantity,
                total_amount=order.total_amount,
                status=OrderStatus(order.status).value,
            )
            if obj.pk is None:
                raise AllocationFailed("Store returned no identity for the new order")
            obj.order_code = order_code_for(obj.pk)
            obj.save(using=storage.alias, update_fields=["order_code"])
        return _to_domain(obj)

    def find_by_customer(self, customer_id: str) -> List[Order]:
        """Return every order placed by ``customer_id``, oldest first."""
        with self.storage.session() as storage:
            qs = storage.orders().filter(customer_id=customer_id).order_by("id")
            return [_to_domain(o) for o in qs]

    def find_by_code(self, order_code: str) -> Order:
        """Return the order with exactly this code.

        Raises:
            InvalidInput: If the code is blank; the store is not queried.
            NotFound: If no order has this code.
        """
        _require_code(order_code)
        with self.storage.session() as storage:
            try:
                obj = storage.orders().get(order_code=order_code)
            except OrderModel.DoesNotExist:
                raise NotFound(f"Order {order_code} not found") from None
        return _to_domain(obj)

    def list_all(self) -> List[Order]:
        """Return all orders, newest first."""
        with self.storage.session() as storage:
            return [_to_domain(o) for o in storage.orders().order_by("-created_at", "-id")]

    def transition_status(self, order_code: str, current: OrderStatus, new: OrderStatus) -> bool:
        """Conditionally move an order from ``current`` to ``new``.

        Returns:
            True if the row was updated, False if its status was no longer
            ``current`` (or the row is gone).
        """
        _require_code(order_code)
        with self.storage.session() as storage:
            updated = (
                storage.orders()
                .filter(order_code=order_code, status=OrderStatus(current).value)
                .update(status=OrderStatus(new).value)
            )
        return updated > 0

    def delete_by_code(self, order_code: str) -> int:
        """Delete the order with this code.

        Returns:
            Number of rows removed (always 1 on success).

        Raises:
            InvalidInput: If the code is blank.
            NotFound: If no row matched.
        """
        _require_code(order_code)
        with self.storage.session() as storage:
            deleted, _ = storage.orders().filter(order_code=order_code).delete()
        if deleted == 0:
            raise NotFound(f"Order {order_code} not found")
        return deleted
