"""Domain models, rules, ports and service for orders.

This module contains the enumerations and dataclasses used as DTOs for
orders, the pricing table and status workflow rules, the error hierarchy
raised by the order use cases, a protocol definition (port) for the
persistence layer, and the domain service that orchestrates every order
use case.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Protocol


# ---- Enums ----
class Size(str, Enum):
    """Closed set of item sizes an order can be placed for."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"

    def __str__(self) -> str:
        return self.value


class OrderStatus(str, Enum):
    """Enumeration of the possible order statuses.

    Statuses only ever move forward, in declaration order.
    """

    PROCESSING = "PROCESSING"
    DELIVERING = "DELIVERING"
    DELIVERED = "DELIVERED"

    def __str__(self) -> str:
        return self.value


INITIAL_STATUS = OrderStatus.PROCESSING

TRANSITIONS = {
    OrderStatus.PROCESSING: OrderStatus.DELIVERING,
    OrderStatus.DELIVERING: OrderStatus.DELIVERED,
}

PRICES = {
    Size.XS: Decimal("600"),
    Size.S: Decimal("800"),
    Size.M: Decimal("900"),
    Size.L: Decimal("1000"),
    Size.XL: Decimal("1100"),
    Size.XXL: Decimal("1200"),
}

ORDER_CODE_PREFIX = "ODR#"
ORDER_CODE_WIDTH = 5


# ---- Errors ----
class OrderError(Exception):
    """Base class for every error raised by the order use cases.

    Attributes:
        code: Short machine-readable error code (e.g. 'NOT_FOUND').
    """

    code = "ORDER_ERROR"


class InvalidInput(OrderError, ValueError):
    """A required field is missing or malformed."""

    code = "INVALID_INPUT"


class InvalidSize(InvalidInput):
    code = "INVALID_SIZE"


class InvalidQuantity(InvalidInput):
    code = "INVALID_QUANTITY"


class NotFound(OrderError):
    code = "NOT_FOUND"


class NoTransitionAvailable(OrderError):
    """The order's current status has no successor.

    Attributes:
        status: The status that could not be advanced, as stored.
    """

    code = "NO_TRANSITION"

    def __init__(self, message: str = "", status=None):
        super().__init__(message)
        self.status = status


class ConcurrentModification(OrderError):
    """The order changed between reading its status and writing the next one."""

    code = "CONCURRENT_MODIFICATION"


class StorageError(OrderError):
    """Base class for store-layer failures. Never shown verbatim to users."""

    code = "STORAGE_ERROR"


class StorageUnavailable(StorageError):
    code = "STORAGE_UNAVAILABLE"


class AllocationFailed(StorageError):
    code = "ALLOCATION_FAILED"


class CommitFailed(StorageError):
    code = "COMMIT_FAILED"


# ---- Entities / DTOs ----
@dataclass
class Order:
    """Container for order data.

    Attributes:
        id: Surrogate identity assigned by the store, or None if not yet saved.
        order_code: Human-facing code (e.g. 'ODR#00042'); empty until allocated.
        customer_id: Opaque customer identifier supplied by the caller.
        size: Ordered item size.
        quantity: Number of items, always positive.
        total_amount: ``unit_price(size) * quantity`` frozen at creation.
        status: Current OrderStatus, or the raw stored value if it is not
            one of the known statuses.
        created_at: Insert timestamp assigned by the store.
    """

    id: int | None
    customer_id: str
    size: Size | str
    quantity: int
    total_amount: Decimal
    status: OrderStatus | str = INITIAL_STATUS
    order_code: str = ""
    created_at: datetime | None = None


@dataclass
class OrderReport:
    """All orders, newest first, with their count and summed amount."""

    orders: List[Order] = field(default_factory=list)
    total_orders: int = 0
    total_amount: Decimal = Decimal("0")


# ---- Rules ----
def parse_size(size) -> Size:
    """Return the Size for a label, raising InvalidSize if unknown."""
    try:
        return Size(size)
    except ValueError:
        raise InvalidSize(f"Invalid size: {size!r}") from None


def unit_price(size) -> Decimal:
    """Return the unit price for ``size``.

    Raises:
        InvalidSize: If the label is not one of XS, S, M, L, XL, XXL.
    """
    return PRICES[parse_size(size)]


def compute_total(size, quantity) -> Decimal:
    """Compute the total amount for ``quantity`` items of ``size``.

    The size is checked first, so an unknown size fails with InvalidSize
    whatever the quantity.

    Raises:
        InvalidSize: If the size label is not recognized.
        InvalidQuantity: If quantity is not a positive integer.
    """
    price = unit_price(size)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantity("Quantity must be a positive integer")
    return price * quantity


def next_status(current) -> OrderStatus:
    """Return the status that follows ``current`` in the workflow.

    Raises:
        NoTransitionAvailable: If ``current`` is terminal or unrecognized.
    """
    try:
        return TRANSITIONS[OrderStatus(current)]
    except (KeyError, ValueError):
        raise NoTransitionAvailable(f"No transition from status {current!r}", status=current) from None


def order_code_for(identity: int) -> str:
    """Derive the human-facing order code from a surrogate identity."""
    return f"{ORDER_CODE_PREFIX}{identity:0{ORDER_CODE_WIDTH}d}"


# ---- Ports (DIP) ----
class OrderRepositoryPort(Protocol):
    """Port describing the persistence operations used by the domain."""

    def create(self, order: Order) -> Order:
        """Persist a new order and allocate its order code atomically."""
        raise NotImplementedError()

    def find_by_customer(self, customer_id: str) -> List[Order]:
        raise NotImplementedError()

    def find_by_code(self, order_code: str) -> Order:
        raise NotImplementedError()

    def list_all(self) -> List[Order]:
        raise NotImplementedError()

    def transition_status(self, order_code: str, current: OrderStatus, new: OrderStatus) -> bool:
        """Set ``new`` only if the stored status still equals ``current``."""
        raise NotImplementedError()

    def delete_by_code(self, order_code: str) -> int:
        raise NotImplementedError()


# ---- Domain service ----
class OrderService:
    """Domain service implementing the order use cases.

    The service applies pricing and workflow rules and delegates every
    read and write to the injected repository. It does not handle HTTP or
    rendering.
    """

    def __init__(self, repository: OrderRepositoryPort):
        """Initialize the service with its persistence port.

        Args:
            repository: OrderRepositoryPort used to read and write orders.
        """
        self.repository = repository

    def place_order(self, customer_id: str, size, quantity) -> Order:
        """Price and persist a new order.

        Args:
            customer_id: Opaque customer identifier.
            size: Size label or Size member.
            quantity: Positive number of items.

        Returns:
            The persisted Order with its identity and order code set.

        Raises:
            InvalidSize: If the size is not recognized. Nothing is stored.
            InvalidQuantity: If quantity is not a positive integer.
            StorageError: If the store could not complete the unit of work.
        """
        total = compute_total(size, quantity)
        order = Order(
            id=None,
            customer_id=customer_id,
            size=parse_size(size),
            quantity=quantity,
            total_amount=total,
        )
        return self.repository.create(order)

    def orders_for_customer(self, customer_id: str) -> List[Order]:
        return self.repository.find_by_customer(customer_id)

    def get_order(self, order_code: str) -> Order:
        return self.repository.find_by_code(order_code)

    def list_orders(self) -> List[Order]:
        return self.repository.list_all()

    def report(self) -> OrderReport:
        """List all orders with their count and summed amount.

        Count and sum are taken from the listed rows so the totals always
        agree with the orders shown alongside them.
        """
        orders = self.repository.list_all()
        return OrderReport(
            orders=orders,
            total_orders=len(orders),
            total_amount=sum((o.total_amount for o in orders), Decimal("0")),
        )

    def advance_status(self, order_code: str) -> Order:
        """Move an order one step forward in the status workflow.

        The new status is written with a conditional update so that a
        concurrent advance or delete between the read and the write is
        detected instead of silently overwritten.

        Returns:
            The refreshed Order.

        Raises:
            NotFound: If no order has this code.
            NoTransitionAvailable: If the order is already DELIVERED.
            ConcurrentModification: If the status changed or the order was
                deleted after it was read.
        """
        order = self.repository.find_by_code(order_code)
        new = next_status(order.status)
        if not self.repository.transition_status(order.order_code, order.status, new):
            raise ConcurrentModification(f"Order {order.order_code} changed while advancing")
        return self.repository.find_by_code(order.order_code)

    def delete_order(self, order_code: str) -> int:
        return self.repository.delete_by_code(order_code)
