"""Service provider helpers for wiring OrderService with its storage.

``get_storage`` builds the process-wide ``Storage`` adapter once, from
``settings.ORDERS_DB_ALIAS``. ``get_order_service`` injects it into a
repository and returns a ready ``OrderService``. Views call these through
the module so tests can monkeypatch either one.
"""

from functools import lru_cache

from django.conf import settings

from .domain import OrderService
from .repository import OrderRepository
from .storage import Storage


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    return Storage(alias=getattr(settings, "ORDERS_DB_ALIAS", "default"))


def get_order_service() -> OrderService:
    """Return an OrderService backed by the process storage adapter."""
    return OrderService(OrderRepository(get_storage()))
