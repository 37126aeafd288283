import pytest

from apps.orders import providers
from apps.orders.domain import OrderService
from apps.orders.repository import OrderRepository
from apps.orders.storage import Storage

_get_storage = providers.get_storage


@pytest.fixture(autouse=True)
def fresh_storage_provider():
    # each test gets its own Storage built from the current settings
    _get_storage.cache_clear()
    yield
    _get_storage.cache_clear()


@pytest.fixture
def storage():
    return Storage(alias="default")


@pytest.fixture
def repository(storage):
    return OrderRepository(storage)


@pytest.fixture
def service(repository):
    return OrderService(repository)
