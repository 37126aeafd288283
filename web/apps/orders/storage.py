"""Storage adapter for the orders table.

The adapter owns the database alias used by the orders app and is the only
place that knows about Django's connection handling. It exposes:

- ``session()``: scope for single statements; driver errors surface as
  ``StorageUnavailable``.
- ``unit_of_work()``: all-or-nothing transaction. A failing statement rolls
  everything back and surfaces as ``StorageUnavailable``; a failing commit
  surfaces as ``CommitFailed``.
- ``ping()`` and ``close()`` for health checks and process shutdown.

One instance is built per process (see ``providers.get_storage``) and
injected into the repository.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError, connections, transaction

from .domain import CommitFailed, StorageUnavailable
from .models import OrderModel

logger = logging.getLogger("orders")


class Storage:
    """Scoped access to the relational store behind a Django DB alias."""

    def __init__(self, alias: str = "default"):
        self.alias = alias

    @property
    def connection(self):
        return connections[self.alias]

    def orders(self):
        """Queryset over the ``orders`` table bound to this alias."""
        return OrderModel.objects.using(self.alias)

    @contextmanager
    def session(self):
        try:
            yield self
        except DatabaseError as exc:
            raise StorageUnavailable("Store statement failed") from exc

    @contextmanager
    def unit_of_work(self):
        """Run the enclosed statements as one atomic transaction.

        Errors that are not driver errors (for example domain errors raised
        by the caller) roll the transaction back and propagate unchanged.

        Raises:
            StorageUnavailable: If a statement fails or the store cannot be
                reached.
            CommitFailed: If the final commit fails.
        """
        committing = False
        try:
            with transaction.atomic(using=self.alias):
                yield self
                committing = True
        except DatabaseError as exc:
            if committing:
                raise CommitFailed("Store commit failed") from exc
            raise StorageUnavailable("Store statement failed") from exc

    def ping(self) -> None:
        """Run a trivial statement, raising StorageUnavailable on failure."""
        with self.session():
            with self.connection.cursor() as cur:
                cur.execute("SELECT 1")

    def close(self) -> None:
        logger.info("closing store connection", extra={"alias": self.alias})
        self.connection.close()
