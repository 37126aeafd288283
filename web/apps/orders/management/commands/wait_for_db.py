"""Block until the orders store accepts connections.

Run before ``migrate`` / gunicorn in container entrypoints, where the
database may still be starting up.
"""

import logging
import time

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from apps.orders import providers
from apps.orders.domain import StorageUnavailable

logger = logging.getLogger("orders")


class Command(BaseCommand):
    help = "Wait until the orders database answers a ping."

    def add_arguments(self, parser):
        parser.add_argument(
            "--timeout",
            type=float,
            default=getattr(settings, "DB_WAIT_TIMEOUT", 30),
            help="Seconds to keep trying before giving up.",
        )
        parser.add_argument("--interval", type=float, default=1.0)

    def handle(self, *args, timeout, interval, **options):
        storage = providers.get_storage()
        deadline = time.monotonic() + timeout
        attempts = 0
        while True:
            attempts += 1
            try:
                storage.ping()
                break
            except StorageUnavailable as exc:
                # drop the broken connection so the next ping reconnects
                storage.close()
                if time.monotonic() >= deadline:
                    raise CommandError(f"Database not reachable after {attempts} attempts") from exc
                time.sleep(interval)
        logger.info("database ready", extra={"attempts": attempts, "alias": storage.alias})
        self.stdout.write(self.style.SUCCESS(f"Database ready after {attempts} attempt(s)"))
