"""Logging filter that stamps records with the current request id."""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Set ``record.request_id`` from the gateway ContextVar.

    Records logged outside a request (startup, management commands) get
    ``"-"`` so formatters can always reference ``%(request_id)s``. A value
    passed explicitly through ``extra`` is left alone.
    """

    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = REQUEST_ID_CTX.get()
        return True
