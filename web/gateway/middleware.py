"""Middleware that tags every request with an identifier and logs it.

``RequestIdMiddleware`` reuses the client's ``X-Request-Id`` header or
generates a UUID4, stores it on the request and in a ContextVar so log
records emitted anywhere downstream carry it, echoes it back in the
``X-Request-ID`` response header, and writes one "request handled" log line
per request.

``FormSizeLimitMiddleware`` refuses POST bodies larger than
``settings.MAX_FORM_BYTES`` with a 413 before any view runs.
"""

import logging
import uuid
import contextvars

from django.conf import settings
from django.http import HttpResponse
from django.utils.deprecation import MiddlewareMixin

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")

logger = logging.getLogger("gateway")


class RequestIdMiddleware(MiddlewareMixin):
    """Django middleware that sets and returns a per-request identifier.

    Attributes:
        HEADER (str): Incoming header as found in ``request.META``.
        RESPONSE_HEADER (str): Header added to outgoing responses.
    """

    HEADER = "HTTP_X_REQUEST_ID"
    RESPONSE_HEADER = "X-Request-ID"

    def process_request(self, request):
        rid = request.META.get(self.HEADER) or str(uuid.uuid4())
        request.request_id = rid
        request._request_id_token = REQUEST_ID_CTX.set(rid)

    def process_response(self, request, response):
        rid = getattr(request, "request_id", REQUEST_ID_CTX.get())
        response[self.RESPONSE_HEADER] = rid
        logger.info(
            "request handled",
            extra={"path": request.path, "method": request.method, "status": response.status_code},
        )
        token = getattr(request, "_request_id_token", None)
        if token is not None:
            REQUEST_ID_CTX.reset(token)
        return response


class FormSizeLimitMiddleware(MiddlewareMixin):
    def process_request(self, request):
        if request.method != "POST":
            return None
        clen = request.META.get("CONTENT_LENGTH")
        limit = getattr(settings, "MAX_FORM_BYTES", 64 * 1024)
        if clen and clen.isdigit() and int(clen) > limit:
            return HttpResponse("Request body too large", status=413, content_type="text/plain")
        return None
