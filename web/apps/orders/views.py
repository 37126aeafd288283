"""HTTP views for the orders app.

Views are kept intentionally small: they validate form payloads (via
Pydantic), delegate to the domain service, and bind the result to a
template rendered by DRF's ``TemplateHTMLRenderer``.

The views obtain a configured ``OrderService`` from
``providers.get_order_service()`` so tests can swap the storage without
changing view logic.

Error mapping (see ``OrdersPageView.handle_exception``):
- ``InvalidInput`` and subclasses: 400 with a plain message.
- ``StorageError`` and subclasses: 500 with a generic message; details only
  go to the log.
- ``NotFound`` / ``NoTransitionAvailable`` / ``ConcurrentModification``:
  expected outcomes, rendered by each view as a 200 informational page.
"""

import logging

from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.renderers import TemplateHTMLRenderer
from rest_framework.response import Response
from rest_framework.views import APIView

from . import providers
from .domain import (
    ConcurrentModification,
    InvalidInput,
    NoTransitionAvailable,
    NotFound,
    PRICES,
    StorageError,
)
from .schemas import CustomerQueryDTO, OrderCodeDTO, PlaceOrderDTO

logger = logging.getLogger("orders")


def page(template: str, data: dict | None = None, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(data or {}, status=status_code, template_name=f"orders/{template}.html")


class OrdersPageView(APIView):
    """Base view for the HTML order pages.

    Attributes:
        storage_error_message: Generic message shown when the store fails.
    """

    renderer_classes = [TemplateHTMLRenderer]
    parser_classes = [FormParser, MultiPartParser]
    storage_error_message = "DB error"

    def handle_exception(self, exc):
        if isinstance(exc, InvalidInput):
            return page("error", {"message": str(exc)}, status.HTTP_400_BAD_REQUEST)
        if isinstance(exc, StorageError):
            logger.exception(
                "store failure",
                extra={"path": self.request.path, "error_code": exc.code},
            )
            return page("error", {"message": self.storage_error_message}, status.HTTP_500_INTERNAL_SERVER_ERROR)
        return super().handle_exception(exc)


class HomeView(OrdersPageView):
    def get(self, request):
        return page("home")


class PlaceOrderView(OrdersPageView):
    """Show the order form and create orders."""

    storage_error_message = "Could not place order"

    def get(self, request):
        return page("place_order_form", {"prices": [(s.value, p) for s, p in PRICES.items()]})

    def post(self, request):
        """Create a new order.

        Returns:
            Response: 200 with the order confirmation page, 400 for an
            invalid quantity or size, 500 when the store fails.
        """
        dto = PlaceOrderDTO.from_form(request.data)
        order = providers.get_order_service().place_order(dto.contact, dto.size, dto.qty)
        logger.info(
            "order placed",
            extra={"order_code": order.order_code, "size": order.size.value, "quantity": order.quantity},
        )
        return page("order_placed", {"order": order})


class SearchCustomerView(OrdersPageView):
    def get(self, request):
        return page("search_customer_form")

    def post(self, request):
        dto = CustomerQueryDTO.from_form(request.data)
        orders = providers.get_order_service().orders_for_customer(dto.contact)
        return page("search_customer_results", {"contact": dto.contact, "orders": orders})


class SearchOrderView(OrdersPageView):
    def get(self, request):
        return page("search_order_form")

    def post(self, request):
        dto = OrderCodeDTO.from_form(request.data)
        try:
            order = providers.get_order_service().get_order(dto.orderid)
        except NotFound:
            return page("order_not_found", {"order_code": dto.orderid})
        return page("search_order_results", {"order": order})


class ReportsView(OrdersPageView):
    def get(self, request):
        report = providers.get_order_service().report()
        return page(
            "reports",
            {
                "orders": report.orders,
                "total_orders": report.total_orders,
                "total_amount": report.total_amount,
            },
        )


class ChangeStatusView(OrdersPageView):
    """List orders and advance the status of the selected one."""

    def get(self, request):
        return page("change_status_form", {"orders": providers.get_order_service().list_orders()})

    def post(self, request):
        dto = OrderCodeDTO.from_form(request.data)
        try:
            order = providers.get_order_service().advance_status(dto.orderid)
        except (NotFound, NoTransitionAvailable, ConcurrentModification) as e:
            logger.info("status not advanced", extra={"order_code": dto.orderid, "reason": e.code})
            return page(
                "status_error",
                {"order_code": dto.orderid, "reason": e.code, "current": str(getattr(e, "status", None) or "")},
            )
        logger.info("status advanced", extra={"order_code": order.order_code, "status": str(order.status)})
        return page("status_updated", {"order": order})


class DeleteOrderView(OrdersPageView):
    def get(self, request):
        return page("delete_order_form", {"orders": providers.get_order_service().list_orders()})

    def post(self, request):
        dto = OrderCodeDTO.from_form(request.data)
        try:
            providers.get_order_service().delete_order(dto.orderid)
        except NotFound:
            return page("order_not_found", {"order_code": dto.orderid})
        logger.info("order deleted", extra={"order_code": dto.orderid})
        return page("order_deleted", {"order_code": dto.orderid})
