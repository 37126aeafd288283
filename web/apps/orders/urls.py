from django.urls import path
from .views import HomeView, PlaceOrderView, SearchCustomerView, SearchOrderView
from .views import ReportsView, ChangeStatusView, DeleteOrderView
app_name = "orders"

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("place-order", PlaceOrderView.as_view(), name="place-order"),  # GET form / POST create
    path("search-customer", SearchCustomerView.as_view(), name="search-customer"),
    path("search-order", SearchOrderView.as_view(), name="search-order"),
    path("reports", ReportsView.as_view(), name="reports"),
    path("change-status", ChangeStatusView.as_view(), name="change-status"),
    path("delete-order", DeleteOrderView.as_view(), name="delete-order"),
]
