from django.urls import path
from .api import health_view

app_name = "monitoring"

urlpatterns = [
    path("health/", health_view, name="health"),  # store reachability probe
]
