from django.http import JsonResponse

from apps.orders import providers
from apps.orders.domain import StorageUnavailable


def health_view(_request):
    try:
        providers.get_storage().ping()
        db_ok = True
    except StorageUnavailable:
        db_ok = False

    code = 200 if db_ok else 503
    return JsonResponse(
        {"ok": db_ok, "components": {"db": {"ok": db_ok}}},
        status=code,
    )
