from django.db import models
from django.db.models import Q

from .domain import INITIAL_STATUS, OrderStatus, Size


class OrderModel(models.Model):
    # Surrogate key, seed of the public order code
    id = models.BigAutoField(primary_key=True)

    # Empty until the second write of the creation unit of work
    order_code = models.CharField(max_length=16, blank=True, default="")

    customer_id = models.CharField(max_length=255, db_index=True)
    size = models.CharField(max_length=3, choices=[(s.value, s.value) for s in Size])
    quantity = models.PositiveIntegerField()
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(
        max_length=16,
        choices=[(s.value, s.value) for s in OrderStatus],
        default=INITIAL_STATUS.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["order_code"],
                condition=~Q(order_code=""),
                name="ux_orders_order_code",
            ),
        ]

    def __str__(self):
        return self.order_code or f"<unallocated #{self.pk}>"
