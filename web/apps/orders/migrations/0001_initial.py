from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="OrderModel",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                ("order_code", models.CharField(blank=True, default="", max_length=16)),
                ("customer_id", models.CharField(db_index=True, max_length=255)),
                (
                    "size",
                    models.CharField(
                        choices=[
                            ("XS", "XS"),
                            ("S", "S"),
                            ("M", "M"),
                            ("L", "L"),
                            ("XL", "XL"),
                            ("XXL", "XXL"),
                        ],
                        max_length=3,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PROCESSING", "PROCESSING"),
                            ("DELIVERING", "DELIVERING"),
                            ("DELIVERED", "DELIVERED"),
                        ],
                        default="PROCESSING",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "orders",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.AddConstraint(
            model_name="ordermodel",
            constraint=models.UniqueConstraint(
                condition=models.Q(("order_code", ""), _negated=True),
                fields=("order_code",),
                name="ux_orders_order_code",
            ),
        ),
    ]
