import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uuid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("total_price", models.PositiveBigIntegerField(help_text="Amount due in minor currency units.")),
                ("duration", models.PositiveIntegerField(help_text="Number of nights.")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("WAITING_FOR_PAYMENT", "Waiting for payment"),
                            ("WAITING_FOR_PAYMENT_CONFIRMATION", "Waiting for payment confirmation"),
                            ("PAID", "Paid"),
                            ("REJECTED", "Rejected"),
                            ("EXPIRED", "Expired"),
                        ],
                        default="WAITING_FOR_PAYMENT",
                        max_length=40,
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("MANUAL", "Manual transfer"), ("AUTOMATIC", "Payment gateway")],
                        default="MANUAL",
                        max_length=20,
                    ),
                ),
                ("payment_proof", models.CharField(blank=True, max_length=500)),
                ("invoice_url", models.URLField(blank=True, max_length=500)),
                ("expired_at", models.DateTimeField()),
                ("reserved_units", models.PositiveIntegerField(default=1)),
                ("expiration_job_id", models.CharField(blank=True, max_length=128)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="properties.room",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "expired_at"], name="payment_status_expiry_idx"),
                    models.Index(fields=["room", "status"], name="payment_room_status_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(duration__gte=1),
                        name="payment_duration_positive",
                    ),
                ],
            },
        ),
    ]
