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
            name="RateOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("is_deleted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("price", models.PositiveBigIntegerField(help_text="Price per night in minor currency units.")),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rate_overrides",
                        to="properties.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Peak season rate",
                "verbose_name_plural": "Peak season rates",
                "ordering": ["start_date"],
                "indexes": [
                    models.Index(
                        fields=["room", "is_deleted", "start_date", "end_date"],
                        name="rate_override_room_range_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(end_date__gte=models.F("start_date")),
                        name="rate_override_valid_date_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(price__gt=0),
                        name="rate_override_price_positive",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AvailabilityOverride",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("is_deleted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reason", models.CharField(max_length=255)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability_overrides",
                        to="properties.room",
                    ),
                ),
            ],
            options={
                "verbose_name": "Room non-availability",
                "verbose_name_plural": "Room non-availabilities",
                "ordering": ["start_date"],
                "indexes": [
                    models.Index(
                        fields=["room", "is_deleted", "start_date", "end_date"],
                        name="avail_override_room_range_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(end_date__gte=models.F("start_date")),
                        name="availability_override_valid_date_range",
                    ),
                ],
            },
        ),
    ]
