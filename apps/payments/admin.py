from django.contrib import admin, messages  # type: ignore

from config.container import get_container

from .application.command_handlers import ExpirePaymentCommand
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    """Read-only view of payments.

    Status and stock only move through the payment handlers; staff can
    expire waiting payments with the action below.
    """

    list_display = ("uuid", "room", "user", "status", "total_price", "expired_at", "created_at")
    list_filter = ("status", "payment_method")
    search_fields = ("uuid", "user__email", "room__name", "room__property__title")
    readonly_fields = (
        "uuid",
        "room",
        "user",
        "status",
        "total_price",
        "duration",
        "payment_method",
        "payment_proof",
        "invoice_url",
        "expired_at",
        "reserved_units",
        "expiration_job_id",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "created_at"
    actions = ("expire_waiting_payments",)

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    @admin.action(description="Expire selected waiting payments")
    def expire_waiting_payments(self, request, queryset):
        handler = get_container().expire_payment
        expired = sum(
            handler.handle(ExpirePaymentCommand(payment_uuid=uuid))
            for uuid in queryset.values_list("uuid", flat=True)
        )
        self.message_user(request, f"{expired} payment(s) expired", messages.SUCCESS)
