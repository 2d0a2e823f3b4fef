"""Permission classes shared by the tenant-facing endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsTenant(permissions.BasePermission):
    """
    Only tenants (property owners) may access.

    Ownership of the concrete room or payment is checked by the services,
    this class only filters out non-tenant roles early.
    """

    message = "Access denied. Only Tenant can do this action."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        return hasattr(user, "is_tenant") and user.is_tenant()
