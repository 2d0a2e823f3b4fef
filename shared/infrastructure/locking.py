"""Row locking helpers shared by the services."""

from __future__ import annotations

from django.db import transaction  # type: ignore


def lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic().

    Only the rows of the queried model are locked, never the rows of the
    tables joined by select_related. Backends without row locks (SQLite)
    ignore the clause.
    """

    if not transaction.get_connection().in_atomic_block:
        return queryset

    return queryset.select_for_update(of=("self",))
