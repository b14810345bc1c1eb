"""Helpers for reading through protean querysets."""


def fetch_all(queryset):
    """Return every record matched by ``queryset``, ignoring the default page size."""
    result = queryset.all()
    if result.total > len(result.items):
        result = queryset.limit(result.total).all()
    return result.items
