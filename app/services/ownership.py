"""Ownership guard: every mutation resolves to the owning board's user."""

from app.core.errors import Forbidden


def assert_ownership(resource_owner_id: str, requester_id: str) -> None:
    """
    Raise Forbidden unless the requester owns the resource.

    Identifiers are compared as opaque strings. Callers raise NotFound for a
    missing resource before calling this.
    """
    if str(resource_owner_id) != str(requester_id):
        raise Forbidden()
