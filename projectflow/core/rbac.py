# projectflow/core/rbac.py
from __future__ import annotations

from typing import Mapping, Set


class Forbidden(Exception):
    """Raised when actor role is not allowed for an operation."""
    pass


MANAGERS: Set[str] = {"admin", "manager"}
EVERYONE: Set[str] = {"admin", "manager", "member"}

# Stringly-typed roles; the token issuer owns the role vocabulary.
ALLOW: Mapping[str, Set[str]] = {
    # ---- Allocations ----
    "allocation.read": EVERYONE,
    "allocation.write": MANAGERS,

    # ---- Availability ----
    "availability.read": EVERYONE,
    "availability.write": EVERYONE,

    # ---- Time off ----
    "timeoff.read": EVERYONE,
    "timeoff.submit": EVERYONE,
    "timeoff.decide": MANAGERS,
    "timeoff.delete": MANAGERS,

    # ---- Calendar ----
    "calendar.read": EVERYONE,
}


def ensure_allowed(permission: str, role: str) -> None:
    allowed = ALLOW.get(permission, set())
    if role not in allowed:
        raise Forbidden(f"Role '{role}' is not allowed for '{permission}'")
