# projectflow/core/errors.py
"""Typed errors of the resource scheduling core.

Every error carries a stable ``kind`` and a machine-readable ``reason``;
``details`` holds the values that explain the decision (ids, sums, dates).
The HTTP layer maps ``kind`` to a status code, the core never renders text.
"""

from __future__ import annotations

from typing import Any, ClassVar


class ResourceError(Exception):
    kind: ClassVar[str] = "resource_error"

    def __init__(self, reason: str, **details: Any):
        super().__init__(reason)
        self.reason = reason
        self.details = details

    def as_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "reason": self.reason, **self.details}


class InvalidInput(ResourceError):
    kind = "invalid_input"


class NotFound(ResourceError):
    kind = "not_found"


class AllocationExceeded(ResourceError):
    kind = "allocation_exceeded"


class OverlappingWindow(ResourceError):
    kind = "overlapping_window"


class OverlappingRequest(ResourceError):
    kind = "overlapping_request"


class DependencyFailure(ResourceError):
    """A collaborator (directory, repository, lock) failed or timed out."""

    kind = "dependency_failure"
