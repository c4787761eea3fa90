# backend/services/errors.py
from typing import Any, Dict, Optional


class MarketplaceError(Exception):
    """Base class for domain errors; main.py renders them as {"detail": ...}."""

    status_code = 400

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_body(self) -> Dict[str, Any]:
        body = {"detail": self.message}
        body.update(self.extra)
        return body


class ValidationError(MarketplaceError):
    status_code = 400


class PermissionDeniedError(MarketplaceError):
    status_code = 403


class NotFoundError(MarketplaceError):
    status_code = 404


class ConflictError(MarketplaceError):
    status_code = 409


class InvalidTransitionError(ConflictError):
    def __init__(self, current: str, requested: str, allowed):
        allowed = sorted(allowed)
        super().__init__(
            f"Cannot change status from {current} to {requested}",
            {"current": current, "requested": requested, "allowed": allowed},
        )
        self.current = current
        self.requested = requested
        self.allowed = allowed
