"""Data models for delivery tracking."""

from .delivery import (
    DELIVERY_FILTER_RULES,
    STATUS_UPDATE_RULES,
    DeliveryFilters,
    DeliveryStatus,
    StatusUpdate,
    ValidationOutcome,
    run_rules,
)

__all__ = [
    "DELIVERY_FILTER_RULES",
    "STATUS_UPDATE_RULES",
    "DeliveryFilters",
    "DeliveryStatus",
    "StatusUpdate",
    "ValidationOutcome",
    "run_rules",
]
