"""Database access for delivery records."""

from .database import DeliveryRepository, check_connection, create_engine
from .query_builder import PredicateBuilder, build_delivery_query

__all__ = [
    "DeliveryRepository",
    "PredicateBuilder",
    "build_delivery_query",
    "check_connection",
    "create_engine",
]
