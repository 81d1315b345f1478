"""Exceptions rendered as JSON error responses."""

from typing import Optional


class DeliveryAPIError(Exception):
    """Base error carrying the HTTP status and client-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(DeliveryAPIError):
    """Client input rejected before reaching the database."""

    status_code = 400


class DeliveryNotFound(DeliveryAPIError):
    """Update targeted an ID that matched no row."""

    status_code = 404

    def __init__(self, delivery_id: str):
        super().__init__(f"Delivery with ID {delivery_id} not found.")
        self.delivery_id = delivery_id


class DatabaseError(DeliveryAPIError):
    """Generic server-side database failure."""

    status_code = 500
