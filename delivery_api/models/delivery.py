"""Data models and validation rules for delivery records."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence

from pydantic import BaseModel, Field


TABLE_NAME = "entregas"

# Column names of the externally managed `entregas` table
COLUMN_ID = "ID_ENTREGA"
COLUMN_ISSUED_AT = "EMISSAO"
COLUMN_PDV_REGISTER = "CAIXA"
COLUMN_PDV_RECEIPT = "COO"
COLUMN_DELIVERED = "ENTREGUE"
COLUMN_DELIVERER_NAME = "NOME"

PDV_COLUMNS = (COLUMN_PDV_REGISTER, COLUMN_PDV_RECEIPT)


class DeliveryStatus(str, Enum):
    """Delivered flag stored in ENTREGUE."""

    DELIVERED = "S"
    NOT_DELIVERED = "N"

    @classmethod
    def parse(cls, value: Any) -> Optional["DeliveryStatus"]:
        """Case-insensitive lookup; None when the value is not a valid flag."""
        if not isinstance(value, str):
            return None
        try:
            return cls(value.upper())
        except ValueError:
            return None


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a single validation rule."""

    passed: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(passed=True)

    @classmethod
    def fail(cls, reason: str) -> "ValidationOutcome":
        return cls(passed=False, reason=reason)


ValidationRule = Callable[[Mapping[str, Any]], ValidationOutcome]


INVALID_STATUS_FILTER = 'Invalid status. Use "S" for delivered or "N" for not delivered.'
INVALID_STATUS_UPDATE = 'Status is required and must be "S" or "N".'
MISSING_DELIVERER_NAME = "Deliverer name is required."


def status_filter_rule(params: Mapping[str, Any]) -> ValidationOutcome:
    """An optional status filter must be S or N."""
    status = params.get("status")
    if status and DeliveryStatus.parse(status) is None:
        return ValidationOutcome.fail(INVALID_STATUS_FILTER)
    return ValidationOutcome.ok()


def status_required_rule(payload: Mapping[str, Any]) -> ValidationOutcome:
    """Status is mandatory on updates and must be S or N."""
    if DeliveryStatus.parse(payload.get("status")) is None:
        return ValidationOutcome.fail(INVALID_STATUS_UPDATE)
    return ValidationOutcome.ok()


def deliverer_name_rule(payload: Mapping[str, Any]) -> ValidationOutcome:
    """Deliverer name must be text with at least one visible character."""
    name = payload.get("delivererName")
    if not isinstance(name, str) or not name.strip():
        return ValidationOutcome.fail(MISSING_DELIVERER_NAME)
    return ValidationOutcome.ok()


DELIVERY_FILTER_RULES: Sequence[ValidationRule] = (status_filter_rule,)
STATUS_UPDATE_RULES: Sequence[ValidationRule] = (
    status_required_rule,
    deliverer_name_rule,
)


def run_rules(rules: Sequence[ValidationRule], data: Mapping[str, Any]) -> ValidationOutcome:
    """Evaluate rules in order and return the first failure, if any."""
    for rule in rules:
        outcome = rule(data)
        if not outcome.passed:
            return outcome
    return ValidationOutcome.ok()


class DeliveryFilters(BaseModel):
    """Optional filters accepted by the delivery listing."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    pdv: Optional[str] = None
    status: Optional[DeliveryStatus] = None

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "DeliveryFilters":
        """
        Build filters from raw query values.

        Empty strings count as absent. Call run_rules with
        DELIVERY_FILTER_RULES first; an invalid status is dropped here.
        """
        return cls(
            start_date=params.get("startDate") or None,
            end_date=params.get("endDate") or None,
            pdv=params.get("pdv") or None,
            status=DeliveryStatus.parse(params.get("status")),
        )


class StatusUpdate(BaseModel):
    """Normalized status update: uppercased flag and trimmed name."""

    status: DeliveryStatus
    deliverer_name: str = Field(min_length=1)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StatusUpdate":
        """Normalize a payload that already passed STATUS_UPDATE_RULES."""
        return cls(
            status=DeliveryStatus.parse(payload["status"]),
            deliverer_name=payload["delivererName"].strip(),
        )

    def to_params(self, delivery_id: str) -> Dict[str, Any]:
        """Bound parameters for the UPDATE statement."""
        return {
            "status": self.status.value,
            "deliverer_name": self.deliverer_name,
            "delivery_id": delivery_id,
        }
