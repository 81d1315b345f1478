"""Parameter-bound SQL predicate builder for delivery queries."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.sql.elements import TextClause

from ..models.delivery import (
    COLUMN_DELIVERED,
    COLUMN_ISSUED_AT,
    PDV_COLUMNS,
    TABLE_NAME,
    DeliveryFilters,
)


ALLOWED_OPERATORS = frozenset({"=", "<>", "<", "<=", ">", ">="})


@dataclass(frozen=True)
class Clause:
    """
    One predicate term.

    A clause with several columns matches when any of them compares true
    against the value (the columns are OR-ed together).
    """

    columns: Tuple[str, ...]
    operator: str
    value: Any

    def render(self, start: int) -> Tuple[str, Dict[str, Any]]:
        """Render SQL with named placeholders p<start>, p<start+1>, ..."""
        terms = []
        params: Dict[str, Any] = {}
        for offset, column in enumerate(self.columns):
            name = f"p{start + offset}"
            terms.append(f"{column} {self.operator} :{name}")
            params[name] = self.value

        if len(terms) == 1:
            return terms[0], params
        return "(" + " OR ".join(terms) + ")", params


class PredicateBuilder:
    """Ordered set of optional clauses combined with AND."""

    BASE_PREDICATE = "1=1"

    def __init__(self):
        self._clauses: List[Clause] = []

    def where(self, column: str, operator: str, value: Any) -> "PredicateBuilder":
        return self.where_any((column,), operator, value)

    def where_any(self, columns, operator: str, value: Any) -> "PredicateBuilder":
        """Add a clause; None values are skipped so callers can chain filters."""
        if operator not in ALLOWED_OPERATORS:
            raise ValueError(f"Unsupported operator: {operator}")
        if value is not None:
            self._clauses.append(Clause(tuple(columns), operator, value))
        return self

    @property
    def clauses(self) -> Tuple[Clause, ...]:
        return tuple(self._clauses)

    def build(self) -> Tuple[str, Dict[str, Any]]:
        """Return the WHERE predicate text and its bound parameters in order."""
        parts = [self.BASE_PREDICATE]
        params: Dict[str, Any] = {}
        for clause in self._clauses:
            sql, clause_params = clause.render(len(params))
            parts.append(sql)
            params.update(clause_params)
        return " AND ".join(parts), params


def build_delivery_query(filters: DeliveryFilters) -> Tuple[TextClause, Dict[str, Any]]:
    """SELECT statement for the delivery listing with its parameters."""
    status: Optional[str] = filters.status.value if filters.status else None

    predicate, params = (
        PredicateBuilder()
        .where(COLUMN_ISSUED_AT, ">=", filters.start_date)
        .where(COLUMN_ISSUED_AT, "<=", filters.end_date)
        .where_any(PDV_COLUMNS, "=", filters.pdv)
        .where(COLUMN_DELIVERED, "=", status)
        .build()
    )
    return text(f"SELECT * FROM {TABLE_NAME} WHERE {predicate}"), params
