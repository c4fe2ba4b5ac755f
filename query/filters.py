"""
Filter Query Builder

Translates a dict of optional search filters into parameterized WHERE
predicates, and wraps them in a static SELECT for one entity.

Supported filter kinds, always evaluated in this order:
1. numeric lower bound   → col >= $N
2. numeric upper bound   → col <= $N
3. true-only flag        → col > 0   (no parameter)
4. partial text match    → col ILIKE $N  (value wrapped as %value%)

Unknown filter keys are ignored. Everything other than the WHERE body
(select list, FROM, JOIN, ORDER BY) is declared up front in a FilterSchema.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Real
from typing import Any, Mapping, Optional

from exceptions import ValidationError

from .sql import bind, join_predicates, validate_column_ref, validate_identifier


@dataclass(frozen=True)
class RangeFilter:
    """Numeric bounds on one column; either key may be omitted."""
    column: str
    min_key: Optional[str] = None
    max_key: Optional[str] = None


@dataclass(frozen=True)
class FlagFilter:
    """Boolean filter that, when True, keeps rows where column > 0."""
    column: str
    key: str


@dataclass(frozen=True)
class TextFilter:
    """Case-insensitive substring match on one column."""
    column: str
    key: str


@dataclass(frozen=True)
class JoinDef:
    """A fixed LEFT JOIN: `LEFT JOIN table AS alias ON alias.target_key = local_column`."""
    table: str
    alias: str
    target_key: str
    local_column: str
    columns: tuple[str, ...] = ()  # pre-written select expressions from the joined side

    def __post_init__(self):
        validate_identifier(self.table)
        validate_identifier(self.alias)
        validate_identifier(self.target_key)
        validate_column_ref(self.local_column)

    @property
    def clause(self) -> str:
        return (
            f"LEFT JOIN {self.table} AS {self.alias} "
            f"ON {self.alias}.{self.target_key} = {self.local_column}"
        )


@dataclass(frozen=True)
class FilterSchema:
    """Static description of one searchable entity."""
    table: str
    columns: tuple[str, ...]
    order_by: str
    table_alias: Optional[str] = None
    range: Optional[RangeFilter] = None
    flag: Optional[FlagFilter] = None
    text: Optional[TextFilter] = None
    join: Optional[JoinDef] = None

    def __post_init__(self):
        validate_identifier(self.table)
        if self.table_alias:
            validate_identifier(self.table_alias)
        validate_column_ref(self.order_by)
        for predicate in (self.range, self.flag, self.text):
            if predicate is not None:
                validate_column_ref(predicate.column)

    @property
    def from_clause(self) -> str:
        if self.table_alias:
            return f"FROM {self.table} AS {self.table_alias}"
        return f"FROM {self.table}"


@dataclass(frozen=True)
class FilterClause:
    """Output of a filter build: predicates in emission order plus their values."""
    predicates: list[str] = field(default_factory=list)
    values: list = field(default_factory=list)

    @property
    def where_clause(self) -> str:
        """'WHERE a AND b', or '' when no filter is active."""
        return join_predicates(self.predicates)


def _is_number(value: Any) -> bool:
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)


def _is_finite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def _check_bounds(raw: Mapping[str, Any], bounds: RangeFilter) -> tuple[Any, Any]:
    """Validate both bounds up front so a failure never leaves partial output."""
    lower = raw.get(bounds.min_key) if bounds.min_key else None
    upper = raw.get(bounds.max_key) if bounds.max_key else None

    for key, value in ((bounds.min_key, lower), (bounds.max_key, upper)):
        if value is not None and not _is_number(value):
            raise ValidationError(
                f"{key} must be a number, got {value!r}",
                details={"filter": key, "value": value},
            )
        if value is not None and not _is_finite(value):
            raise ValidationError(
                f"{key} must be a finite number, got {value!r}",
                details={"filter": key, "value": value},
            )

    if lower is not None and upper is not None and lower > upper:
        raise ValidationError(
            f"minimum cannot exceed maximum: {bounds.min_key} ({lower}) is greater than {bounds.max_key} ({upper})",
            details={bounds.min_key: lower, bounds.max_key: upper},
        )

    return lower, upper


class FilterQueryBuilder:
    """Builds parameterized WHERE predicates and SELECT statements for one entity."""

    def __init__(self, schema: FilterSchema):
        self.schema = schema

    def build(self, raw_filters: Optional[Mapping[str, Any]] = None) -> FilterClause:
        """
        Build predicates for the active filters.
        Raises ValidationError when the range bounds contradict each other.
        """
        raw = raw_filters or {}
        schema = self.schema

        lower = upper = None
        if schema.range is not None:
            lower, upper = _check_bounds(raw, schema.range)

        predicates: list[str] = []
        values: list = []

        if lower is not None:
            predicates.append(f"{schema.range.column} >= {bind(values, lower)}")

        if upper is not None:
            predicates.append(f"{schema.range.column} <= {bind(values, upper)}")

        if schema.flag is not None and raw.get(schema.flag.key) is True:
            predicates.append(f"{schema.flag.column} > 0")

        if schema.text is not None:
            text = raw.get(schema.text.key)
            if isinstance(text, str) and text:
                predicates.append(f"{schema.text.column} ILIKE {bind(values, f'%{text}%')}")

        return FilterClause(predicates=predicates, values=values)

    def select(self, raw_filters: Optional[Mapping[str, Any]] = None) -> tuple[str, list]:
        """
        Build the full SELECT for this entity.
        Returns (sql, params).
        """
        schema = self.schema
        clause = self.build(raw_filters)

        select_parts = list(schema.columns)
        join_clause = ""
        if schema.join is not None:
            select_parts.extend(schema.join.columns)
            join_clause = schema.join.clause

        sql = (
            f"SELECT {', '.join(select_parts)} {schema.from_clause} {join_clause} "
            f"{clause.where_clause} ORDER BY {schema.order_by} ASC"
        )

        return " ".join(sql.split()), clause.values  # Normalize whitespace


def build_filter(raw_filters: Optional[Mapping[str, Any]], schema: FilterSchema) -> FilterClause:
    """Functional form of FilterQueryBuilder(schema).build(raw_filters)."""
    return FilterQueryBuilder(schema).build(raw_filters)
