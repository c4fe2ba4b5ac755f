"""
SQL Fragment Helpers

Builds the SET list of a partial UPDATE and holds the identifier and
placeholder rules shared by every builder in this package.

Identifiers (table, alias and column names) only ever come from static
entity configuration or from a FieldMap translation, and are checked
against SAFE_IDENTIFIER before they reach SQL text. Values are never
interpolated: each one is appended to a parameter list and referenced as an
asyncpg positional parameter ($1, $2, ...).
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from exceptions import ValidationError

from .fields import FieldMap, as_field_map

SAFE_IDENTIFIER = re.compile(r"^[A-Za-z0-9_]+$")


def validate_identifier(name: str) -> str:
    """
    Check a bare identifier (no schema/alias prefix).
    Returns the name unchanged, raises ValidationError otherwise.
    """
    if not isinstance(name, str) or not SAFE_IDENTIFIER.match(name):
        raise ValidationError(
            f"Invalid identifier {name!r}: only letters, digits and underscores are allowed",
            details={"identifier": name},
        )
    return name


def validate_column_ref(ref: str) -> str:
    """Check a possibly alias-qualified column reference such as 'j.salary'."""
    if not isinstance(ref, str):
        raise ValidationError(f"Invalid column reference {ref!r}", details={"identifier": ref})
    for part in ref.split("."):
        validate_identifier(part)
    return ref


def quote_identifier(name: str) -> str:
    """Validate and double-quote a column name."""
    return f'"{validate_identifier(name)}"'


def bind(values: list, value: Any) -> str:
    """
    Append `value` to `values` and return its placeholder.

    The placeholder number is the length of `values` right after the append,
    so emitted clauses and bound values always pair up 1:1 in order.
    """
    values.append(value)
    return f"${len(values)}"


@dataclass(frozen=True)
class UpdateClause:
    """Output of build_update: ordered assignments with their bound values."""
    assignments: list[str] = field(default_factory=list)
    values: list = field(default_factory=list)

    @property
    def set_cols(self) -> str:
        """Assignments joined for use after SET."""
        return ", ".join(self.assignments)

    @property
    def next_index(self) -> int:
        """Placeholder number for the caller's trailing key predicate."""
        return len(self.values) + 1


def build_update(
    sparse_fields: Mapping[str, Any],
    field_map: Union[FieldMap, Mapping[str, str], None] = None,
) -> UpdateClause:
    """Build the SET portion of a partial UPDATE.

    Only the keys present in `sparse_fields` produce assignments; a key whose
    value is None sets the column to NULL. Output follows the mapping's key
    order.

    Args:
        sparse_fields: External field name → new value.
        field_map: External field name → column name; unmapped names are used as-is.

    Returns:
        UpdateClause with assignments like '"first_name"=$1'.

    Raises:
        ValidationError: if `sparse_fields` is empty or a resolved column name
            is not a safe identifier.

    Examples:
        >>> clause = build_update({"firstName": "Kevin", "age": 32}, {"firstName": "first_name"})
        >>> clause.assignments
        ['"first_name"=$1', '"age"=$2']
        >>> clause.values
        ['Kevin', 32]
    """
    if not sparse_fields:
        raise ValidationError("No data supplied for update")

    columns = as_field_map(field_map)
    assignments: list[str] = []
    values: list = []

    for name, value in sparse_fields.items():
        column = quote_identifier(columns.translate(name))
        assignments.append(f"{column}={bind(values, value)}")

    return UpdateClause(assignments=assignments, values=values)


def join_predicates(predicates: list[str], keyword: Optional[str] = "WHERE") -> str:
    """AND-join predicates behind `keyword`; empty input yields an empty string."""
    if not predicates:
        return ""
    body = " AND ".join(predicates)
    return f"{keyword} {body}" if keyword else body
