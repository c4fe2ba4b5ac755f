"""
Field Name Mapping

Translates external (API-facing, camelCase) field names into internal
database column names. Each entity declares one FieldMap; names it does
not list are assumed to already be column names.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Optional, Union


class FieldMap(Mapping):
    """Read-only external name → column name table with identity fallback."""

    def __init__(self, columns: Optional[Mapping[str, str]] = None):
        self._columns = MappingProxyType(dict(columns or {}))

    def __getitem__(self, name: str) -> str:
        return self._columns[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __repr__(self) -> str:
        return f"FieldMap({dict(self._columns)!r})"

    def translate(self, name: str) -> str:
        """Return the mapped column for `name`, or `name` itself when unmapped."""
        if name in self._columns:
            return self._columns[name]
        return name


def as_field_map(field_map: Union[FieldMap, Mapping[str, str], None]) -> FieldMap:
    """Accept a FieldMap or any plain mapping and return a FieldMap."""
    if isinstance(field_map, FieldMap):
        return field_map
    return FieldMap(field_map)


def translate(name: str, field_map: Union[FieldMap, Mapping[str, str], None]) -> str:
    """Module-level shortcut for `FieldMap.translate`."""
    return as_field_map(field_map).translate(name)
