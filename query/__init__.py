"""
Query construction for the Jobly data layer

Turns sparse update payloads and optional search filters into SQL text plus
an ordered parameter list. All values are passed as asyncpg positional
parameters ($1, $2, ...), never interpolated.
"""

from .fields import FieldMap, translate
from .sql import UpdateClause, build_update, validate_identifier
from .filters import FilterClause, FilterQueryBuilder, FilterSchema, build_filter
from .entities import (
    COMPANY_FIELDS,
    JOB_FIELDS,
    COMPANY_SEARCH,
    JOB_SEARCH,
    COMPANY_SEARCH_SCHEMA,
    JOB_SEARCH_SCHEMA,
)

__all__ = [
    'FieldMap',
    'translate',
    'UpdateClause',
    'build_update',
    'validate_identifier',
    'FilterClause',
    'FilterQueryBuilder',
    'FilterSchema',
    'build_filter',
    'COMPANY_FIELDS',
    'JOB_FIELDS',
    'COMPANY_SEARCH',
    'JOB_SEARCH',
    'COMPANY_SEARCH_SCHEMA',
    'JOB_SEARCH_SCHEMA',
]
