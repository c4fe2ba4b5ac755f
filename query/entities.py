"""
Entity Configuration Registry

Field maps and search schemas for each entity. These are the only place
SQL identifiers are declared; builders read them, never request input.
"""

from .fields import FieldMap
from .filters import FilterQueryBuilder, FilterSchema, FlagFilter, JoinDef, RangeFilter, TextFilter

# =============================================================================
# Field maps (external camelCase name → column)
# =============================================================================

COMPANY_FIELDS = FieldMap({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

JOB_FIELDS = FieldMap({
    "companyHandle": "company_handle",
})

# =============================================================================
# Select lists (column AS "externalName")
# =============================================================================

COMPANY_COLUMNS = (
    "handle",
    "name",
    "description",
    'num_employees AS "numEmployees"',
    'logo_url AS "logoUrl"',
)

JOB_COLUMNS = (
    "id",
    "title",
    "salary",
    "equity",
    'company_handle AS "companyHandle"',
)

# =============================================================================
# Search schemas
# =============================================================================

COMPANY_SEARCH_SCHEMA = FilterSchema(
    table="companies",
    columns=COMPANY_COLUMNS,
    order_by="name",
    range=RangeFilter(column="num_employees", min_key="minEmployees", max_key="maxEmployees"),
    text=TextFilter(column="name", key="name"),
)

JOB_SEARCH_SCHEMA = FilterSchema(
    table="jobs",
    table_alias="j",
    columns=(
        "j.id",
        "j.title",
        "j.salary",
        "j.equity",
        'j.company_handle AS "companyHandle"',
    ),
    order_by="j.title",
    range=RangeFilter(column="j.salary", min_key="minSalary", max_key="maxSalary"),
    flag=FlagFilter(column="j.equity", key="hasEquity"),
    text=TextFilter(column="j.title", key="title"),
    join=JoinDef(
        table="companies",
        alias="c",
        target_key="handle",
        local_column="j.company_handle",
        columns=('c.name AS "companyName"',),
    ),
)

COMPANY_SEARCH = FilterQueryBuilder(COMPANY_SEARCH_SCHEMA)
JOB_SEARCH = FilterQueryBuilder(JOB_SEARCH_SCHEMA)
