"""
Data models for companies and jobs
Using Pydantic for validation and serialization

Field aliases are the external (camelCase) names callers use. Payloads are
dumped with by_alias=True so the query layer's FieldMaps translate them to
column names.
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Base configurations
# ============================================================================

class PayloadModel(BaseModel):
    """Create/update payloads: unknown fields are rejected"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class SearchModel(BaseModel):
    """Search filters: unknown fields are dropped"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class RecordModel(BaseModel):
    """Rows returned from the database"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# ============================================================================
# Company Models
# ============================================================================

class CompanyNew(PayloadModel):
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdate(PayloadModel):
    """Partial update; the handle cannot be changed"""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanySearch(SearchModel):
    min_employees: Optional[int] = Field(None, ge=0, alias="minEmployees")
    max_employees: Optional[int] = Field(None, ge=0, alias="maxEmployees")
    name: Optional[str] = None


class Company(RecordModel):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


# ============================================================================
# Job Models
# ============================================================================

class JobNew(PayloadModel):
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25, alias="companyHandle")


class JobUpdate(PayloadModel):
    """Partial update; id and company cannot be changed"""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)


class JobSearch(SearchModel):
    min_salary: Optional[int] = Field(None, ge=0, alias="minSalary")
    max_salary: Optional[int] = Field(None, ge=0, alias="maxSalary")
    has_equity: Optional[bool] = Field(None, alias="hasEquity")
    title: Optional[str] = None


class Job(RecordModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str = Field(..., alias="companyHandle")


class JobListing(Job):
    """Search result row, carrying the joined company name"""
    company_name: Optional[str] = Field(None, alias="companyName")


# ============================================================================
# Detail views
# ============================================================================

class CompanyDetail(Company):
    jobs: List[Job] = Field(default_factory=list)


class JobDetail(RecordModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company: Company
