"""
Repository layer for database operations
Provides CRUD and search operations for companies and jobs

Repositories assemble final statements from the query builders, run them on
the DatabaseConnection, and translate store-level failures into domain errors.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

import asyncpg
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from database import DatabaseConnection
from exceptions import DuplicateError, NotFoundError, ValidationError
from models import (
    Company, CompanyNew, CompanyUpdate, CompanySearch, CompanyDetail,
    Job, JobNew, JobUpdate, JobSearch, JobListing, JobDetail,
)
from query import build_update
from query.entities import (
    COMPANY_COLUMNS, COMPANY_FIELDS, COMPANY_SEARCH,
    JOB_COLUMNS, JOB_FIELDS, JOB_SEARCH,
)
from utils.error_messages import enhance_error_message

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

COMPANY_RETURNING = ", ".join(COMPANY_COLUMNS)
JOB_RETURNING = ", ".join(JOB_COLUMNS)


@contextmanager
def translate_store_errors(**details):
    """
    Map constraint violations raised inside the block to domain errors.
    Any other asyncpg error propagates unchanged.
    """
    try:
        yield
    except asyncpg.UniqueViolationError as e:
        raise DuplicateError(enhance_error_message(e), details=details) from e
    except asyncpg.ForeignKeyViolationError as e:
        raise NotFoundError(enhance_error_message(e), details=details) from e
    except (asyncpg.CheckViolationError, asyncpg.NotNullViolationError) as e:
        raise ValidationError(enhance_error_message(e), details=details) from e


class BaseRepository:
    """Base repository with common operations"""

    def __init__(self, db: DatabaseConnection):
        self.db = db

    @staticmethod
    def _validate(model_class: Type[ModelT], data: Union[ModelT, Mapping[str, Any], None]) -> ModelT:
        """Validate a payload, re-raising schema failures as ValidationError"""
        if isinstance(data, model_class):
            return data
        try:
            return model_class.model_validate(dict(data or {}))
        except SchemaError as e:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'payload'}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(
                f"Invalid {model_class.__name__}: {problems}",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

    @staticmethod
    def _to_model(row: Optional[Mapping[str, Any]], model_class: Type[ModelT]) -> Optional[ModelT]:
        """Convert database record to Pydantic model"""
        if row is None:
            return None
        return model_class.model_validate(dict(row))


class CompanyRepository(BaseRepository):
    """Repository for company operations"""

    async def create(self, data: Union[CompanyNew, Dict[str, Any]]) -> Company:
        """
        Create a company.

        Raises DuplicateError if the handle is already taken.
        """
        company = self._validate(CompanyNew, data)

        duplicate = await self.db.fetchrow(
            "SELECT handle FROM companies WHERE handle = $1",
            company.handle,
        )
        if duplicate:
            raise DuplicateError(f"Duplicate company: {company.handle}", details={"handle": company.handle})

        query = f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_RETURNING}
        """
        with translate_store_errors(handle=company.handle):
            row = await self.db.fetchrow(
                query,
                company.handle,
                company.name,
                company.description,
                company.num_employees,
                company.logo_url,
            )

        logger.info(f"Created company {company.handle}")
        return self._to_model(row, Company)

    async def find_all(self, filters: Optional[Dict[str, Any]] = None) -> List[Company]:
        """
        List companies ordered by name, optionally filtered by
        minEmployees, maxEmployees and name (case-insensitive, partial).
        """
        search = self._validate(CompanySearch, filters)
        sql, params = COMPANY_SEARCH.select(search.model_dump(by_alias=True, exclude_none=True))
        rows = await self.db.run(sql, params)
        return [self._to_model(row, Company) for row in rows]

    async def get(self, handle: str) -> CompanyDetail:
        """Get a company with its jobs"""
        row = await self.db.fetchrow(
            f"SELECT {COMPANY_RETURNING} FROM companies WHERE handle = $1",
            handle,
        )
        if row is None:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})

        jobs = await self.db.fetch(
            f"SELECT {JOB_RETURNING} FROM jobs WHERE company_handle = $1 ORDER BY id",
            handle,
        )
        return CompanyDetail.model_validate({**dict(row), "jobs": [dict(job) for job in jobs]})

    async def update(self, handle: str, data: Union[CompanyUpdate, Dict[str, Any]]) -> Company:
        """
        Partially update a company; only the supplied fields change.

        Data can include: name, description, numEmployees, logoUrl
        """
        changes = self._validate(CompanyUpdate, data).model_dump(by_alias=True, exclude_unset=True)
        update = build_update(changes, COMPANY_FIELDS)

        query = f"""
            UPDATE companies
            SET {update.set_cols}
            WHERE handle = ${update.next_index}
            RETURNING {COMPANY_RETURNING}
        """
        with translate_store_errors(handle=handle):
            row = await self.db.fetchrow(query, *update.values, handle)

        if row is None:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})

        logger.info(f"Updated company {handle}: {', '.join(changes)}")
        return self._to_model(row, Company)

    async def remove(self, handle: str) -> None:
        """Delete a company (its jobs cascade)"""
        row = await self.db.fetchrow(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            handle,
        )
        if row is None:
            raise NotFoundError(f"No company: {handle}", details={"handle": handle})
        logger.info(f"Deleted company {handle}")


class JobRepository(BaseRepository):
    """Repository for job operations"""

    async def create(self, data: Union[JobNew, Dict[str, Any]]) -> Job:
        """
        Create a job for an existing company.

        Raises NotFoundError if the company does not exist.
        """
        job = self._validate(JobNew, data)

        company = await self.db.fetchrow(
            "SELECT handle FROM companies WHERE handle = $1",
            job.company_handle,
        )
        if company is None:
            raise NotFoundError(f"No company: {job.company_handle}", details={"handle": job.company_handle})

        query = f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_RETURNING}
        """
        with translate_store_errors(company_handle=job.company_handle):
            row = await self.db.fetchrow(query, job.title, job.salary, job.equity, job.company_handle)

        created = self._to_model(row, Job)
        logger.info(f"Created job {created.id} for {job.company_handle}")
        return created

    async def find_all(self, filters: Optional[Dict[str, Any]] = None) -> List[JobListing]:
        """
        List jobs ordered by title, with the company name joined in.

        Filters: minSalary, maxSalary, hasEquity (only jobs with equity > 0),
        title (case-insensitive, partial).
        """
        search = self._validate(JobSearch, filters)
        sql, params = JOB_SEARCH.select(search.model_dump(by_alias=True, exclude_none=True))
        rows = await self.db.run(sql, params)
        return [self._to_model(row, JobListing) for row in rows]

    async def get(self, job_id: int) -> JobDetail:
        """Get a job with its company"""
        row = await self.db.fetchrow(
            f"SELECT {JOB_RETURNING} FROM jobs WHERE id = $1",
            job_id,
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})

        job = dict(row)
        company = await self.db.fetchrow(
            f"SELECT {COMPANY_RETURNING} FROM companies WHERE handle = $1",
            job.pop("companyHandle"),
        )
        # company deleted between the two reads; its jobs cascade with it
        if company is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})

        return JobDetail.model_validate({**job, "company": dict(company)})

    async def update(self, job_id: int, data: Union[JobUpdate, Dict[str, Any]]) -> Job:
        """
        Partially update a job; only the supplied fields change.

        Data can include: title, salary, equity
        """
        changes = self._validate(JobUpdate, data).model_dump(by_alias=True, exclude_unset=True)
        update = build_update(changes, JOB_FIELDS)

        query = f"""
            UPDATE jobs
            SET {update.set_cols}
            WHERE id = ${update.next_index}
            RETURNING {JOB_RETURNING}
        """
        with translate_store_errors(id=job_id):
            row = await self.db.fetchrow(query, *update.values, job_id)

        if row is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})

        logger.info(f"Updated job {job_id}: {', '.join(changes)}")
        return self._to_model(row, Job)

    async def remove(self, job_id: int) -> None:
        """Delete a job"""
        row = await self.db.fetchrow(
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            job_id,
        )
        if row is None:
            raise NotFoundError(f"No job: {job_id}", details={"id": job_id})
        logger.info(f"Deleted job {job_id}")
