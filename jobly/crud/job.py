"""
CRUD operations for Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, EmptyResultError, NotFoundError
from jobly.core.sql import FilterBuilder, GeneratedClause, check_range, named_placeholder, sql_for_partial_update
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.schemas.job import JobCreateRequest, JobFilter

logger = logging.getLogger(__name__)

FIELD_TO_COLUMN = {
    "companyHandle": "company_handle",
}

JOB_COLUMNS = "id, title, salary, equity, company_handle"


def _ensure_company(db: Session, handle: str) -> None:
    if db.get(Company, handle) is None:
        raise BadRequestError(f"Company does not exist: {handle}")


def create(db: Session, job_data: JobCreateRequest) -> Job:
    """
    Create a new job.

    Raises:
        BadRequestError: If the company does not exist, or it already has a
            job with this title
    """
    _ensure_company(db, job_data.company_handle)

    duplicate = db.query(Job).filter(
        Job.company_handle == job_data.company_handle,
        Job.title == job_data.title,
    ).first()
    if duplicate:
        raise BadRequestError(f"Duplicate job: {job_data.title}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )
    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    logger.info(f"Created job {db_job.id}: {db_job.title} at {db_job.company_handle}")
    return db_job


def find_all(db: Session) -> List[Job]:
    """All jobs ordered by title."""
    return db.query(Job).order_by(Job.title, Job.id).all()


def build_filter(criteria: JobFilter) -> GeneratedClause:
    """
    WHERE conditions for the given criteria.

    Raises:
        InvalidRangeError: If min_salary > max_salary
    """
    check_range(
        criteria.min_salary,
        criteria.max_salary,
        "Min salary cannot be greater than max salary",
    )
    return (
        FilterBuilder()
        .contains("title", criteria.title)
        .at_least("salary", criteria.min_salary)
        .at_most("salary", criteria.max_salary)
        .positive_if("equity", criteria.has_equity)
        .build()
    )


def _empty_result_message(criteria: JobFilter) -> str:
    if criteria.min_salary is not None:
        return f"No jobs found with a salary of at least {criteria.min_salary}"
    if criteria.title is not None:
        return f"No jobs found with title: {criteria.title}"
    return "No jobs found"


def find_matching(db: Session, criteria: JobFilter) -> List[Dict[str, Any]]:
    """
    Jobs matching every given criterion, ordered by title.

    Raises:
        InvalidRangeError: If the salary bounds are contradictory (before querying)
        EmptyResultError: If nothing matched
    """
    clause = build_filter(criteria)
    dialect = db.get_bind().dialect.name
    query = text(
        f"SELECT {JOB_COLUMNS} "
        f"FROM jobs "
        f"WHERE 1=1{clause.render(named_placeholder, dialect)} "
        f"ORDER BY title, id"
    )
    rows = [dict(row) for row in db.execute(query, clause.bind_params()).mappings()]

    if not rows:
        raise EmptyResultError(_empty_result_message(criteria))
    return rows


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job (with its company) by ID.

    Raises:
        NotFoundError: If no such job
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields in ``data`` change.

    Args:
        data: API field name -> new value, e.g. {"salary": 120000}

    Raises:
        InvalidInputError: If data is empty
        BadRequestError: If moved to a company that does not exist
        NotFoundError: If no such job
    """
    set_clause = sql_for_partial_update(data, FIELD_TO_COLUMN)
    if data.get("companyHandle") is not None:
        _ensure_company(db, data["companyHandle"])

    id_var = named_placeholder(set_clause.next_position)
    query = text(
        f"UPDATE jobs "
        f"SET {set_clause.render(named_placeholder)} "
        f"WHERE id = {id_var} "
        f"RETURNING {JOB_COLUMNS}"
    )
    try:
        row = db.execute(query, set_clause.bind_params(job_id)).mappings().first()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Rejected update of job {job_id}: {exc.orig}")
        raise BadRequestError(f"Invalid update for job {job_id}: required field cleared")

    if row is None:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = dict(row)
    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no such job
    """
    job = get(db, job_id)
    db.delete(job)
    db.commit()
    logger.info(f"Deleted job {job_id}")
