"""
CRUD operations for Company model.

Simple lookups go through the ORM session; partial updates and filtered
listings are parameterized SQL assembled by ``jobly.core.sql``.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, EmptyResultError, NotFoundError
from jobly.core.sql import FilterBuilder, GeneratedClause, check_range, named_placeholder, sql_for_partial_update
from jobly.models.company import Company
from jobly.schemas.company import CompanyCreateRequest, CompanyFilter

logger = logging.getLogger(__name__)

# Logical (API) field name -> column, for fields whose names differ
FIELD_TO_COLUMN = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"


def create(db: Session, company_data: CompanyCreateRequest) -> Company:
    """
    Create a new company.

    Raises:
        BadRequestError: If the handle or name is already taken
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db_company = Company(
        handle=company_data.handle,
        name=company_data.name,
        description=company_data.description,
        num_employees=company_data.num_employees,
        logo_url=company_data.logo_url,
    )
    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {company_data.name}")
    db.refresh(db_company)

    logger.info(f"Created company {db_company.handle}")
    return db_company


def find_all(db: Session) -> List[Company]:
    """All companies ordered by name."""
    return db.query(Company).order_by(Company.name).all()


def build_filter(criteria: CompanyFilter) -> GeneratedClause:
    """
    WHERE conditions for the given criteria.

    Raises:
        InvalidRangeError: If min_employees > max_employees
    """
    check_range(
        criteria.min_employees,
        criteria.max_employees,
        "Min employees cannot be greater than max employees",
    )
    return (
        FilterBuilder()
        .contains("name", criteria.name)
        .at_least("num_employees", criteria.min_employees)
        .at_most("num_employees", criteria.max_employees)
        .build()
    )


def _empty_result_message(criteria: CompanyFilter) -> str:
    if criteria.min_employees is not None:
        return f"No companies found with at least {criteria.min_employees} employees"
    if criteria.name is not None:
        return f"No companies found with name: {criteria.name}"
    return "No companies found"


def find_matching(db: Session, criteria: CompanyFilter) -> List[Dict[str, Any]]:
    """
    Companies matching every given criterion, ordered by name.

    Raises:
        InvalidRangeError: If the employee bounds are contradictory (before querying)
        EmptyResultError: If nothing matched
    """
    clause = build_filter(criteria)
    dialect = db.get_bind().dialect.name
    query = text(
        f"SELECT {COMPANY_COLUMNS} "
        f"FROM companies "
        f"WHERE 1=1{clause.render(named_placeholder, dialect)} "
        f"ORDER BY name"
    )
    rows = [dict(row) for row in db.execute(query, clause.bind_params()).mappings()]

    if not rows:
        raise EmptyResultError(_empty_result_message(criteria))
    return rows


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company (with its jobs) by handle.

    Raises:
        NotFoundError: If no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields in ``data`` change.

    Args:
        data: API field name -> new value, e.g. {"numEmployees": 10}

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no such company
        BadRequestError: If the new name belongs to another company
    """
    set_clause = sql_for_partial_update(data, FIELD_TO_COLUMN)
    handle_var = named_placeholder(set_clause.next_position)
    query = text(
        f"UPDATE companies "
        f"SET {set_clause.render(named_placeholder)} "
        f"WHERE handle = {handle_var} "
        f"RETURNING {COMPANY_COLUMNS}"
    )

    try:
        row = db.execute(query, set_clause.bind_params(handle)).mappings().first()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Rejected update of company {handle}: {exc.orig}")
        raise BadRequestError(f"Invalid update for company {handle}: name taken or required field cleared")

    if row is None:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and its jobs.

    Raises:
        NotFoundError: If no such company
    """
    company = get(db, handle)
    db.delete(company)
    db.commit()
    logger.info(f"Deleted company {handle}")
