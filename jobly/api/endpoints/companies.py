import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user
from jobly.crud import company as company_crud
from jobly.models.user import User
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailResponse,
    CompanyFilter,
    CompanyResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


def company_filter_params(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
) -> CompanyFilter:
    return CompanyFilter(name=name, min_employees=min_employees, max_employees=max_employees)


@router.post("/", status_code=201, response_model=CompanyResponse)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Create a company (admins only)."""
    return company_crud.create(db, request)


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    criteria: CompanyFilter = Depends(company_filter_params),
    db: Session = Depends(get_db)
):
    """
    List companies, optionally filtered.

    Filters:
        name: case-insensitive partial match
        minEmployees / maxEmployees: inclusive bounds on company size

    minEmployees > maxEmployees is a 400. A filter that matches nothing is a 404.
    """
    if not criteria.has_criteria():
        return company_crud.find_all(db)
    return company_crud.find_matching(db, criteria)


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return company_crud.get(db, handle)


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Update some of a company's fields: name, description, numEmployees, logoUrl.

    An empty body is rejected with 400.
    """
    return company_crud.update(db, handle, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{handle}", status_code=204)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Delete a company and all of its jobs."""
    company_crud.remove(db, handle)
    return None
