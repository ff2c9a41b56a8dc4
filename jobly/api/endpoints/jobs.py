import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user
from jobly.crud import job as job_crud
from jobly.models.user import User
from jobly.schemas.job import (
    JobCreateRequest,
    JobDetailResponse,
    JobFilter,
    JobResponse,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


def job_filter_params(
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
) -> JobFilter:
    return JobFilter(title=title, min_salary=min_salary, max_salary=max_salary, has_equity=has_equity)


@router.post("/", status_code=201, response_model=JobResponse)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Create a job posting for an existing company (admins only)."""
    return job_crud.create(db, request)


@router.get("/", response_model=List[JobResponse])
def list_jobs(
    criteria: JobFilter = Depends(job_filter_params),
    db: Session = Depends(get_db)
):
    """
    List jobs, optionally filtered.

    Filters:
        title: case-insensitive partial match
        minSalary / maxSalary: inclusive salary bounds
        hasEquity: true returns only jobs with equity > 0; false is ignored
    """
    if not criteria.has_criteria():
        return job_crud.find_all(db)
    return job_crud.find_matching(db, criteria)


@router.get("/{job_id}", response_model=JobDetailResponse)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job and the company that posted it."""
    return job_crud.get(db, job_id)


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Update some of a job's fields: title, salary, equity, companyHandle.

    An empty body is rejected with 400.
    """
    return job_crud.update(db, job_id, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{job_id}", status_code=204)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """Delete a job by ID."""
    job_crud.remove(db, job_id)
    logger.info(f"Admin {admin_user.username} deleted job {job_id}")
    return None
