"""
User management endpoints.

Admins can create and list users; everyone else can only see and change
their own account.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user, get_correct_user_or_admin
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.models.user import User
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreatedResponse,
    UserDetailResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/", status_code=201, response_model=UserCreatedResponse)
def create_user(
    request: UserCreateRequest,
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """
    Add a new user. Not the registration endpoint: admins only, and the new
    user may itself be an admin.

    Returns the user and a token for them.
    """
    new_user = user_crud.register(db, request, is_admin=request.is_admin)
    logger.info(f"Admin {admin_user.username} created user {new_user.username}")

    return UserCreatedResponse(
        user=UserResponse.model_validate(new_user),
        access_token=create_access_token(new_user.username, new_user.is_admin),
    )


@router.get("/", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    admin_user: User = Depends(get_admin_user)
):
    """List all users (admins only)."""
    return user_crud.find_all(db)


@router.get("/{username}", response_model=UserDetailResponse)
def get_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_correct_user_or_admin)
):
    """Get a user's profile and the ids of jobs they applied to."""
    return user_crud.get(db, username)


@router.patch("/{username}", response_model=UserResponse)
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_correct_user_or_admin)
):
    """
    Update some of a user's fields: firstName, lastName, password, email.

    An empty body is rejected with 400.
    """
    return user_crud.update(db, username, request.model_dump(exclude_unset=True, by_alias=True))


@router.delete("/{username}", status_code=204)
def delete_user(
    username: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_correct_user_or_admin)
):
    """Delete a user account."""
    user_crud.remove(db, username)
    return None


@router.post("/{username}/jobs/{job_id}", status_code=201, response_model=ApplicationResponse)
def apply_to_job(
    username: str,
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_correct_user_or_admin)
):
    """Apply to a job on behalf of the user."""
    user_crud.apply_to_job(db, username, job_id)
    return ApplicationResponse(applied=job_id)
