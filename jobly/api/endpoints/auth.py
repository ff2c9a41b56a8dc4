"""
Authentication endpoints.

- POST /token: Exchange username/password for a JWT access token
- POST /register: Create a (non-admin) account and receive a token
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.user import UserLoginRequest, UserRegisterRequest, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and return a JWT access token.

    Responds 401 on an unknown username or wrong password.
    """
    user = user_crud.authenticate(db, request.username, request.password)
    logger.info(f"User logged in: {user.username}")

    return TokenResponse(access_token=create_access_token(user.username, user.is_admin))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user account.

    Self-registered users are never admins. Returns a token for immediate use.
    """
    new_user = user_crud.register(db, request)

    return TokenResponse(access_token=create_access_token(new_user.username, new_user.is_admin))
