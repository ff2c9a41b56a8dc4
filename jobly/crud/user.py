"""
CRUD operations for User model, plus password checks and job applications.
"""

import logging
from typing import Any, Dict, List, Mapping
from sqlalchemy import or_, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import named_placeholder, sql_for_partial_update
from jobly.models.application import Application
from jobly.models.job import Job
from jobly.models.user import User
from jobly.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

FIELD_TO_COLUMN = {
    "firstName": "first_name",
    "lastName": "last_name",
    "password": "hashed_password",
}

USER_COLUMNS = "username, first_name, last_name, email, is_admin"


def authenticate(db: Session, username: str, password: str) -> User:
    """
    Return the user if the password matches.

    Raises:
        UnauthorizedError: If the user is missing or the password is wrong
    """
    user = db.get(User, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.warning(f"Failed login for {username}")
        raise UnauthorizedError("Invalid username/password")
    return user


def register(db: Session, user_data: UserRegisterRequest, is_admin: bool = False) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username or email is already taken
    """
    duplicate = db.query(User).filter(
        or_(User.username == user_data.username, User.email == user_data.email)
    ).first()
    if duplicate:
        if duplicate.username == user_data.username:
            raise BadRequestError(f"Duplicate username: {user_data.username}")
        raise BadRequestError(f"Email already registered: {user_data.email}")

    db_user = User(
        username=user_data.username,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Rejected registration of {user_data.username}: {exc.orig}")
        raise BadRequestError(f"Username or email already taken: {user_data.username}")
    db.refresh(db_user)

    logger.info(f"Registered user {db_user.username} (admin: {db_user.is_admin})")
    return db_user


def find_all(db: Session) -> List[User]:
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Retrieve a user (with applied job ids) by username.

    Raises:
        NotFoundError: If no such user
    """
    user = db.get(User, username)
    if user is None:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update of a user's profile; a new password is hashed first.

    Raises:
        InvalidInputError: If data is empty
        NotFoundError: If no such user
        BadRequestError: If the new email belongs to someone else
    """
    data = dict(data)
    if data.get("password") is not None:
        data["password"] = get_password_hash(data["password"])

    set_clause = sql_for_partial_update(data, FIELD_TO_COLUMN)
    username_var = named_placeholder(set_clause.next_position)
    query = text(
        f"UPDATE users "
        f"SET {set_clause.render(named_placeholder)} "
        f"WHERE username = {username_var} "
        f"RETURNING {USER_COLUMNS}"
    )

    try:
        row = db.execute(query, set_clause.bind_params(username)).mappings().first()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Rejected update of user {username}: {exc.orig}")
        raise BadRequestError(f"Invalid update for user {username}: email taken or required field cleared")

    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")

    user = dict(row)
    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Delete a user and their applications.

    Raises:
        NotFoundError: If no such user
    """
    user = get(db, username)
    db.delete(user)
    db.commit()
    logger.info(f"Deleted user {username}")


def apply_to_job(db: Session, username: str, job_id: int) -> Application:
    """
    Record that a user applied to a job.

    Raises:
        NotFoundError: If the user or job does not exist
        BadRequestError: If the user already applied
    """
    get(db, username)
    if db.get(Job, job_id) is None:
        raise NotFoundError(f"No job: {job_id}")
    if db.get(Application, (username, job_id)) is not None:
        raise BadRequestError(f"{username} already applied to job {job_id}")

    application = Application(username=username, job_id=job_id)
    db.add(application)
    db.commit()

    logger.info(f"{username} applied to job {job_id}")
    return application
