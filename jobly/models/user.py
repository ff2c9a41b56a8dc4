"""
User model for authentication and job applications.

Users are keyed by username; ``is_admin`` gates company/job management
and user administration.
"""

from sqlalchemy import Column, String, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    """Account that can log in and apply to jobs."""
    __tablename__ = "users"

    username = Column(String(25), primary_key=True, index=True)

    # Authentication credentials
    hashed_password = Column(String, nullable=False)

    # User profile
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)

    # Admin role for protected endpoints
    is_admin = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    applications = relationship("Application", back_populates="user", cascade="all, delete-orphan")

    @property
    def jobs(self):
        """Ids of the jobs this user applied to."""
        return sorted(application.job_id for application in self.applications)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
