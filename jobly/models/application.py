from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class Application(Base):
    """A user's application to a job (one per user/job pair)."""
    __tablename__ = "applications"

    username = Column(String(25), ForeignKey("users.username", ondelete="CASCADE"), primary_key=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), primary_key=True)

    user = relationship("User", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    def __repr__(self):
        return f"<Application(username='{self.username}', job_id={self.job_id})>"
