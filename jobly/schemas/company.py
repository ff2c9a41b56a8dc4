from pydantic import Field
from typing import List, Optional

from jobly.schemas.base import CamelModel


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        extra = "forbid"


class CompanyUpdateRequest(CamelModel):
    """Partial update: only the fields sent are changed. The handle is fixed."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        extra = "forbid"


class CompanyFilter(CamelModel):
    """Optional criteria for listing companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)

    def has_criteria(self) -> bool:
        return any(value is not None for value in self.model_dump().values())


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJobResponse(CamelModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyDetailResponse(CompanyResponse):
    """Company with its jobs"""
    jobs: List[CompanyJobResponse] = []
