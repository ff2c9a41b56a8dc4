from pydantic import Field
from typing import Optional

from jobly.schemas.base import CamelModel
from jobly.schemas.company import CompanyResponse


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)

    class Config:
        extra = "forbid"


class JobUpdateRequest(CamelModel):
    """Partial update: only the fields sent are changed"""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: Optional[str] = Field(None, min_length=1, max_length=25)

    class Config:
        extra = "forbid"


class JobFilter(CamelModel):
    """Optional criteria for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None

    def has_criteria(self) -> bool:
        # hasEquity=false filters nothing, same as leaving it out
        return (
            self.title is not None
            or self.min_salary is not None
            or self.max_salary is not None
            or self.has_equity is True
        )


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobDetailResponse(CamelModel):
    """Job with the company that posted it"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company: CompanyResponse
