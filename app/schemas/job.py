"""
Pydantic schemas for Job API requests/responses.
"""

from typing import List, Optional
from pydantic import Field

from app.schemas.base import CamelModel, StrictCamelModel
from app.schemas.company import CompanyResponse


class JobNew(StrictCamelModel):
    """Schema for creating a job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(StrictCamelModel):
    """
    Schema for a partial job update.

    id and companyHandle cannot change; `title` cannot be null.
    """
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobFilter(StrictCamelModel):
    """Query-string filters for listing jobs"""
    title: Optional[str] = Field(None, min_length=1)
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobDetail(CamelModel):
    """A job with its company embedded"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company: CompanyResponse


class JobEnvelope(CamelModel):
    job: JobResponse


class JobDetailEnvelope(CamelModel):
    job: JobDetail


class JobListEnvelope(CamelModel):
    jobs: List[JobResponse]


class JobDeleted(CamelModel):
    deleted: int
