"""
Pydantic schemas for Company API requests/responses.
"""

from typing import List, Optional
from pydantic import Field

from app.schemas.base import CamelModel, HttpUrlStr, StrictCamelModel


class CompanyNew(StrictCamelModel):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyUpdate(StrictCamelModel):
    """
    Schema for a partial company update.

    Only keys present in the request are changed; handle cannot change.
    `name` may be omitted but never set to null.
    """
    name: str = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[HttpUrlStr] = None


class CompanyFilter(StrictCamelModel):
    """Query-string filters for listing companies"""
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)
    name_like: Optional[str] = Field(None, min_length=1)


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: Optional[str] = None
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJob(CamelModel):
    """A job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyDetail(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(CamelModel):
    company: CompanyResponse


class CompanyDetailEnvelope(CamelModel):
    company: CompanyDetail


class CompanyListEnvelope(CamelModel):
    companies: List[CompanyResponse]


class CompanyDeleted(CamelModel):
    deleted: str
