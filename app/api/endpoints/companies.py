"""
Company endpoints.

Reads are public; create, update and delete require an admin token.
"""

import logging
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.exceptions import BadRequestError, validation_messages
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.schemas.company import (
    CompanyDeleted,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyFilter,
    CompanyListEnvelope,
    CompanyNew,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyNew,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Create a company.

    Returns { company: { handle, name, description, numEmployees, logoUrl } }
    """
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies ordered by name.

    Optional query filters:
    - minEmployees
    - maxEmployees
    - nameLike (case-insensitive, partial match)
    """
    if not request.query_params:
        return {"companies": company_crud.find_all(db)}

    try:
        filters = CompanyFilter.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(validation_messages(e.errors()))

    if (
        filters.min_employees is not None
        and filters.max_employees is not None
        and filters.min_employees > filters.max_employees
    ):
        raise BadRequestError("Min can't be greater than max.")

    criteria = filters.model_dump(by_alias=True, exclude_unset=True)
    return {"companies": company_crud.find_filtered(db, criteria)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """
    Get a company with its jobs.

    Returns { company: { handle, name, description, numEmployees, logoUrl, jobs } }
    where jobs is [{ id, title, salary, equity }, ...]
    """
    company = company_crud.get(db, handle)
    company["jobs"] = job_crud.find_by_company(db, handle)
    return {"company": company}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdate,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Partially update a company.

    Fields can be: { name, description, numEmployees, logoUrl }
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    company = company_crud.update(db, handle, data)
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeleted)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)
    logger.info(f"Admin {admin_user['username']} deleted company {handle}")
    return {"deleted": handle}
