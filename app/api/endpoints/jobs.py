import logging
from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user
from app.core.exceptions import BadRequestError, validation_messages
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.schemas.job import (
    JobDeleted,
    JobDetailEnvelope,
    JobEnvelope,
    JobFilter,
    JobListEnvelope,
    JobNew,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobNew,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Create a job for an existing company.

    Returns { job: { id, title, salary, equity, companyHandle } }
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs ordered by title.

    Optional query filters:
    - title (case-insensitive, partial match)
    - minSalary
    - hasEquity (true: only jobs with non-zero equity)
    """
    if not request.query_params:
        return {"jobs": job_crud.find_all(db)}

    try:
        filters = JobFilter.model_validate(dict(request.query_params))
    except ValidationError as e:
        raise BadRequestError(validation_messages(e.errors()))

    criteria = filters.model_dump(by_alias=True, exclude_unset=True)
    return {"jobs": job_crud.find_filtered(db, criteria)}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Get a job with its company.

    Returns { job: { id, title, salary, equity, company } }
    """
    job = job_crud.get(db, job_id)
    job["company"] = company_crud.get(db, job.pop("companyHandle"))
    return {"job": job}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdate,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """
    Partially update a job.

    Fields can be: { title, salary, equity }
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    job = job_crud.update(db, job_id, data)
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeleted)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    admin_user: dict = Depends(get_admin_user)
):
    """Delete a job by ID."""
    job_crud.remove(db, job_id)
    logger.info(f"Admin {admin_user['username']} deleted job {job_id}")
    return {"deleted": job_id}
