"""
CRUD operations for jobs.

Mirrors the company repository: raw parameterized statements, rows keyed
by field name (`companyHandle`), NotFoundError for missing ids.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.helpers.sql import (
    JOB_FILTERS,
    SqlFragment,
    parameterize_filter_query as _parameterize,
    select_list,
    sql_for_partial_update,
    where,
)

logger = logging.getLogger(__name__)

COLUMNS = {
    "id": "id",
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "companyHandle": "company_handle",
}
JS_TO_SQL = {name: col for name, col in COLUMNS.items() if name != col}

_SELECT = f"""
SELECT {select_list(COLUMNS)}
FROM jobs"""


def _company_exists(db: Session, company_handle: str) -> bool:
    return bool(run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [company_handle]
    ))


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        {id, title, salary, equity, companyHandle}

    Raises:
        BadRequestError: If the company does not exist
    """
    company_handle = data["companyHandle"]
    if not _company_exists(db, company_handle):
        raise BadRequestError(f"No company: {company_handle}")

    try:
        rows = run_query(
            db,
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {select_list(COLUMNS)}""",
            [data["title"], data.get("salary"), data.get("equity"), company_handle],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        # The company may have been deleted since the check above
        if not _company_exists(db, company_handle):
            raise BadRequestError(f"No company: {company_handle}")
        raise BadRequestError(f"Invalid job for company {company_handle}")

    job = rows[0]
    logger.info(f"Created job {job['id']} at {company_handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    """
    Find all jobs, ordered by title then id.

    Returns:
        [{id, title, salary, equity, companyHandle}, ...]
    """
    return run_query(db, f"{_SELECT}\nORDER BY title, id")


def parameterize_filter_query(criteria: Mapping[str, Any]) -> SqlFragment:
    """WHERE conditions for job filter criteria (title, minSalary, hasEquity)."""
    return _parameterize(criteria, JOB_FILTERS)


def find_filtered(db: Session, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Find jobs matching all given criteria, ordered by title then id.

    Args:
        criteria: Any of {title, minSalary, hasEquity}. title is a
            case-insensitive substring match; hasEquity=True keeps only jobs
            with non-zero equity and hasEquity=False adds no condition.
    """
    conds = parameterize_filter_query(criteria)
    return run_query(db, f"{_SELECT}\n{where(conds)}\nORDER BY title, id", conds.values)


def find_by_company(db: Session, company_handle: str) -> List[Dict[str, Any]]:
    """Jobs posted by one company, ordered by id."""
    return run_query(
        db, f"{_SELECT}\nWHERE company_handle = $1\nORDER BY id", [company_handle]
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get a job by id.

    Raises:
        NotFoundError: If no such job
    """
    rows = run_query(db, f"{_SELECT}\nWHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")
    return rows[0]


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job; only fields present in `data` change.

    Data can include: {title, salary, equity}

    Raises:
        BadRequestError: If `data` is empty
        NotFoundError: If no such job
    """
    set_cols = sql_for_partial_update(data, JS_TO_SQL)

    rows = run_query(
        db,
        f"""
        UPDATE jobs
        SET {set_cols.clause}
        WHERE id = {set_cols.next_placeholder}
        RETURNING {select_list(COLUMNS)}""",
        [*set_cols.values, job_id],
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: If no such job
    """
    rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
