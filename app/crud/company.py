"""
CRUD operations for companies.

Each function takes the request's database session and issues raw
parameterized statements. Rows come back keyed by field name
(`numEmployees`, `logoUrl`), not by column name.
"""

import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.helpers.sql import (
    COMPANY_FILTERS,
    SqlFragment,
    parameterize_filter_query as _parameterize,
    select_list,
    sql_for_partial_update,
    where,
)

logger = logging.getLogger(__name__)

# field name -> column name, in output order
COLUMNS = {
    "handle": "handle",
    "name": "name",
    "description": "description",
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
JS_TO_SQL = {name: col for name, col in COLUMNS.items() if name != col}

_SELECT = f"""
SELECT {select_list(COLUMNS)}
FROM companies"""


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If a company with this handle already exists
    """
    handle = data["handle"]
    duplicate_check = run_query(
        db, "SELECT handle FROM companies WHERE handle = $1", [handle]
    )
    if duplicate_check:
        raise BadRequestError(f"Duplicate company: {handle}")

    try:
        rows = run_query(
            db,
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {select_list(COLUMNS)}""",
            [
                handle,
                data["name"],
                data.get("description"),
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        db.commit()
    except IntegrityError:
        # A concurrent create won the race past the duplicate check,
        # or the name is already taken
        db.rollback()
        raise BadRequestError(f"Duplicate company: {handle}")

    logger.info(f"Created company {handle}")
    return rows[0]


def find_all(db: Session) -> List[Dict[str, Any]]:
    """
    Find all companies, ordered by name.

    Returns:
        [{handle, name, description, numEmployees, logoUrl}, ...]
    """
    return run_query(db, f"{_SELECT}\nORDER BY name")


def parameterize_filter_query(criteria: Mapping[str, Any]) -> SqlFragment:
    """
    WHERE conditions for company filter criteria.

    Recognizes minEmployees, maxEmployees and nameLike; always numbered in
    that order.
    """
    return _parameterize(criteria, COMPANY_FILTERS)


def find_filtered(db: Session, criteria: Mapping[str, Any]) -> List[Dict[str, Any]]:
    """
    Find companies matching all given criteria, ordered by name.

    Args:
        criteria: Any of {minEmployees, maxEmployees, nameLike}. nameLike is
            a case-insensitive substring match.
    """
    conds = parameterize_filter_query(criteria)
    return run_query(db, f"{_SELECT}\n{where(conds)}\nORDER BY name", conds.values)


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company by handle.

    Raises:
        NotFoundError: If no such company
    """
    rows = run_query(db, f"{_SELECT}\nWHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")
    return rows[0]


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company; only fields present in `data` change.

    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If `data` is empty
        NotFoundError: If no such company
    """
    set_cols = sql_for_partial_update(data, JS_TO_SQL)

    try:
        rows = run_query(
            db,
            f"""
            UPDATE companies
            SET {set_cols.clause}
            WHERE handle = {set_cols.next_placeholder}
            RETURNING {select_list(COLUMNS)}""",
            [*set_cols.values, handle],
        )
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {data.get('name')}")

    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return rows[0]


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (and, by cascade, its jobs).

    Raises:
        NotFoundError: If no such company
    """
    rows = run_query(
        db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]
    )
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
