"""
CRUD operations for users.

Only what authentication needs: register, authenticate, get. The password
hash never leaves this module.
"""

import logging
from typing import Any, Dict, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from app.core.security import get_password_hash, verify_password
from app.helpers.sql import select_list

logger = logging.getLogger(__name__)

COLUMNS = {
    "username": "username",
    "firstName": "first_name",
    "lastName": "last_name",
    "email": "email",
    "isAdmin": "is_admin",
}

_SELECT = f"""
SELECT {select_list(COLUMNS)}
FROM users"""


def _as_user(row: Dict[str, Any]) -> Dict[str, Any]:
    # SQLite hands booleans back as 0/1
    row["isAdmin"] = bool(row["isAdmin"])
    return row


def register(db: Session, data: Mapping[str, Any], is_admin: bool = False) -> Dict[str, Any]:
    """
    Register a user with a bcrypt-hashed password.

    Args:
        data: {username, password, firstName, lastName, email}
        is_admin: Only set by trusted callers (seeding, tests), never from a request body

    Raises:
        BadRequestError: If the username is taken
    """
    username = data["username"]
    duplicate_check = run_query(
        db, "SELECT username FROM users WHERE username = $1", [username]
    )
    if duplicate_check:
        raise BadRequestError(f"Duplicate username: {username}")

    try:
        rows = run_query(
            db,
            f"""
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {select_list(COLUMNS)}""",
            [
                username,
                get_password_hash(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                is_admin,
            ],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate username: {username}")

    logger.info(f"Registered user {username}")
    return _as_user(rows[0])


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    rows = run_query(
        db,
        f"""
        SELECT password, {select_list(COLUMNS)}
        FROM users
        WHERE username = $1""",
        [username],
    )
    if rows:
        user = rows[0]
        hashed = user.pop("password")
        if verify_password(password, hashed):
            return _as_user(user)

    logger.warning(f"Failed login for {username}")
    raise UnauthorizedError("Invalid username/password")


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Get a user by username.

    Raises:
        NotFoundError: If no such user
    """
    rows = run_query(db, f"{_SELECT}\nWHERE username = $1", [username])
    if not rows:
        raise NotFoundError(f"No user: {username}")
    return _as_user(rows[0])
