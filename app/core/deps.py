"""
FastAPI dependencies for authentication and authorization.

Route handlers declare these to gate writes; repositories never look at the
caller's identity.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.core.security import decode_token
from app.crud import user as user_crud

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so a missing header becomes our own 401 body
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> dict:
    """
    Extract and validate the current user from the JWT token.

    Raises:
        UnauthorizedError: If the token is missing, invalid, expired, or
            names a user that no longer exists
    """
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        raise UnauthorizedError("Invalid or expired token")

    username = payload.get("sub")
    if username is None:
        raise UnauthorizedError("Invalid or expired token")

    try:
        return user_crud.get(db, username)
    except NotFoundError:
        raise UnauthorizedError("Invalid or expired token")


def get_admin_user(user: dict = Depends(get_current_user)) -> dict:
    """
    Require a logged-in admin.

    Raises:
        ForbiddenError: If the user is not an admin
    """
    if not user["isAdmin"]:
        raise ForbiddenError("Admin privileges required")
    return user
