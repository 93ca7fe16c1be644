"""
FastAPI dependency injection for database session and caller identity.
"""

import logging
from typing import Callable, Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from catalog.api.config import get_database_path
from catalog.api.security import InvalidTokenError, decode_access_token
from catalog.database import crud
from catalog.database.connection import get_db_manager
from catalog.database.models import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

NOT_AUTHORIZED = "Not authorized to access this route"


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_manager = get_db_manager(db_path=get_database_path())
    with db_manager.session_scope() as session:
        yield session


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a stored user, or reject with 401."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        user_id = decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Rejected bearer token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = crud.get_user(db, user_id)
    if user is None:
        logger.info("Token names unknown user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(*roles: str) -> Callable[..., User]:
    """Dependency factory: the current user must hold one of `roles`."""

    def check_role(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            logger.warning("User %s with role %s denied", user.user_id, user.role)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"User role {user.role} is not authorized to access this route",
            )
        return user

    return check_role
