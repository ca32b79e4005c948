# taskflow/utils/auth.py
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session, selectinload

from taskflow.database import get_db
from taskflow.models.token import RevokedToken
from taskflow.models.user import User
from taskflow.utils.access import Identity, RoleResolver
from taskflow.utils.security import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/login")


def _credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_payload(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> dict:
    """Decode the bearer token and reject it if it has been revoked"""
    payload = decode_access_token(token)
    if not payload or payload.get("sub") is None:
        logger.warning("Authentication failed: invalid or expired token")
        raise _credentials_exception()

    jti = payload.get("jti")
    if jti and db.query(RevokedToken).filter(RevokedToken.jti == jti).first():
        logger.warning(f"Authentication failed: revoked token for {payload.get('sub')}")
        raise _credentials_exception()

    return payload


def get_current_user(payload: dict = Depends(get_token_payload), db: Session = Depends(get_db)) -> User:
    email: str = payload.get("sub")

    # Roles are loaded here, once per request
    user = db.query(User).options(selectinload(User.roles)).filter(User.email == email).first()
    if user is None:
        logger.warning(f"Authentication failed: unknown user {email}")
        raise _credentials_exception()

    return user


def get_identity(current_user: User = Depends(get_current_user)) -> Identity:
    return Identity.from_user(current_user)


def require_administrator(identity: Identity = Depends(get_identity)) -> Identity:
    if not RoleResolver.is_administrator(identity):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only administrators can perform this action",
        )
    return identity
