# taskflow/services/user_service.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from taskflow.exceptions import NotFound, ValidationFailure
from taskflow.models.token import RevokedToken
from taskflow.models.user import User, Role, REGULAR_USER
from taskflow.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.query(User).options(selectinload(User.roles)).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    def register(db: Session, name: str, email: str, password: str) -> User:
        """Create an account with the default role"""
        if db.query(User).filter(User.email == email).first():
            raise ValidationFailure(
                "The email has already been taken.",
                errors={"email": ["The email has already been taken."]},
            )

        user = User(name=name, email=email, hashed_password=hash_password(password))
        db.add(user)
        db.flush()
        UserService.assign_role(db, user, REGULAR_USER)
        db.commit()
        db.refresh(user)

        logger.info(f"Registered user {user.id} ({user.email})")
        return user

    @staticmethod
    def authenticate(db: Session, email: str, password: str) -> Optional[User]:
        user = db.query(User).options(selectinload(User.roles)).filter(User.email == email).first()
        if not user or not verify_password(password, user.hashed_password):
            logger.warning(f"Failed login attempt for {email}")
            return None
        return user

    @staticmethod
    def assign_role(db: Session, user: User, role_name: str) -> User:
        """Attach a role by name; unknown or already held roles are left alone"""
        role = db.query(Role).filter(Role.name == role_name).first()
        if role and role not in user.roles:
            user.roles.append(role)
            logger.info(f"Role '{role_name}' assigned to user {user.id}")
        return user

    @staticmethod
    def remove_role(db: Session, user: User, role_name: str) -> User:
        role = db.query(Role).filter(Role.name == role_name).first()
        if role and role in user.roles:
            user.roles.remove(role)
            logger.info(f"Role '{role_name}' removed from user {user.id}")
        return user

    @staticmethod
    def require_role(db: Session, role_name: str) -> Role:
        role = db.query(Role).filter(Role.name == role_name).first()
        if not role:
            raise ValidationFailure(
                f"Role '{role_name}' does not exist.",
                errors={"role": [f"Role '{role_name}' does not exist."]},
            )
        return role

    @staticmethod
    def revoke_token(db: Session, user_id: int, payload: dict) -> None:
        jti = payload.get("jti")
        if not jti:
            return
        if db.query(RevokedToken).filter(RevokedToken.jti == jti).first():
            return

        exp = payload.get("exp")
        expires_at = datetime.utcfromtimestamp(exp) if exp else None
        db.add(RevokedToken(jti=jti, user_id=user_id, expires_at=expires_at))
        db.commit()
        logger.info(f"Token revoked for user {user_id}")
