# taskflow/routers/user.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from taskflow.database import get_db
from taskflow.models.user import User
from taskflow.schemas.user import RoleAssign, UserBasic, UserOut
from taskflow.services.user_service import UserService
from taskflow.utils.access import Identity
from taskflow.utils.auth import get_current_user, require_administrator

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("", response_model=List[UserBasic])
def get_all_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get all users for the assignment dropdown"""
    return db.query(User).order_by(User.name.asc(), User.id.asc()).all()

@router.post("/{user_id}/roles", response_model=UserOut)
def assign_role(
    user_id: int,
    payload: RoleAssign,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_administrator)
):
    """Assign a role to a user - administrators only"""
    user = UserService.get_user(db, user_id)
    UserService.require_role(db, payload.role)
    UserService.assign_role(db, user, payload.role)
    db.commit()
    db.refresh(user)
    return UserOut.model_validate(user)

@router.delete("/{user_id}/roles/{role_name}", response_model=UserOut)
def remove_role(
    user_id: int,
    role_name: str,
    db: Session = Depends(get_db),
    admin: Identity = Depends(require_administrator)
):
    """Remove a role from a user - administrators only"""
    user = UserService.get_user(db, user_id)
    UserService.require_role(db, role_name)
    UserService.remove_role(db, user, role_name)
    db.commit()
    db.refresh(user)
    return UserOut.model_validate(user)
