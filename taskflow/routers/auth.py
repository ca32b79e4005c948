from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.orm import Session

from taskflow.database import get_db
from taskflow.models.user import User
from taskflow.schemas.user import UserRegister, UserLogin, UserOut
from taskflow.schemas.tokens import Token, MessageOut
from taskflow.services.user_service import UserService
from taskflow.utils.auth import get_current_user, get_token_payload
from taskflow.utils.security import create_access_token

router = APIRouter()

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
def register(user: UserRegister, db: Session = Depends(get_db)):
    new_user = UserService.register(db, name=user.name, email=user.email, password=user.password)

    token = create_access_token(data={"sub": new_user.email})
    return {
        "user": UserOut.model_validate(new_user),
        "token": token,
        "token_type": "bearer",
    }

@router.post("/login", response_model=Token)
def login(user: UserLogin, db: Session = Depends(get_db)):
    db_user = UserService.authenticate(db, email=user.email, password=user.password)
    if not db_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="The provided credentials are incorrect.")

    token = create_access_token(data={"sub": db_user.email})
    return {
        "user": UserOut.model_validate(db_user),
        "token": token,
        "token_type": "bearer",
    }

@router.post("/logout", response_model=MessageOut)
def logout(
    payload: dict = Depends(get_token_payload),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    UserService.revoke_token(db, current_user.id, payload)
    return {"message": "Logged out successfully."}

@router.get("/user", response_model=UserOut)
def get_authenticated_user(current_user: User = Depends(get_current_user)):
    """Get current user information with roles"""
    return UserOut.model_validate(current_user)
