# taskflow/schemas/tokens.py
from pydantic import BaseModel
from taskflow.schemas.user import UserOut

class Token(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"

    class Config:
        from_attributes = True  # required for SQLAlchemy models in Pydantic v2

class MessageOut(BaseModel):
    message: str
