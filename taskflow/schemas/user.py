from pydantic import BaseModel, EmailStr, Field, PlainSerializer, validator
from typing import Annotated, List, Optional
from datetime import datetime

from taskflow.config.security import SecurityConfig

# Second precision timestamps, e.g. "2025-03-01 14:05:09"
Timestamp = Annotated[
    datetime,
    PlainSerializer(lambda v: v.strftime("%Y-%m-%d %H:%M:%S"), return_type=str),
]

class UserRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str
    password_confirmation: str

    @validator('password')
    def password_long_enough(cls, v):
        min_length = SecurityConfig.PASSWORD['min_length']
        if len(v) < min_length:
            raise ValueError(f'Password must be at least {min_length} characters')
        return v

    @validator('password_confirmation')
    def passwords_match(cls, v, values):
        if 'password' in values and v != values['password']:
            raise ValueError('Password confirmation does not match')
        return v

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class RoleOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = {
        "from_attributes": True
    }

class UserBasic(BaseModel):
    id: int
    name: str
    email: str

    model_config = {
        "from_attributes": True
    }

class UserOut(BaseModel):
    id: int
    name: str
    email: str
    roles: List[RoleOut] = []
    created_at: Timestamp
    updated_at: Timestamp

    model_config = {
        "from_attributes": True
    }

class RoleAssign(BaseModel):
    role: str = Field(..., min_length=1, max_length=100)
