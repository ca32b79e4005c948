# taskflow/utils/security.py
import uuid
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from taskflow.config.security import SecurityConfig

pwd_context = CryptContext(schemes=SecurityConfig.PASSWORD['schemes'], deprecated="auto")

SECRET_KEY = SecurityConfig.TOKEN['secret_key']
ALGORITHM = SecurityConfig.TOKEN['algorithm']
ACCESS_TOKEN_EXPIRE_MINUTES = SecurityConfig.TOKEN['expire_minutes']


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a signed bearer token; every token carries a unique jti so it can be revoked"""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Verify JWT token and return payload without raising exceptions"""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None
