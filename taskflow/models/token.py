from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from datetime import datetime

from taskflow.database import Base


class RevokedToken(Base):
    """Bearer tokens invalidated by logout, keyed by their jti claim"""
    __tablename__ = "revoked_tokens"

    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=True)
    revoked_at = Column(DateTime, default=datetime.utcnow, nullable=False)
