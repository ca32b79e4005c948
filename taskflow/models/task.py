from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Text, JSON
from sqlalchemy.orm import relationship
from taskflow.database import Base
import enum
from datetime import datetime

class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

# Stable orderings used for filters and dashboard distributions
TASK_STATUSES = [s.value for s in TaskStatus]
TASK_PRIORITIES = [p.value for p in TaskPriority]

def utc_timestamp():
    """Current UTC time at the second precision the API exposes"""
    return datetime.utcnow().replace(microsecond=0)

class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Task properties
    status = Column(String(20), default=TaskStatus.PENDING.value, nullable=False, index=True)
    priority = Column(String(20), default=TaskPriority.MEDIUM.value, nullable=False, index=True)

    # Date only, no time component
    due_date = Column(Date, nullable=True, index=True)
    tags = Column(JSON, nullable=True)

    # Ownership
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_to = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # System dates, second precision; creating code passes one utc_timestamp() to both
    created_at = Column(DateTime, default=utc_timestamp, nullable=False)
    updated_at = Column(DateTime, default=utc_timestamp, onupdate=utc_timestamp, nullable=False)

    # Relationships
    created_by_user = relationship("User", foreign_keys=[created_by], back_populates="created_tasks")
    assigned_to_user = relationship("User", foreign_keys=[assigned_to], back_populates="assigned_tasks")
