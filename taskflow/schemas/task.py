# taskflow/schemas/task.py
from pydantic import BaseModel, Field, validator
from datetime import date, datetime
from typing import Annotated, List, Optional

from taskflow.models.task import TaskStatus, TaskPriority
from taskflow.schemas.user import Timestamp, UserOut

Tag = Annotated[str, Field(max_length=50)]

class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: Optional[date] = None
    assigned_to: Optional[int] = None
    tags: Optional[List[Tag]] = None

    model_config = {
        "use_enum_values": True
    }

class TaskCreate(TaskBase):
    @validator('due_date')
    def due_date_not_in_past(cls, v):
        if v is not None and v < datetime.utcnow().date():
            raise ValueError('Due date must be today or a future date')
        return v

class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=1000)
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[date] = None
    assigned_to: Optional[int] = None
    tags: Optional[List[Tag]] = None

    model_config = {
        "use_enum_values": True
    }

class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    priority: str
    due_date: Optional[date] = None
    tags: Optional[List[str]] = None

    # Who created it and who it's assigned to
    created_by: int
    assigned_to: Optional[int] = None
    created_by_user: Optional[UserOut] = None
    assigned_to_user: Optional[UserOut] = None

    created_at: Timestamp
    updated_at: Timestamp

    model_config = {
        "from_attributes": True
    }

class TaskEnvelope(BaseModel):
    message: Optional[str] = None
    task: TaskOut

class TaskPage(BaseModel):
    data: List[TaskOut]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: Optional[int] = Field(None, alias="from")
    to: Optional[int] = None

    model_config = {
        "populate_by_name": True
    }

class TaskFilters(BaseModel):
    """Listing criteria; unknown status, priority or sort values are tolerated, not rejected"""
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to: Optional[int] = None
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(15, ge=1, le=100)
