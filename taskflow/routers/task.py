# taskflow/routers/task.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from taskflow.config.settings import settings
from taskflow.database import get_db
from taskflow.schemas.task import TaskCreate, TaskUpdate, TaskOut, TaskEnvelope, TaskPage, TaskFilters
from taskflow.schemas.tokens import MessageOut
from taskflow.services.task_service import TaskService
from taskflow.utils.access import Identity
from taskflow.utils.auth import get_identity

router = APIRouter(prefix="/tasks", tags=["tasks"])

def get_task_service(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity)
) -> TaskService:
    return TaskService(db, identity)

@router.get("", response_model=TaskPage)
def get_all_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    assigned_to: Optional[int] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(settings.DEFAULT_PER_PAGE, ge=1, le=settings.MAX_PER_PAGE),
    service: TaskService = Depends(get_task_service)
):
    """List tasks with role-based visibility

    - Administrator: all tasks
    - Regular User: tasks they created or that are assigned to them
    """
    criteria = TaskFilters(
        status=status,
        priority=priority,
        assigned_to=assigned_to,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=per_page,
    )
    result = service.list_tasks(criteria)

    return TaskPage(
        data=[TaskOut.model_validate(task) for task in result.items],
        current_page=result.page,
        last_page=result.last_page,
        per_page=result.per_page,
        total=result.total,
        from_=result.first_item,
        to=result.last_item,
    )

@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    service: TaskService = Depends(get_task_service)
):
    """Create a task owned by the caller; unassigned tasks go to the caller"""
    db_task = service.create_task(task)
    return TaskEnvelope(message="Task created successfully", task=TaskOut.model_validate(db_task))

@router.get("/{task_id}", response_model=TaskEnvelope)
def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service)
):
    """Get a specific task by ID with role-based access control"""
    return TaskEnvelope(task=TaskOut.model_validate(service.get_task(task_id)))

@router.put("/{task_id}", response_model=TaskEnvelope)
@router.patch("/{task_id}", response_model=TaskEnvelope)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    service: TaskService = Depends(get_task_service)
):
    """Update any subset of a task's fields - creator, assignee or administrator"""
    db_task = service.update_task(task_id, task_update)
    return TaskEnvelope(message="Task updated successfully", task=TaskOut.model_validate(db_task))

@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service)
):
    """Delete a task - creator or administrator only"""
    service.delete_task(task_id)
    return {"message": "Task deleted successfully"}
