# taskflow/services/task_service.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from taskflow.exceptions import AuthorizationDenied, NotFound, ValidationFailure
from taskflow.models.task import Task, utc_timestamp
from taskflow.models.user import User
from taskflow.schemas.task import TaskCreate, TaskFilters, TaskUpdate
from taskflow.services import task_query
from taskflow.services.dashboard import compute_dashboard
from taskflow.utils.access import AuthorizationGate, Identity, scope_tasks

logger = logging.getLogger(__name__)

# Columns an update may never null out
REQUIRED_FIELDS = ("title", "status", "priority")


def _plain(value):
    """Enum members to their stored string value"""
    return getattr(value, "value", value)


class TaskService:
    """Task listing, dashboard and single-task operations for one caller"""

    def __init__(self, db: Session, identity: Identity):
        self.db = db
        self.identity = identity

    def visible_tasks(self):
        return scope_tasks(self.identity, self.db.query(Task))

    def list_tasks(self, criteria: TaskFilters) -> task_query.PagedResult[Task]:
        return task_query.list_tasks(self.visible_tasks(), criteria)

    def dashboard(self, now: Optional[datetime] = None) -> dict:
        return compute_dashboard(self.visible_tasks(), now or datetime.utcnow())

    def _load(self, task_id: int) -> Task:
        task = task_query.with_people(self.db.query(Task)).filter(Task.id == task_id).first()
        if not task:
            raise NotFound("Task not found")
        return task

    def _check_assignee(self, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        if not self.db.query(User.id).filter(User.id == user_id).first():
            raise ValidationFailure(
                "The assigned user does not exist.",
                errors={"assigned_to": ["The assigned user does not exist."]},
            )

    def get_task(self, task_id: int) -> Task:
        task = self._load(task_id)
        if not AuthorizationGate.can_access(self.identity, task):
            raise AuthorizationDenied("You don't have permission to view this task")
        return task

    def create_task(self, payload: TaskCreate) -> Task:
        data = {key: _plain(value) for key, value in payload.model_dump().items()}

        # Unassigned tasks go to their creator
        if data.get("assigned_to") is None:
            data["assigned_to"] = self.identity.id
        self._check_assignee(data["assigned_to"])

        # created_at == updated_at until the first update
        now = utc_timestamp()
        task = Task(**data, created_by=self.identity.id, created_at=now, updated_at=now)
        self.db.add(task)
        self.db.commit()

        logger.info(f"Task {task.id} created by user {self.identity.id}")
        return self._load(task.id)

    def update_task(self, task_id: int, payload: TaskUpdate) -> Task:
        task = self._load(task_id)
        if not AuthorizationGate.can_modify(self.identity, task):
            raise AuthorizationDenied("You don't have permission to modify this task")

        update_data = {key: _plain(value) for key, value in payload.model_dump(exclude_unset=True).items()}
        for field in REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                raise ValidationFailure(f"The {field} field cannot be empty.", errors={field: ["Required."]})
        if "assigned_to" in update_data:
            self._check_assignee(update_data["assigned_to"])

        for field, value in update_data.items():
            setattr(task, field, value)
        task.updated_at = utc_timestamp()

        self.db.commit()
        logger.info(f"Task {task.id} updated by user {self.identity.id}: {sorted(update_data)}")
        return self._load(task.id)

    def delete_task(self, task_id: int) -> None:
        task = self._load(task_id)
        if not AuthorizationGate.can_delete(self.identity, task):
            raise AuthorizationDenied("Only the task creator or an administrator can delete this task")

        self.db.delete(task)
        self.db.commit()
        logger.info(f"Task {task_id} deleted by user {self.identity.id}")
