# taskflow/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from taskflow.database import get_db
from taskflow.services.task_service import TaskService
from taskflow.utils.access import Identity
from taskflow.utils.auth import get_identity

router = APIRouter(prefix="/dashboard", tags=["dashboard"])

@router.get("")
def get_dashboard(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity)
):
    """Dashboard metrics and analytics over the caller's visible tasks

    Returns task_statistics, recent_activity, performance_metrics,
    priority_distribution, status_distribution, overdue_tasks and
    upcoming_deadlines, recomputed on every call.
    """
    return TaskService(db, identity).dashboard()
