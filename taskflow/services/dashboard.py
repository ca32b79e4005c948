# taskflow/services/dashboard.py
"""
Dashboard analytics over a visibility-scoped task query.

Each sub-metric is derived from the scoped query on its own, so every one of
them carries the caller's visibility filter. Nothing is cached; a snapshot is
recomputed from the store on every call.
"""

import calendar
import logging
from datetime import datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Query, selectinload

from taskflow.config.settings import settings
from taskflow.models.task import Task, TaskStatus, TASK_STATUSES, TASK_PRIORITIES
from taskflow.services import task_query

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int):
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100, 2)


def days_between(start, end) -> int:
    """Whole calendar days from start to end (negative when end is earlier)"""
    start_day = start.date() if isinstance(start, datetime) else start
    end_day = end.date() if isinstance(end, datetime) else end
    return (end_day - start_day).days


def month_bounds(now: datetime):
    first = datetime.combine(now.date().replace(day=1), time.min)
    last_day = calendar.monthrange(now.year, now.month)[1]
    last = datetime.combine(now.date().replace(day=last_day), time.max)
    return first, last


def _person(user) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {"id": user.id, "name": user.name}


class DashboardAggregator:
    """Computes the dashboard snapshot for one scoped query at one instant"""

    def __init__(self, scoped_query: Query, now: datetime):
        self.query = scoped_query
        self.now = now
        self.today = now.date()

    def compute(self) -> Dict[str, Any]:
        snapshot = {
            "task_statistics": self.task_statistics(),
            "recent_activity": self.recent_activity(),
            "performance_metrics": self.performance_metrics(),
            "priority_distribution": self.priority_distribution(),
            "status_distribution": self.status_distribution(),
            "overdue_tasks": self.overdue_tasks(),
            "upcoming_deadlines": self.upcoming_deadlines(),
        }
        logger.debug(f"Dashboard computed at {self.now.isoformat()}: {snapshot['task_statistics']}")
        return snapshot

    def task_statistics(self) -> Dict[str, Any]:
        total = self.query.count()
        completed = task_query.by_status(self.query, TaskStatus.COMPLETED.value).count()
        pending = task_query.by_status(self.query, TaskStatus.PENDING.value).count()
        in_progress = task_query.by_status(self.query, TaskStatus.IN_PROGRESS.value).count()
        cancelled = task_query.by_status(self.query, TaskStatus.CANCELLED.value).count()

        return {
            "total_tasks": total,
            "completed_tasks": completed,
            "pending_tasks": pending,
            "in_progress_tasks": in_progress,
            "cancelled_tasks": cancelled,
            "completion_rate": percentage(completed, total),
        }

    def recent_activity(self) -> List[Dict[str, Any]]:
        tasks = (
            self.query.options(
                selectinload(Task.created_by_user),
                selectinload(Task.assigned_to_user),
            )
            .order_by(Task.updated_at.desc(), Task.id.asc())
            .limit(settings.RECENT_ACTIVITY_LIMIT)
            .all()
        )

        return [
            {
                "id": task.id,
                "title": task.title,
                "status": task.status,
                "priority": task.priority,
                "updated_at": task.updated_at.strftime("%Y-%m-%d %H:%M:%S"),
                "creator": _person(task.created_by_user),
                "assignee": _person(task.assigned_to_user),
            }
            for task in tasks
        ]

    def performance_metrics(self) -> Dict[str, Any]:
        start, end = month_bounds(self.now)
        monthly = task_query.created_between(self.query, start, end)

        created_this_month = monthly.count()

        # A task created already completed (created_at == updated_at) is not counted as completed this month
        completed_this_month = (
            task_query.updated_between(
                task_query.by_status(monthly, TaskStatus.COMPLETED.value), start, end
            )
            .filter(Task.created_at != Task.updated_at)
            .count()
        )

        completed_tasks = (
            task_query.by_status(monthly, TaskStatus.COMPLETED.value)
            .filter(Task.updated_at.isnot(None))
            .all()
        )
        if completed_tasks:
            durations = [days_between(t.created_at, t.updated_at) for t in completed_tasks]
            average_days = round_half_up(sum(durations) / len(durations), 1)
        else:
            average_days = 0

        return {
            "tasks_created_this_month": created_this_month,
            "tasks_completed_this_month": completed_this_month,
            "completion_rate_this_month": percentage(completed_this_month, created_this_month),
            "average_completion_time_days": average_days,
        }

    def priority_distribution(self) -> Dict[str, int]:
        return {
            priority: task_query.by_priority(self.query, priority).count()
            for priority in TASK_PRIORITIES
        }

    def status_distribution(self) -> Dict[str, int]:
        return {
            status: task_query.by_status(self.query, status).count()
            for status in TASK_STATUSES
        }

    def overdue_tasks(self) -> List[Dict[str, Any]]:
        tasks = (
            task_query.overdue(self.query, self.today)
            .options(selectinload(Task.assigned_to_user))
            .order_by(Task.due_date.asc(), Task.id.asc())
            .limit(settings.DEADLINE_LIST_LIMIT)
            .all()
        )

        return [
            {
                "id": task.id,
                "title": task.title,
                "priority": task.priority,
                "due_date": task.due_date.isoformat(),
                "days_overdue": days_between(task.due_date, self.today),
                "assignee": _person(task.assigned_to_user),
            }
            for task in tasks
        ]

    def upcoming_deadlines(self) -> List[Dict[str, Any]]:
        horizon = self.today + timedelta(days=settings.UPCOMING_WINDOW_DAYS)
        tasks = (
            task_query.not_completed(task_query.due_between(self.query, self.today, horizon))
            .options(selectinload(Task.assigned_to_user))
            .order_by(Task.due_date.asc(), Task.id.asc())
            .limit(settings.DEADLINE_LIST_LIMIT)
            .all()
        )

        return [
            {
                "id": task.id,
                "title": task.title,
                "priority": task.priority,
                "due_date": task.due_date.isoformat(),
                "days_until_due": days_between(self.today, task.due_date),
                "assignee": _person(task.assigned_to_user),
            }
            for task in tasks
        ]


def compute_dashboard(scoped_query: Query, now: datetime) -> Dict[str, Any]:
    return DashboardAggregator(scoped_query, now).compute()
