# taskflow/services/task_query.py
"""
Composable task query builders and the paginated task listing.

Every builder takes a SQLAlchemy ``Query`` and returns a new one, so a
visibility-scoped query can be branched into any number of derived queries
without one branch leaking filters into another.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, List, Optional, TypeVar

from sqlalchemy import or_
from sqlalchemy.orm import Query, selectinload

from taskflow.config.settings import settings
from taskflow.models.task import Task, TaskStatus, TASK_STATUSES, TASK_PRIORITIES
from taskflow.models.user import User
from taskflow.schemas.task import TaskFilters

T = TypeVar("T")

SORTABLE_COLUMNS = {
    "created_at": Task.created_at,
    "due_date": Task.due_date,
    "priority": Task.priority,
    "title": Task.title,
    "status": Task.status,
    "updated_at": Task.updated_at,
}
DEFAULT_SORT = "created_at"


@dataclass
class PagedResult(Generic[T]):
    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(math.ceil(self.total / self.per_page), 1)

    @property
    def first_item(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def last_item(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)


# --- predicate builders -------------------------------------------------------

def by_status(query: Query, status: str) -> Query:
    return query.filter(Task.status == status)


def by_priority(query: Query, priority: str) -> Query:
    return query.filter(Task.priority == priority)


def assigned_to(query: Query, user_id: int) -> Query:
    return query.filter(Task.assigned_to == user_id)


def not_completed(query: Query) -> Query:
    return query.filter(Task.status != TaskStatus.COMPLETED.value)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def matching(query: Query, term: str) -> Query:
    """Case-insensitive substring match on title or description"""
    pattern = f"%{_escape_like(term)}%"
    return query.filter(
        or_(
            Task.title.ilike(pattern, escape="\\"),
            Task.description.ilike(pattern, escape="\\"),
        )
    )


def overdue(query: Query, today: date) -> Query:
    return not_completed(query.filter(Task.due_date < today))


def due_between(query: Query, start: date, end: date) -> Query:
    return query.filter(
        Task.due_date.isnot(None),
        Task.due_date >= start,
        Task.due_date <= end,
    )


def created_between(query: Query, start: datetime, end: datetime) -> Query:
    return query.filter(Task.created_at >= start, Task.created_at <= end)


def updated_between(query: Query, start: datetime, end: datetime) -> Query:
    return query.filter(Task.updated_at >= start, Task.updated_at <= end)


def with_people(query: Query) -> Query:
    """Eager-load creator and assignee (and their roles) for serialization"""
    return query.options(
        selectinload(Task.created_by_user).selectinload(User.roles),
        selectinload(Task.assigned_to_user).selectinload(User.roles),
    )


# --- listing ------------------------------------------------------------------

def apply_filters(query: Query, criteria: TaskFilters) -> Query:
    # Unknown status / priority values are ignored rather than rejected
    if criteria.status and criteria.status in TASK_STATUSES:
        query = by_status(query, criteria.status)

    if criteria.priority and criteria.priority in TASK_PRIORITIES:
        query = by_priority(query, criteria.priority)

    if criteria.assigned_to:
        query = assigned_to(query, criteria.assigned_to)

    if criteria.search:
        query = matching(query, criteria.search)

    return query


def apply_sort(query: Query, sort_by: Optional[str], sort_order: Optional[str]) -> Query:
    """Order by an allow-listed column; ties always fall back to id ascending"""
    column = SORTABLE_COLUMNS.get(sort_by or "", SORTABLE_COLUMNS[DEFAULT_SORT])
    descending = (sort_order or "").lower() == "desc"
    return query.order_by(column.desc() if descending else column.asc(), Task.id.asc())


def list_tasks(scoped_query: Query, criteria: TaskFilters) -> PagedResult[Task]:
    """Filter, sort and paginate an already visibility-scoped task query"""
    query = apply_filters(scoped_query, criteria)
    total = query.order_by(None).count()

    per_page = min(criteria.per_page, settings.MAX_PER_PAGE)
    offset = (criteria.page - 1) * per_page
    items = (
        with_people(apply_sort(query, criteria.sort_by, criteria.sort_order))
        .offset(offset)
        .limit(per_page)
        .all()
    )

    return PagedResult(items=items, total=total, page=criteria.page, per_page=per_page)
