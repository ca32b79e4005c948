# taskflow/utils/access.py
"""Role resolution, task visibility scoping and per-task authorization.

Roles are read once per request into an :class:`Identity`; nothing in this
module touches the database, so the same identity can be consulted any number
of times while a request is handled.
"""
from dataclasses import dataclass, field
from typing import FrozenSet

from sqlalchemy import or_
from sqlalchemy.orm import Query

from taskflow.models.task import Task
from taskflow.models.user import ADMINISTRATOR, User


@dataclass(frozen=True)
class Identity:
    """The authenticated caller with its role set loaded"""
    id: int
    name: str
    email: str
    roles: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, name=user.name, email=user.email, roles=user.role_names)


class RoleResolver:
    """Answers capability questions from an identity's loaded role set"""

    @staticmethod
    def is_administrator(identity: Identity) -> bool:
        return RoleResolver.has_role(identity, ADMINISTRATOR)

    @staticmethod
    def has_role(identity: Identity, role_name: str) -> bool:
        return role_name in identity.roles


def scope_tasks(identity: Identity, query: Query) -> Query:
    """Restrict a task query to the rows the identity may see.

    Administrators get the query back unchanged. Everyone else only sees tasks
    they created or that are assigned to them. Call this before any other
    filter, sort or aggregation.
    """
    if RoleResolver.is_administrator(identity):
        return query

    return query.filter(
        or_(
            Task.created_by == identity.id,
            Task.assigned_to == identity.id,
        )
    )


class AuthorizationGate:
    """Per-task read / modify / delete decisions"""

    @staticmethod
    def can_access(identity: Identity, task: Task) -> bool:
        return (
            RoleResolver.is_administrator(identity)
            or task.created_by == identity.id
            or task.assigned_to == identity.id
        )

    @staticmethod
    def can_modify(identity: Identity, task: Task) -> bool:
        # Assignees may edit every field, reassignment included
        return AuthorizationGate.can_access(identity, task)

    @staticmethod
    def can_delete(identity: Identity, task: Task) -> bool:
        return RoleResolver.is_administrator(identity) or task.created_by == identity.id
