from .user import User, Role, role_user, ADMINISTRATOR, REGULAR_USER
from .task import Task, TaskStatus, TaskPriority, TASK_STATUSES, TASK_PRIORITIES, utc_timestamp
from .contact import ContactMessage
from .token import RevokedToken
