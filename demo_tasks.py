"""
Demo Tasks Data for Task Manager Application
Tasks spread over statuses, priorities and due dates so every dashboard panel has data
"""

from datetime import date, timedelta

from taskflow.models import TaskStatus, TaskPriority

today = date.today()

# Structure: title, description, status, priority, due date, tags,
# creator and assignee as indexes into DEMO_USERS
DEMO_TASKS = [
    {
        "title": "Design new dashboard mockups",
        "description": "Wireframes for the analytics dashboard, including the deadline widgets",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.HIGH,
        "due_date": today + timedelta(days=3),
        "tags": ["design", "dashboard"],
        "creator": 1,
        "assignee": 2,
    },
    {
        "title": "Fix pagination on task list",
        "description": "Last page shows an empty table when the total is a multiple of the page size",
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.URGENT,
        "due_date": today - timedelta(days=4),
        "tags": ["bug", "frontend"],
        "creator": 2,
        "assignee": 3,
    },
    {
        "title": "Write onboarding guide",
        "description": "Short guide covering registration, creating tasks and reading the dashboard",
        "status": TaskStatus.COMPLETED,
        "priority": TaskPriority.MEDIUM,
        "due_date": today - timedelta(days=1),
        "tags": ["docs"],
        "creator": 1,
        "assignee": 1,
    },
    {
        "title": "Audit role assignments",
        "description": "Check that only the operations staff hold the Administrator role",
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.HIGH,
        "due_date": today + timedelta(days=6),
        "tags": ["security"],
        "creator": 0,
        "assignee": 0,
    },
    {
        "title": "Plan quarterly roadmap",
        "description": None,
        "status": TaskStatus.PENDING,
        "priority": TaskPriority.LOW,
        "due_date": today + timedelta(days=30),
        "tags": [],
        "creator": 0,
        "assignee": 1,
    },
    {
        "title": "Retire legacy import script",
        "description": "Replaced by the new seeding command",
        "status": TaskStatus.CANCELLED,
        "priority": TaskPriority.LOW,
        "due_date": None,
        "tags": ["cleanup"],
        "creator": 3,
        "assignee": None,
    },
    {
        "title": "Collect feedback from pilot users",
        "description": "Summarise contact form submissions from the pilot group",
        "status": TaskStatus.IN_PROGRESS,
        "priority": TaskPriority.MEDIUM,
        "due_date": today,
        "tags": ["research"],
        "creator": 4,
        "assignee": 2,
    },
]
