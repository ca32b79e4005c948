"""
Demo Users Data for Task Manager Application
One administrator and a handful of regular users to own and receive tasks
"""

from taskflow.models import ADMINISTRATOR, REGULAR_USER

# Structure: name, email, password, roles
DEMO_USERS = [
    {
        "name": "Priya Sharma",
        "email": "priya.sharma@taskflow.io",
        "password": "password123",
        "roles": [ADMINISTRATOR],
    },
    {
        "name": "Jonathan Reyes",
        "email": "jonathan.reyes@taskflow.io",
        "password": "password123",
        "roles": [REGULAR_USER],
    },
    {
        "name": "Amara Okafor",
        "email": "amara.okafor@taskflow.io",
        "password": "password123",
        "roles": [REGULAR_USER],
    },
    {
        "name": "Lukas Becker",
        "email": "lukas.becker@taskflow.io",
        "password": "password123",
        "roles": [REGULAR_USER],
    },
    {
        # Deliberately roleless: seen as a non-admin everywhere
        "name": "Mei Tanaka",
        "email": "mei.tanaka@taskflow.io",
        "password": "password123",
        "roles": [],
    },
]
