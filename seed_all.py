"""
Master Database Seeding Script
Creates database tables and populates with demo data
"""

from create_tables import create_tables
from demo_users import DEMO_USERS
from demo_tasks import DEMO_TASKS
from taskflow.database import SessionLocal
from taskflow.models import Task, User, utc_timestamp
from taskflow.services.user_service import UserService
from taskflow.utils.security import hash_password

def seed_demo_users(session):
    """Create demo users and return them in DEMO_USERS order"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Users")
    print(f"{'='*60}")

    users = []
    for user_data in DEMO_USERS:
        user = session.query(User).filter(User.email == user_data["email"]).first()
        if user:
            print(f"[SKIP] User {user_data['email']} already exists, skipping...")
        else:
            user = User(
                name=user_data["name"],
                email=user_data["email"],
                hashed_password=hash_password(user_data["password"]),
            )
            session.add(user)
            session.flush()
            for role_name in user_data["roles"]:
                UserService.assign_role(session, user, role_name)
            print(f"[SUCCESS] Created user: {user_data['name']} ({', '.join(user_data['roles']) or 'no role'})")
        users.append(user)

    session.commit()
    return users

def seed_demo_tasks(session, users):
    """Create demo tasks between the demo users"""
    print(f"\n{'='*60}")
    print(f"🚀 Creating Demo Tasks")
    print(f"{'='*60}")

    created = 0
    for task_data in DEMO_TASKS:
        if session.query(Task).filter(Task.title == task_data["title"]).first():
            print(f"[SKIP] Task '{task_data['title']}' already exists, skipping...")
            continue

        creator = users[task_data["creator"]]
        assignee = users[task_data["assignee"]] if task_data["assignee"] is not None else None
        now = utc_timestamp()
        session.add(Task(
            title=task_data["title"],
            description=task_data["description"],
            status=task_data["status"].value,
            priority=task_data["priority"].value,
            due_date=task_data["due_date"],
            tags=task_data["tags"],
            created_by=creator.id,
            assigned_to=assignee.id if assignee else None,
            created_at=now,
            updated_at=now,
        ))
        created += 1

    session.commit()
    print(f"\n[SUCCESS] Successfully created {created} demo tasks!")

def main():
    create_tables()

    session = SessionLocal()
    try:
        users = seed_demo_users(session)
        seed_demo_tasks(session, users)
    except Exception as e:
        print(f"[ERROR] Seeding failed: {e}")
        session.rollback()
        raise
    finally:
        session.close()

    print("\n🎉 Database seeded. Start the API with: python start_server.py")

if __name__ == "__main__":
    main()
