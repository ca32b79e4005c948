# create_tables.py
import os

from taskflow.database import Base, engine, SessionLocal
from taskflow.models import User, Role, ADMINISTRATOR, REGULAR_USER
from taskflow.services.user_service import UserService
from taskflow.utils.security import hash_password

DEFAULT_ROLES = {
    ADMINISTRATOR: "Full access to all features and data",
    REGULAR_USER: "Standard user with limited access",
}

def create_tables(drop_existing: bool = False):
    """Create all tables"""
    try:
        if drop_existing:
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

        with SessionLocal() as db:
            seed_roles(db)
            create_default_admin(db)

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        raise

def seed_roles(db):
    """Create or refresh the built-in roles"""
    for name, description in DEFAULT_ROLES.items():
        role = db.query(Role).filter(Role.name == name).first()
        if role:
            role.description = description
        else:
            db.add(Role(name=name, description=description))
    db.commit()
    print(f"✅ Roles ready: {', '.join(DEFAULT_ROLES)}")

def create_default_admin(db):
    """Create a default admin user"""
    email = os.getenv("ADMIN_EMAIL", "admin@taskflow.io")
    password = os.getenv("ADMIN_PASSWORD", "admin12345")

    if db.query(User).filter(User.email == email).first():
        print("ℹ️  Admin user already exists")
        return

    admin = User(name="System Administrator", email=email, hashed_password=hash_password(password))
    db.add(admin)
    db.flush()
    UserService.assign_role(db, admin, ADMINISTRATOR)
    db.commit()

    print("✅ Default admin user created!")
    print(f"   Email: {email}")
    print(f"   Password: {password}")

if __name__ == "__main__":
    create_tables(drop_existing=os.getenv("DROP_EXISTING", "false").lower() == "true")
