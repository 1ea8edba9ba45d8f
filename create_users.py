import os
import sys

from langschool.database import SessionLocal, transaction
from langschool.models import User, Role
from langschool.services.roles import create_user_with_profile


def create_initial_admin():
    """Seed the first admin account so the dashboard can be reached.

    Credentials come from ADMIN_EMAIL / ADMIN_PASSWORD / ADMIN_NAME. Nothing
    is created when an admin already exists.
    """
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    name = os.getenv("ADMIN_NAME", "Administrator")
    if not email or not password:
        print("❌ ADMIN_EMAIL and ADMIN_PASSWORD must be set")
        return False

    db = SessionLocal()
    try:
        admins = db.query(User).filter(User.role == Role.ADMIN).count()
        if admins > 0:
            print(f"✅ Database already has {admins} admin user(s)")
            return True

        with transaction(db):
            user = create_user_with_profile(db, name, email, password, role=Role.ADMIN)
        print(f"✅ Created admin user: {user.email}")
        return True
    finally:
        db.close()


if __name__ == "__main__":
    success = create_initial_admin()
    sys.exit(0 if success else 1)
