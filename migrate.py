import subprocess
import sys


def run_migration():
    """Bring the schema up to the latest Alembic revision"""
    try:
        result = subprocess.run(['alembic', 'upgrade', 'head'], capture_output=True, text=True)
        if result.returncode == 0:
            print("✅ Database migration completed successfully")
            return True
        print(f"❌ Migration failed: {result.stderr}")
        return False
    except OSError as e:
        print(f"❌ Could not run alembic: {e}")
        return False


if __name__ == "__main__":
    success = run_migration()
    sys.exit(0 if success else 1)
