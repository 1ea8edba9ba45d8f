#!/usr/bin/env python3
"""
Startup script for container deployment.
Runs migrations and seeds the first admin before starting the API.
"""

import os
import sys
import subprocess


def run_command(command, description):
    """Run a command and report how it went"""
    print(f"🔄 {description}...")
    try:
        result = subprocess.run(command, check=True, capture_output=True, text=True)
        print(f"✅ {description} completed successfully")
        if result.stdout:
            print(result.stdout)
        return True
    except subprocess.CalledProcessError as e:
        print(f"❌ {description} failed: {e}")
        if e.stderr:
            print(f"Error: {e.stderr}")
        return False


def main():
    print("🚀 Starting Language School API...")

    if not run_command([sys.executable, "migrate.py"], "Database migration"):
        sys.exit(1)

    if os.getenv("ADMIN_EMAIL"):
        if not run_command([sys.executable, "create_users.py"], "Initial admin setup"):
            print("⚠️  Admin setup failed, but continuing...")
    else:
        print("ℹ️  ADMIN_EMAIL not set, skipping admin setup")

    port = os.getenv("PORT", "8000")
    print(f"🌐 Starting server on port {port}...")
    try:
        subprocess.run(
            [sys.executable, "-m", "uvicorn", "langschool.main:app", "--host", "0.0.0.0", "--port", port],
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print(f"❌ Failed to start server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
