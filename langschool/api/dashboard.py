import logging
from datetime import datetime
from typing import Optional, Tuple

from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import User, Course, Enrollment, Role
from ..core.permissions import AuthContext, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def month_bounds(now: datetime) -> Tuple[datetime, datetime]:
    """Start of the previous month and start of the current month"""
    current = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if current.month == 1:
        previous = current.replace(year=current.year - 1, month=12)
    else:
        previous = current.replace(month=current.month - 1)
    return previous, current


def growth_percent(current, previous) -> float:
    if not previous:
        return 0
    return round((current - previous) / previous * 100, 1)


def _count_between(query, column, start: datetime, end: Optional[datetime] = None) -> int:
    query = query.filter(column >= start)
    if end is not None:
        query = query.filter(column < end)
    return query.count()


def _revenue_between(db: Session, start: datetime, end: Optional[datetime] = None) -> float:
    query = db.query(func.coalesce(func.sum(Course.price), 0)).select_from(Enrollment).join(Course)
    query = query.filter(Enrollment.enrolled_at >= start)
    if end is not None:
        query = query.filter(Enrollment.enrolled_at < end)
    return float(query.scalar() or 0)


def dashboard_stats(db: Session, now: datetime) -> dict:
    """Headline numbers for the admin dashboard, with growth measured against the month before `now`"""
    previous_start, current_start = month_bounds(now)

    users = db.query(User)
    new_users = _count_between(users, User.created_at, current_start)
    new_users_last = _count_between(users, User.created_at, previous_start, current_start)

    courses = db.query(Course)
    new_courses = _count_between(courses, Course.created_at, current_start)
    new_courses_last = _count_between(courses, Course.created_at, previous_start, current_start)

    students = db.query(User).filter(User.role == Role.STUDENT)
    new_students = _count_between(students, User.created_at, current_start)
    new_students_last = _count_between(students, User.created_at, previous_start, current_start)

    revenue = _revenue_between(db, current_start)
    revenue_last = _revenue_between(db, previous_start, current_start)

    latest_users = db.query(User).order_by(User.created_at.desc(), User.id.desc()).limit(5).all()
    latest_courses = db.query(Course).order_by(Course.created_at.desc(), Course.id.desc()).limit(5).all()

    return {
        "total_users": users.count(),
        "active_courses": courses.filter(Course.is_active.is_(True)).count(),
        "new_students": new_students,
        "revenue": revenue,
        "user_growth_percent": growth_percent(new_users, new_users_last),
        "course_growth_percent": growth_percent(new_courses, new_courses_last),
        "student_growth_percent": growth_percent(new_students, new_students_last),
        "revenue_growth_percent": growth_percent(revenue, revenue_last),
        "latest_users": [
            {"id": u.id, "name": u.name, "email": u.email, "role": u.role, "created_at": u.created_at}
            for u in latest_users
        ],
        "latest_courses": [
            {
                "id": c.id,
                "title": c.title,
                "title_fa": c.title_fa,
                "level": c.level,
                "teacher_id": c.teacher_id,
                "teacher_name": c.teacher.user.name if c.teacher and c.teacher.user else None,
                "enrollment_count": c.enrollment_count,
                "created_at": c.created_at,
            }
            for c in latest_courses
        ],
    }


@router.get("/stats")
def get_dashboard_stats(db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    return dashboard_stats(db, datetime.utcnow())
