"""Role and profile lifecycle.

``User.role`` and the matching Admin/Teacher/Student row change together, and
only through the functions here. Callers own the transaction.
"""
import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from ..core.security import get_password_hash
from ..models import (
    User, Role, Admin, Teacher, Student, Course, Post, HeroSlide, FeatureItem, Statistic, Charter
)

logger = logging.getLogger(__name__)

PROFILE_MODELS = {Role.ADMIN: Admin, Role.TEACHER: Teacher, Role.STUDENT: Student}
PROFILE_ATTRS = {Role.ADMIN: "admin_profile", Role.TEACHER: "teacher_profile", Role.STUDENT: "student_profile"}
PROFILE_FIELDS = {
    Role.ADMIN: (),
    Role.TEACHER: ("bio", "bio_fa", "specialties", "photo"),
    Role.STUDENT: ("phone", "photo"),
}

# Tables whose rows remember which admin created them
ADMIN_OWNED = (Course, Post, HeroSlide, FeatureItem, Statistic, Charter)


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def admin_count(db: Session) -> int:
    return db.query(Admin).count()


def _create_profile(db: Session, user: User, fields: dict):
    allowed = PROFILE_FIELDS[user.role]
    data = {key: value for key, value in fields.items() if key in allowed and value is not None}
    if user.role == Role.TEACHER:
        data.setdefault("bio", "")
    profile = PROFILE_MODELS[user.role](**data)
    setattr(user, PROFILE_ATTRS[user.role], profile)
    db.add(profile)
    return profile


def create_user_with_profile(db: Session, name: str, email: str, password: str,
                             role: str = Role.STUDENT, **profile_fields) -> User:
    """Create a user together with the profile its role needs."""
    if role not in Role.ALL:
        raise bad_request("Invalid role")
    email = normalize_email(email)
    if db.query(User).filter(User.email == email).first():
        raise bad_request("User with this email already exists")

    user = User(name=name.strip(), email=email, password_hash=get_password_hash(password), role=role)
    db.add(user)
    _create_profile(db, user, profile_fields)
    db.flush()
    logger.info("Created %s user %s", role, user.id)
    return user


def ensure_can_leave_role(db: Session, user: User):
    """Refuse to drop a profile that other rows still depend on."""
    if user.role == Role.ADMIN and user.admin_profile is not None and admin_count(db) <= 1:
        raise bad_request("Cannot change the role of the only admin user.")
    if user.role == Role.TEACHER and user.teacher_profile is not None and user.teacher_profile.courses:
        raise bad_request(
            "Cannot change role: Teacher has associated courses. "
            "Please reassign or delete the courses first."
        )
    if user.role == Role.STUDENT and user.student_profile is not None and user.student_profile.enrollments:
        raise bad_request(
            "Cannot change role: Student has enrollments. "
            "Please unenroll the student from courses first."
        )


def change_role(db: Session, user: User, new_role: str, **profile_fields):
    """Move a user to ``new_role``, swapping the old profile for a new one.

    Calling it with the user's current role only creates the profile if it is
    missing. Returns the profile for ``new_role``.
    """
    if new_role not in Role.ALL:
        raise bad_request("Invalid role")
    if new_role == user.role and user.profile is not None:
        return user.profile

    if new_role != user.role:
        ensure_can_leave_role(db, user)
        _drop_dependents(db, user)
        if user.role in PROFILE_ATTRS:
            setattr(user, PROFILE_ATTRS[user.role], None)
        # deletes must reach the database before the new profile row
        db.flush()
        logger.info("User %s role %s -> %s", user.id, user.role, new_role)
        user.role = new_role

    profile = _create_profile(db, user, profile_fields)
    db.flush()
    return profile


def _release_admin_content(db: Session, admin: Admin):
    for model in ADMIN_OWNED:
        db.query(model).filter(model.admin_id == admin.id).update(
            {model.admin_id: None}, synchronize_session=False
        )


def _drop_dependents(db: Session, user: User):
    """Remove rows hanging off the current profile so it can be deleted."""
    if user.role == Role.TEACHER and user.teacher_profile is not None:
        teacher = user.teacher_profile
        for assignment in list(teacher.assignments):
            db.delete(assignment)
        db.flush()
        db.expire(teacher, ["assignments"])
    elif user.role == Role.STUDENT and user.student_profile is not None:
        student = user.student_profile
        for submission in list(student.submissions):
            db.delete(submission)
        for enrollment in list(student.enrollments):
            db.delete(enrollment)
        db.flush()
        db.expire(student, ["submissions", "enrollments"])
    elif user.role == Role.ADMIN and user.admin_profile is not None:
        _release_admin_content(db, user.admin_profile)


def delete_user(db: Session, user: User, acting_user_id: int):
    """Delete a user, its profile and the rows that only make sense with it."""
    if user.role == Role.ADMIN and admin_count(db) <= 1:
        raise bad_request("Cannot delete the only admin user. Create another admin first.")
    if user.id == acting_user_id:
        raise bad_request("You cannot delete your own account")

    if user.role == Role.TEACHER and user.teacher_profile is not None:
        teacher = user.teacher_profile
        if teacher.courses:
            raise bad_request(
                "Cannot delete user: Teacher has associated courses. "
                "Please reassign or delete the courses first."
            )

    _drop_dependents(db, user)
    db.delete(user)
    db.flush()
    logger.info("Deleted %s user %s", user.role, user.id)
