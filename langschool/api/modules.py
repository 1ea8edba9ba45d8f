from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Course, CourseModule, Lesson
from ..schemas.course import (
    ModuleCreate, ModuleUpdate, ModuleResponse,
    LessonCreate, LessonUpdate, LessonResponse
)
from ..schemas.content import MoveRequest, ReorderRequest
from ..core.ordering import move_item, next_order_index, apply_order, ordered, save_versioned
from ..core.updates import update_fields
from ..core.permissions import AuthContext, get_auth_context, require_admin

router = APIRouter(prefix="/api/courses/modules", tags=["course-modules"])


def get_module_or_404(db: Session, module_id: int) -> CourseModule:
    module = db.query(CourseModule).filter(CourseModule.id == module_id).first()
    if not module:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Module not found")
    return module


def get_lesson_or_404(db: Session, lesson_id: int) -> Lesson:
    lesson = db.query(Lesson).filter(Lesson.id == lesson_id).first()
    if not lesson:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Lesson not found")
    return lesson


# Modules endpoints
@router.get("")
def get_modules(
    course_id: Optional[int] = None,
    id: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context)
):
    if id is not None:
        return ModuleResponse.model_validate(get_module_or_404(db, id))
    if course_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing course_id parameter")
    return [ModuleResponse.model_validate(m) for m in ordered(db, CourseModule, course_id=course_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_module(payload: ModuleCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    if not db.query(Course).filter(Course.id == payload.course_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    db_module = CourseModule(
        **payload.model_dump(),
        order_index=next_order_index(db, CourseModule, course_id=payload.course_id),
    )
    db.add(db_module)
    db.commit()
    db.refresh(db_module)
    return ModuleResponse.model_validate(db_module)


@router.put("")
def update_module(
    id: int,
    payload: ModuleUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_module = get_module_or_404(db, id)
    update_fields(db_module, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_module, label="Module")
    return ModuleResponse.model_validate(db_module)


@router.delete("")
def delete_module(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Delete a module and its lessons"""
    db_module = get_module_or_404(db, id)
    db.delete(db_module)
    db.commit()
    return {"success": True}


@router.post("/move")
def move_module(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    modules = move_item(
        db, CourseModule, id, payload.direction, payload.version,
        scope_fields=("course_id",), label="Module",
    )
    return [ModuleResponse.model_validate(m) for m in modules]


@router.put("/reorder")
def reorder_modules(
    course_id: int,
    payload: ReorderRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    if not db.query(Course).filter(Course.id == course_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    foreign = [
        item.id for item in payload.items
        if not db.query(CourseModule).filter(CourseModule.id == item.id, CourseModule.course_id == course_id).first()
    ]
    if foreign:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Modules do not belong to this course")

    apply_order(db, CourseModule, [(item.id, item.order_index) for item in payload.items], label="Module")
    return {
        "message": "Module order updated successfully",
        "modules": [ModuleResponse.model_validate(m) for m in ordered(db, CourseModule, course_id=course_id)],
    }


# Lessons endpoints
@router.get("/lessons")
def get_lessons(
    module_id: Optional[int] = None,
    id: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context)
):
    if id is not None:
        return LessonResponse.model_validate(get_lesson_or_404(db, id))
    if module_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing module_id parameter")
    return [LessonResponse.model_validate(lesson) for lesson in ordered(db, Lesson, module_id=module_id)]


@router.post("/lessons", status_code=status.HTTP_201_CREATED)
def create_lesson(payload: LessonCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    get_module_or_404(db, payload.module_id)
    db_lesson = Lesson(
        **payload.model_dump(),
        order_index=next_order_index(db, Lesson, module_id=payload.module_id),
    )
    db.add(db_lesson)
    db.commit()
    db.refresh(db_lesson)
    return LessonResponse.model_validate(db_lesson)


@router.put("/lessons")
def update_lesson(
    id: int,
    payload: LessonUpdate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_lesson = get_lesson_or_404(db, id)
    update_fields(db_lesson, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_lesson, label="Lesson")
    return LessonResponse.model_validate(db_lesson)


@router.delete("/lessons")
def delete_lesson(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_lesson = get_lesson_or_404(db, id)
    db.delete(db_lesson)
    db.commit()
    return {"success": True}


@router.post("/lessons/move")
def move_lesson(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    lessons = move_item(
        db, Lesson, id, payload.direction, payload.version,
        scope_fields=("module_id",), label="Lesson",
    )
    return [LessonResponse.model_validate(lesson) for lesson in lessons]
