"""Manual display ordering for content lists.

Rows carry an ``order_index`` and a ``version`` column mapped as SQLAlchemy's
``version_id_col``, so two admins reordering the same list cannot silently
overwrite each other: the second write fails with a 409.
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from ..database import transaction
from .errors import ApiError

logger = logging.getLogger(__name__)

STALE_MESSAGE = "This item was changed by someone else. Reload and try again."
DIRECTIONS = ("up", "down")


def _scoped(db: Session, model, scope: dict):
    query = db.query(model)
    for field, value in scope.items():
        query = query.filter(getattr(model, field) == value)
    return query


def next_order_index(db: Session, model, **scope) -> int:
    """Index for a new row: one past the current maximum, 0 for an empty list."""
    query = db.query(func.max(model.order_index))
    for field, value in scope.items():
        query = query.filter(getattr(model, field) == value)
    current = query.scalar()
    return 0 if current is None else current + 1


def ordered(db: Session, model, **scope) -> List:
    return _scoped(db, model, scope).order_by(model.order_index.asc(), model.id.asc()).all()


def stale_error(item_id: Optional[int] = None) -> ApiError:
    return ApiError(
        status_code=status.HTTP_409_CONFLICT,
        detail=STALE_MESSAGE,
        extra={"id": item_id} if item_id is not None else None,
    )


def move_item(
    db: Session,
    model,
    item_id: int,
    direction: str,
    expected_version: Optional[int] = None,
    scope_fields: Sequence[str] = (),
    label: str = "Item",
) -> List:
    """Swap an item with its neighbour and return the reordered list.

    Moving the first item up or the last item down changes nothing.
    """
    if direction not in DIRECTIONS:
        raise HTTPException(status_code=400, detail="Direction must be 'up' or 'down'")

    item = db.query(model).filter(model.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    if expected_version is not None and expected_version != item.version:
        raise stale_error(item.id)

    scope = {field: getattr(item, field) for field in scope_fields}
    items = ordered(db, model, **scope)
    position = [row.id for row in items].index(item.id)
    target = position - 1 if direction == "up" else position + 1
    if target < 0 or target >= len(items):
        return items

    neighbour = items[target]
    items[position], items[target] = neighbour, item
    try:
        with transaction(db):
            if item.order_index != neighbour.order_index:
                item.order_index, neighbour.order_index = neighbour.order_index, item.order_index
            else:
                # tied indices: renumber the list in its new order
                for index, row in enumerate(items):
                    if row.order_index != index:
                        row.order_index = index
    except StaleDataError:
        logger.info("Concurrent reorder detected on %s %s", label, item.id)
        raise stale_error(item.id)

    return ordered(db, model, **scope)


def save_versioned(db: Session, item, label: str = "Item"):
    """Commit pending edits to a versioned row; a concurrent write is a 409."""
    item_id = item.id
    try:
        with transaction(db):
            db.flush()
    except StaleDataError:
        logger.info("Concurrent update detected on %s %s", label, item_id)
        raise stale_error(item_id)
    db.refresh(item)
    return item


def apply_order(db: Session, model, items: Iterable[Tuple[int, int]], label: str = "Item"):
    """Set many order indices at once. Unknown ids abort the whole batch."""
    try:
        with transaction(db):
            for item_id, order_index in items:
                row = db.query(model).filter(model.id == item_id).first()
                if not row:
                    raise HTTPException(status_code=404, detail=f"{label} {item_id} not found")
                row.order_index = order_index
    except StaleDataError:
        logger.info("Concurrent bulk reorder detected on %s", label)
        raise stale_error()
