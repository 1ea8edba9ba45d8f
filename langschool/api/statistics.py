from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Statistic
from ..schemas.content import StatisticCreate, StatisticUpdate, StatisticResponse, MoveRequest, ReorderRequest
from ..core.headers import no_cache
from ..core.ordering import move_item, next_order_index, ordered, apply_order, stale_error, save_versioned
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin

router = APIRouter(prefix="/api/statistics", tags=["statistics"])


def get_statistic_or_404(db: Session, statistic_id: int) -> Statistic:
    statistic = db.query(Statistic).filter(Statistic.id == statistic_id).first()
    if not statistic:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Statistic not found")
    return statistic


@router.get("", dependencies=[Depends(no_cache)])
def get_statistics(id: Optional[int] = None, active_only: bool = False, db: Session = Depends(get_db)):
    if id is not None:
        return StatisticResponse.model_validate(get_statistic_or_404(db, id))
    items = ordered(db, Statistic, is_active=True) if active_only else ordered(db, Statistic)
    return [StatisticResponse.model_validate(s) for s in items]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_statistic(payload: StatisticCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_statistic = Statistic(
        **payload.model_dump(),
        order_index=next_order_index(db, Statistic),
        admin_id=auth.profile_id,
    )
    db.add(db_statistic)
    db.commit()
    db.refresh(db_statistic)
    return StatisticResponse.model_validate(db_statistic)


@router.patch("/order")
def reorder_statistics(payload: ReorderRequest, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Set the order of many statistics in one transaction"""
    apply_order(db, Statistic, [(item.id, item.order_index) for item in payload.items], label="Statistic")
    return {"message": "Order updated successfully"}


@router.patch("")
def update_statistic(
    id: int,
    payload: StatisticUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_statistic = get_statistic_or_404(db, id)
    if version is not None and version != db_statistic.version:
        raise stale_error(db_statistic.id)
    update_fields(db_statistic, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_statistic, label="Statistic")
    return StatisticResponse.model_validate(db_statistic)


@router.delete("")
def delete_statistic(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_statistic = get_statistic_or_404(db, id)
    db.delete(db_statistic)
    db.commit()
    return {"success": True}


@router.post("/move")
def move_statistic(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    items = move_item(db, Statistic, id, payload.direction, payload.version, label="Statistic")
    return [StatisticResponse.model_validate(s) for s in items]
