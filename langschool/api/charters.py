import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import Charter
from ..schemas.content import CharterCreate, CharterUpdate, CharterResponse, MoveRequest
from ..core.headers import no_cache
from ..core.ordering import move_item, next_order_index, ordered, stale_error, save_versioned
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/charters", tags=["charters"])


def get_charter_or_404(db: Session, charter_id: int) -> Charter:
    charter = db.query(Charter).filter(Charter.id == charter_id).first()
    if not charter:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Charter not found")
    return charter


@router.get("", dependencies=[Depends(no_cache)])
def get_charters(id: Optional[int] = None, active_only: bool = False, db: Session = Depends(get_db)):
    if id is not None:
        return CharterResponse.model_validate(get_charter_or_404(db, id))
    items = ordered(db, Charter, is_active=True) if active_only else ordered(db, Charter)
    return [CharterResponse.model_validate(c) for c in items]


@router.get("/public", dependencies=[Depends(no_cache)])
def get_public_charters(db: Session = Depends(get_db)):
    """Active charters for the public site"""
    return [CharterResponse.model_validate(c) for c in ordered(db, Charter, is_active=True)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_charter(payload: CharterCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_charter = Charter(
        **payload.model_dump(),
        order_index=next_order_index(db, Charter),
        admin_id=auth.profile_id,
    )
    db.add(db_charter)
    db.commit()
    db.refresh(db_charter)
    logger.info("Charter %s created by admin %s", db_charter.id, auth.profile_id)
    return CharterResponse.model_validate(db_charter)


@router.put("")
def update_charter(
    id: int,
    payload: CharterUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_charter = get_charter_or_404(db, id)
    if version is not None and version != db_charter.version:
        raise stale_error(db_charter.id)
    update_fields(db_charter, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_charter, label="Charter")
    return CharterResponse.model_validate(db_charter)


@router.delete("")
def delete_charter(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_charter = get_charter_or_404(db, id)
    db.delete(db_charter)
    db.commit()
    return {"message": "Charter deleted successfully"}


@router.post("/move")
def move_charter(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    items = move_item(db, Charter, id, payload.direction, payload.version, label="Charter")
    return [CharterResponse.model_validate(c) for c in items]
