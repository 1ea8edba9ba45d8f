from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import FeatureItem
from ..schemas.content import FeatureItemCreate, FeatureItemUpdate, FeatureItemResponse, MoveRequest
from ..core.headers import no_cache
from ..core.ordering import move_item, next_order_index, ordered, stale_error, save_versioned
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin

router = APIRouter(prefix="/api/features", tags=["features"])


def get_feature_or_404(db: Session, feature_id: int) -> FeatureItem:
    feature = db.query(FeatureItem).filter(FeatureItem.id == feature_id).first()
    if not feature:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feature item not found")
    return feature


@router.get("", dependencies=[Depends(no_cache)])
def get_feature_items(id: Optional[int] = None, active_only: bool = False, db: Session = Depends(get_db)):
    if id is not None:
        return FeatureItemResponse.model_validate(get_feature_or_404(db, id))
    items = ordered(db, FeatureItem, is_active=True) if active_only else ordered(db, FeatureItem)
    return [FeatureItemResponse.model_validate(f) for f in items]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_feature_item(payload: FeatureItemCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_feature = FeatureItem(
        **payload.model_dump(),
        order_index=next_order_index(db, FeatureItem),
        admin_id=auth.profile_id,
    )
    db.add(db_feature)
    db.commit()
    db.refresh(db_feature)
    return FeatureItemResponse.model_validate(db_feature)


@router.patch("")
def update_feature_item(
    id: int,
    payload: FeatureItemUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_feature = get_feature_or_404(db, id)
    if version is not None and version != db_feature.version:
        raise stale_error(db_feature.id)
    update_fields(db_feature, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_feature, label="Feature item")
    return FeatureItemResponse.model_validate(db_feature)


@router.delete("")
def delete_feature_item(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_feature = get_feature_or_404(db, id)
    db.delete(db_feature)
    db.commit()
    return {"success": True}


@router.post("/move")
def move_feature_item(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    items = move_item(db, FeatureItem, id, payload.direction, payload.version, label="Feature item")
    return [FeatureItemResponse.model_validate(f) for f in items]
