from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import HeroSlide
from ..schemas.content import HeroSlideCreate, HeroSlideUpdate, HeroSlideResponse, MoveRequest
from ..core.headers import no_cache
from ..core.ordering import move_item, next_order_index, ordered, stale_error, save_versioned
from ..core.updates import update_fields
from ..core.permissions import AuthContext, require_admin

router = APIRouter(prefix="/api/hero", tags=["hero"])


def get_slide_or_404(db: Session, slide_id: int) -> HeroSlide:
    slide = db.query(HeroSlide).filter(HeroSlide.id == slide_id).first()
    if not slide:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Hero slide not found")
    return slide


@router.get("", dependencies=[Depends(no_cache)])
def get_hero_slides(id: Optional[int] = None, include_inactive: bool = False, db: Session = Depends(get_db)):
    """Active slides in display order"""
    if id is not None:
        return HeroSlideResponse.model_validate(get_slide_or_404(db, id))
    slides = ordered(db, HeroSlide) if include_inactive else ordered(db, HeroSlide, is_active=True)
    return [HeroSlideResponse.model_validate(s) for s in slides]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_hero_slide(payload: HeroSlideCreate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_slide = HeroSlide(
        **payload.model_dump(),
        order_index=next_order_index(db, HeroSlide),
        admin_id=auth.profile_id,
    )
    db.add(db_slide)
    db.commit()
    db.refresh(db_slide)
    return HeroSlideResponse.model_validate(db_slide)


@router.patch("")
def update_hero_slide(
    id: int,
    payload: HeroSlideUpdate,
    version: Optional[int] = None,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    db_slide = get_slide_or_404(db, id)
    if version is not None and version != db_slide.version:
        raise stale_error(db_slide.id)
    update_fields(db_slide, payload.model_dump(exclude_unset=True))
    save_versioned(db, db_slide, label="Hero slide")
    return HeroSlideResponse.model_validate(db_slide)


@router.delete("")
def delete_hero_slide(id: int, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    db_slide = get_slide_or_404(db, id)
    db.delete(db_slide)
    db.commit()
    return {"success": True}


@router.post("/move")
def move_hero_slide(
    id: int,
    payload: MoveRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin)
):
    """Swap a slide with its neighbour"""
    slides = move_item(db, HeroSlide, id, payload.direction, payload.version, label="Hero slide")
    return [HeroSlideResponse.model_validate(s) for s in slides]
