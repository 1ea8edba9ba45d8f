import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import AboutPage
from ..schemas.content import AboutPageUpdate, AboutPageResponse
from ..core.headers import no_cache
from ..core.permissions import AuthContext, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/about", tags=["about"])


def latest_about_page(db: Session):
    return db.query(AboutPage).order_by(AboutPage.created_at.desc(), AboutPage.id.desc()).first()


@router.get("", dependencies=[Depends(no_cache)])
def get_about_page(db: Session = Depends(get_db)):
    about = latest_about_page(db)
    if not about:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="About page data not found")
    return AboutPageResponse.model_validate(about)


@router.post("")
def save_about_page(payload: AboutPageUpdate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Create the About page, or overwrite the current one"""
    about = latest_about_page(db)
    if about is None:
        about = AboutPage()
        db.add(about)
    for field, value in payload.model_dump().items():
        setattr(about, field, value)
    about.admin_id = auth.profile_id
    db.commit()
    db.refresh(about)

    logger.info("About page saved by admin %s", auth.profile_id)
    return AboutPageResponse.model_validate(about)


@router.delete("")
def delete_about_page(db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    """Remove every stored version; the site falls back to its built-in text"""
    db.query(AboutPage).delete(synchronize_session=False)
    db.commit()
    return {"success": True}
