import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from ..database import get_db
from ..models import GlobalSetting
from ..schemas.content import SettingUpdate
from ..core.headers import no_cache
from ..core.permissions import AuthContext, require_admin

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings/global", tags=["settings"])


@router.get("", dependencies=[Depends(no_cache)])
def get_global_settings(db: Session = Depends(get_db)):
    """All settings as a flat key/value object"""
    return {s.key: s.value for s in db.query(GlobalSetting).order_by(GlobalSetting.key).all()}


@router.post("")
def upsert_global_setting(payload: SettingUpdate, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    if not payload.key or payload.value is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields: key and value")

    setting = db.query(GlobalSetting).filter(GlobalSetting.key == payload.key).first()
    if setting is None:
        setting = GlobalSetting(key=payload.key)
        db.add(setting)
    setting.value = payload.value
    setting.description = payload.description
    setting.updated_by = auth.email
    db.commit()

    logger.info("Global setting %s updated by %s", payload.key, auth.email)
    return {"success": True, "key": setting.key, "value": setting.value}


@router.delete("")
def delete_global_setting(key: Optional[str] = None, db: Session = Depends(get_db), auth: AuthContext = Depends(require_admin)):
    if not key:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing key parameter")
    db.query(GlobalSetting).filter(GlobalSetting.key == key).delete(synchronize_session=False)
    db.commit()
    return {"success": True}
