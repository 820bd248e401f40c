from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from storefront.database import get_db
from storefront.errors import NotFoundError
from storefront.services.auth import get_current_admin
from storefront.services.settings_store import SettingsService, WHATSAPP_NUMBER
from storefront.models.user import User
from storefront.schemas.setting import SettingUpsert, SettingResponse

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=list[SettingResponse])
async def list_settings(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return SettingsService.list_settings(db)


@router.put("", response_model=SettingResponse)
async def upsert_setting(
    data: SettingUpsert,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    return SettingsService.upsert_setting(db, data.key, data.value, data.description)


@router.get("/whatsapp", response_model=Optional[str])
async def get_whatsapp_number(db: Session = Depends(get_db)):
    return SettingsService.get_value(db, WHATSAPP_NUMBER)


@router.get("/contacts", response_model=dict[str, Optional[str]])
async def get_contacts(db: Session = Depends(get_db)):
    return SettingsService.get_public_contacts(db)


@router.get("/{key}", response_model=SettingResponse)
async def get_setting(
    key: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db)
):
    setting = SettingsService.get_setting(db, key)
    if not setting:
        raise NotFoundError("Setting")
    return setting
