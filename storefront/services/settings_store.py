import logging
from typing import Optional
from sqlalchemy.orm import Session

from storefront.database import safe_read, commit
from storefront.models.setting import Setting

logger = logging.getLogger(__name__)

WHATSAPP_NUMBER = "whatsapp_number"
ADMIN_EMAIL = "admin_email"

SUPPORT_KEYS = (
    "support_email",
    "support_phone",
    "support_whatsapp",
    "support_facebook",
    "support_instagram",
    "support_twitter",
)

KNOWN_KEYS = {
    WHATSAPP_NUMBER: "Admin WhatsApp number for order notifications",
    ADMIN_EMAIL: "Admin email for order and booking confirmations",
    "support_email": "Customer support email",
    "support_phone": "Customer support phone number",
    "support_whatsapp": "Customer support WhatsApp number",
    "support_facebook": "Facebook page URL",
    "support_instagram": "Instagram profile URL",
    "support_twitter": "Twitter profile URL",
}


class SettingsService:
    @staticmethod
    @safe_read(lambda: None)
    def get_setting(db: Session, key: str) -> Optional[Setting]:
        return db.query(Setting).filter(Setting.key == key).first()

    @staticmethod
    def get_value(db: Session, key: str) -> Optional[str]:
        """Return the setting's value, treating blank values as unset."""
        setting = SettingsService.get_setting(db, key)
        if setting is None or not setting.value:
            return None
        return setting.value

    @staticmethod
    @safe_read(list)
    def list_settings(db: Session) -> list[Setting]:
        return db.query(Setting).order_by(Setting.key).all()

    @staticmethod
    def upsert_setting(
        db: Session,
        key: str,
        value: str,
        description: Optional[str] = None
    ) -> Setting:
        """Insert or overwrite a setting. Last write wins."""
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting is None:
            setting = Setting(key=key, value=value, description=description or KNOWN_KEYS.get(key))
            db.add(setting)
        else:
            setting.value = value
            if description is not None:
                setting.description = description
        commit(db)
        db.refresh(setting)
        logger.info(f"Setting {key} updated")
        return setting

    @staticmethod
    def get_public_contacts(db: Session) -> dict[str, Optional[str]]:
        """Support contact channels shown to shoppers."""
        values = {s.key: s.value for s in SettingsService.list_settings(db)}
        return {key: values.get(key) or None for key in SUPPORT_KEYS}
