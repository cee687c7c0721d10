"""Institute settings: display name, contact info, logo and feature toggles."""
from typing import Optional

from beanie import Document
from pydantic import BaseModel


class InstituteSettings(Document):
    """Single-doc settings, created with defaults on first access."""

    institute_name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    current_session: str = ""
    logo_url: str = ""
    logo_key: str = ""  # S3 key of the current logo, used to delete it on replace

    email_notifications: bool = True
    payment_reminders: bool = True
    attendance_reports: bool = True
    dark_mode: bool = False
    automatic_backups: bool = True

    class Settings:
        name = "settings"
        use_state_management = True


class InstituteSettingsUpdate(BaseModel):
    institute_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    current_session: Optional[str] = None
    email_notifications: Optional[bool] = None
    payment_reminders: Optional[bool] = None
    attendance_reports: Optional[bool] = None
    dark_mode: Optional[bool] = None
    automatic_backups: Optional[bool] = None
