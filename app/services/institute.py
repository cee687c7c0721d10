from app.config import settings as app_settings
from app.models.settings import InstituteSettings


async def get_or_create_settings() -> InstituteSettings:
    """
    Return the settings singleton.
    The document is created with the configured defaults the first time it
    is needed, so readers never see a missing settings record.
    """
    existing = await InstituteSettings.find_one()
    if existing:
        return existing
    created = InstituteSettings(
        institute_name=app_settings.institute_name,
        current_session=app_settings.current_session,
    )
    await created.insert()
    return created


def serialize_settings(s: InstituteSettings) -> dict:
    return s.model_dump(exclude={"id", "revision_id", "logo_key"})
