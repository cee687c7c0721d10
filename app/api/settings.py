"""Institute settings singleton and logo upload."""
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.api.deps import AdminOnly, CurrentUser, store_errors
from app.models.settings import InstituteSettingsUpdate
from app.services.institute import get_or_create_settings, serialize_settings
from app.services.s3 import InvalidLogo, delete_from_s3, upload_logo, validate_logo

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def get_settings(user: CurrentUser):
    with store_errors("load settings"):
        settings = await get_or_create_settings()
    return serialize_settings(settings)


@router.put("/")
async def update_settings(data: InstituteSettingsUpdate, admin: AdminOnly):
    with store_errors("load settings"):
        settings = await get_or_create_settings()
    update_data = data.model_dump(exclude_unset=True)
    if "institute_name" in update_data and not (update_data["institute_name"] or "").strip():
        raise HTTPException(status_code=400, detail="institute_name cannot be empty")
    for key, value in update_data.items():
        if value is not None:
            setattr(settings, key, value)
    with store_errors("save settings"):
        await settings.save()
    return serialize_settings(settings)


@router.post("/logo")
async def upload_settings_logo(admin: AdminOnly, file: UploadFile = File(...)):
    """Replace the institute logo (image/*, at most 5MB)."""
    content = await file.read()
    try:
        validate_logo(file.content_type, len(content))
    except InvalidLogo as e:
        raise HTTPException(status_code=400, detail=str(e))
    with store_errors("load settings"):
        settings = await get_or_create_settings()
    old_key = settings.logo_key
    with store_errors("upload logo"):
        url, key = await upload_logo(content, file.filename, file.content_type)
    settings.logo_url = url
    settings.logo_key = key
    try:
        with store_errors("save settings"):
            await settings.save()
    except HTTPException:
        # The new object is unreferenced if the settings write failed
        await delete_from_s3(key)
        raise
    if old_key:
        await delete_from_s3(old_key)
    logger.info(f"Logo replaced by {admin.id}: {key}")
    return {"logo_url": settings.logo_url}


@router.delete("/logo")
async def remove_settings_logo(admin: AdminOnly):
    with store_errors("load settings"):
        settings = await get_or_create_settings()
    if not settings.logo_key:
        raise HTTPException(status_code=404, detail="No logo set")
    with store_errors("remove logo"):
        await delete_from_s3(settings.logo_key)
        settings.logo_url = ""
        settings.logo_key = ""
        await settings.save()
    return {"logo_url": ""}
