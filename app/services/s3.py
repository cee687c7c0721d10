"""AWS S3: institute logo images."""
import asyncio
import logging
import time

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import settings

logger = logging.getLogger(__name__)

_s3 = None


class InvalidLogo(ValueError):
    pass


def get_s3():
    global _s3
    if _s3 is None:
        _s3 = boto3.client(
            "s3",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id or None,
            aws_secret_access_key=settings.aws_secret_access_key or None,
        )
    return _s3


def validate_logo(content_type: str | None, size: int, max_bytes: int = settings.logo_max_bytes) -> None:
    """Logos must be images no larger than ``max_bytes``."""
    if not content_type or not content_type.startswith("image/"):
        raise InvalidLogo("Please upload an image file")
    if size > max_bytes:
        raise InvalidLogo(f"Image size should be less than {max_bytes // (1024 * 1024)}MB")


def logo_key(filename: str | None) -> str:
    name = (filename or "logo").replace("/", "_")
    return f"logos/{int(time.time() * 1000)}_{name}"


def _put_object_sync(body: bytes, key: str, content_type: str) -> None:
    get_s3().put_object(
        Bucket=settings.s3_bucket_logos,
        Key=key,
        Body=body,
        ContentType=content_type,
    )


async def upload_logo(body: bytes, filename: str | None, content_type: str) -> tuple[str, str]:
    """Upload logo image; return (public_url, s3_key)."""
    key = logo_key(filename)
    bucket = settings.s3_bucket_logos
    await asyncio.to_thread(_put_object_sync, body, key, content_type)
    url = f"https://{bucket}.s3.{settings.aws_region}.amazonaws.com/{key}"
    return url, key


async def delete_from_s3(key: str, bucket: str = settings.s3_bucket_logos) -> None:
    """Delete object from S3. A missing object is not an error."""
    try:
        await asyncio.to_thread(get_s3().delete_object, Bucket=bucket, Key=key)
    except (ClientError, BotoCoreError) as e:
        logger.warning(f"Failed to delete s3://{bucket}/{key}: {e}")
