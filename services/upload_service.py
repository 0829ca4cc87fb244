# services/upload_service.py
import base64
import binascii
import hashlib
import logging
import mimetypes
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from fastapi.concurrency import run_in_threadpool

from config import settings

logger = logging.getLogger(__name__)

_DATA_URI = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)


class UploadError(Exception):
    """The asset host refused or failed to store an image."""


@dataclass(frozen=True)
class DecodedImage:
    content_type: str
    data: bytes


def parse_data_uri(data_uri: Optional[str]) -> Optional[DecodedImage]:
    """
    Decode ``data:<mime>;base64,<payload>``.

    Anything that isn't a well-formed base64 data URI yields None, which
    callers treat as "no photo supplied".
    """
    if not data_uri or not data_uri.startswith("data:"):
        return None
    match = _DATA_URI.match(data_uri)
    if not match:
        return None
    try:
        data = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError):
        return None
    if not data:
        return None
    return DecodedImage(content_type=match.group(1), data=data)


def is_upload_configured() -> bool:
    return bool(settings.S3_BUCKET)


@lru_cache(maxsize=1)
def get_s3_client():
    return boto3.client(
        "s3",
        region_name=settings.S3_REGION,
        aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
        aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
    )


def build_object_key(image: DecodedImage) -> str:
    # Content-addressed: re-uploading the same photo reuses the same object
    digest = hashlib.sha256(image.data).hexdigest()
    extension = mimetypes.guess_extension(image.content_type) or ""
    prefix = settings.S3_PHOTO_PREFIX.strip("/")
    return f"{prefix}/{digest}{extension}" if prefix else f"{digest}{extension}"


def public_url(key: str) -> str:
    if settings.S3_PUBLIC_BASE_URL:
        return f"{settings.S3_PUBLIC_BASE_URL.rstrip('/')}/{key}"
    if settings.S3_REGION:
        return f"https://{settings.S3_BUCKET}.s3.{settings.S3_REGION}.amazonaws.com/{key}"
    return f"https://{settings.S3_BUCKET}.s3.amazonaws.com/{key}"


def _put_object(key: str, image: DecodedImage):
    get_s3_client().put_object(
        Bucket=settings.S3_BUCKET,
        Key=key,
        Body=image.data,
        ContentType=image.content_type,
    )


async def upload_image(image: DecodedImage) -> str:
    """Store the image on S3 and return its URL. Raises UploadError on failure."""
    if not is_upload_configured():
        raise UploadError("Upload service is not configured")

    key = build_object_key(image)
    try:
        await run_in_threadpool(_put_object, key, image)
    except (BotoCoreError, ClientError) as e:
        logger.warning(f"Photo upload to bucket '{settings.S3_BUCKET}' failed: {e}")
        raise UploadError(str(e)) from e

    logger.info(f"Uploaded photo {key} ({len(image.data)} bytes)")
    return public_url(key)
