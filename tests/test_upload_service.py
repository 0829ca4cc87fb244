# tests/test_upload_service.py
import base64

import pytest
from botocore.exceptions import ClientError

from config import settings
from services import upload_service
from services.upload_service import DecodedImage, UploadError, build_object_key, parse_data_uri

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"
PNG_URI = "data:image/png;base64," + base64.b64encode(PNG_BYTES).decode()


def test_parse_data_uri():
    image = parse_data_uri(PNG_URI)
    assert image.content_type == "image/png"
    assert image.data == PNG_BYTES


@pytest.mark.parametrize("value", [
    None,
    "",
    "image/png;base64,AAAA",
    "data:image/png,AAAA",
    "data:image/png;base64,!!!not base64!!!",
])
def test_malformed_data_uri_means_no_photo(value):
    assert parse_data_uri(value) is None


def test_object_key_is_content_addressed(monkeypatch):
    monkeypatch.setattr(settings, "S3_PHOTO_PREFIX", "photos")
    image = DecodedImage(content_type="image/png", data=PNG_BYTES)
    key = build_object_key(image)
    assert key.startswith("photos/")
    assert key.endswith(".png")
    assert key == build_object_key(DecodedImage(content_type="image/png", data=PNG_BYTES))


async def test_upload_requires_configuration(monkeypatch):
    monkeypatch.setattr(settings, "S3_BUCKET", None)
    assert not upload_service.is_upload_configured()
    with pytest.raises(UploadError):
        await upload_service.upload_image(DecodedImage("image/png", PNG_BYTES))


class FakeS3:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def put_object(self, **kwargs):
        if self.error:
            raise self.error
        self.calls.append(kwargs)


async def test_upload_returns_public_url(monkeypatch):
    fake = FakeS3()
    monkeypatch.setattr(settings, "S3_BUCKET", "staff-photos")
    monkeypatch.setattr(settings, "S3_REGION", "eu-west-1")
    monkeypatch.setattr(settings, "S3_PUBLIC_BASE_URL", None)
    monkeypatch.setattr(upload_service, "get_s3_client", lambda: fake)

    url = await upload_service.upload_image(DecodedImage("image/png", PNG_BYTES))

    assert url.startswith("https://staff-photos.s3.eu-west-1.amazonaws.com/")
    assert fake.calls[0]["Bucket"] == "staff-photos"
    assert fake.calls[0]["ContentType"] == "image/png"
    assert fake.calls[0]["Body"] == PNG_BYTES


async def test_upload_failure_raises_upload_error(monkeypatch):
    error = ClientError({"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject")
    monkeypatch.setattr(settings, "S3_BUCKET", "staff-photos")
    monkeypatch.setattr(upload_service, "get_s3_client", lambda: FakeS3(error))

    with pytest.raises(UploadError) as exc_info:
        await upload_service.upload_image(DecodedImage("image/png", PNG_BYTES))
    assert "Access Denied" in str(exc_info.value)
