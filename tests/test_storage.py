"""Cloudinary public id parsing and URL signing."""
import pytest

from healthmate.core.config import Settings
from healthmate.services.storage import StorageNotConfigured, extract_public_id, signed_raw_url


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://res.cloudinary.com/demo/raw/upload/v1712345678/healthmate_uploads/cbc.pdf", "healthmate_uploads/cbc"),
        ("https://res.cloudinary.com/demo/raw/upload/healthmate_uploads/cbc.pdf?_a=abc", "healthmate_uploads/cbc"),
        ("https://res.cloudinary.com/demo/image/upload/v1/scan.final.png#page", "scan.final"),
    ],
)
def test_extract_public_id(url, expected):
    assert extract_public_id(url) == expected


def test_extract_public_id_rejects_other_urls():
    with pytest.raises(ValueError):
        extract_public_id("https://example.com/files/cbc.pdf")


def test_signed_raw_url():
    config = Settings(cloudinary_cloud_name="demo", cloudinary_api_key="123", cloudinary_api_secret="shh")
    url = signed_raw_url("https://res.cloudinary.com/demo/raw/upload/v1712345678/healthmate_uploads/cbc.pdf", config)
    assert url.startswith("https://res.cloudinary.com/demo/raw/upload/")
    assert "/s--" in url
    assert url.endswith("/healthmate_uploads/cbc.pdf")


def test_signed_raw_url_requires_configuration():
    config = Settings(cloudinary_cloud_name="", cloudinary_api_secret="")
    with pytest.raises(StorageNotConfigured):
        signed_raw_url("https://res.cloudinary.com/demo/raw/upload/v1/cbc.pdf", config)


def test_non_cloudinary_url_is_not_a_configuration_error():
    config = Settings(cloudinary_cloud_name="demo", cloudinary_api_key="123", cloudinary_api_secret="shh")
    with pytest.raises(ValueError) as exc_info:
        signed_raw_url("https://example.com/files/cbc.pdf", config)
    assert not isinstance(exc_info.value, StorageNotConfigured)
