"""Cloudinary helpers: signed delivery URLs for stored report files."""
import re

import cloudinary.utils

from healthmate.core.config import Settings

# .../upload/v1712345678/healthmate_uploads/report.pdf?x=1 -> healthmate_uploads/report.pdf
_PUBLIC_ID_RE = re.compile(r"/upload/(?:v\d+/)?([^?#]+)")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def extract_public_id(url: str) -> str:
    """Cloudinary public id of an upload URL, without version segment and file extension."""
    match = _PUBLIC_ID_RE.search(url or "")
    if not match or not match.group(1):
        raise ValueError("Could not extract Cloudinary public ID from URL.")
    return _EXTENSION_RE.sub("", match.group(1))


class StorageNotConfigured(ValueError):
    """Cloudinary credentials are missing; stored URLs are used as they are."""


def signed_raw_url(url: str, config: Settings) -> str:
    """
    Signed, https URL for a raw (PDF) upload.
    Raises StorageNotConfigured when the account is not configured and ValueError when
    the URL is not a Cloudinary upload URL.
    """
    if not (config.cloudinary_cloud_name and config.cloudinary_api_secret):
        raise StorageNotConfigured("Cloudinary is not configured (CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_SECRET).")
    public_id = extract_public_id(url)
    signed, _ = cloudinary.utils.cloudinary_url(
        public_id,
        resource_type="raw",
        type="upload",
        sign_url=True,
        secure=True,
        format="pdf",
        cloud_name=config.cloudinary_cloud_name,
        api_key=config.cloudinary_api_key,
        api_secret=config.cloudinary_api_secret,
    )
    return signed
