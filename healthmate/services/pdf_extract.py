"""Download a stored report and pull its text out."""
import logging
from io import BytesIO
from typing import Callable

import httpx
from pypdf import PdfReader

from healthmate.core.config import Settings
from healthmate.services.errors import DecodeError, FetchError
from healthmate.services.storage import StorageNotConfigured, signed_raw_url

logger = logging.getLogger(__name__)

MAX_PDF_PAGES = 50


def extract_text_from_pdf(file_content: bytes) -> str:
    """Extract text from PDF bytes, first 50 pages at most. Raises DecodeError on unreadable content."""
    try:
        reader = PdfReader(BytesIO(file_content))
        parts = []
        for i, page in enumerate(reader.pages):
            if i >= MAX_PDF_PAGES:
                break
            text = page.extract_text()
            if text:
                parts.append(text.strip())
    except Exception as e:
        raise DecodeError(f"Could not read PDF: {e}") from e
    return "\n\n".join(parts).strip()


class TextExtractor:
    """
    Fetches a report by URL and returns its plain text.

    The signed Cloudinary URL is tried first (raw uploads may not be public); on a
    non-success status the original URL is fetched once more before giving up.
    """

    def __init__(
        self,
        config: Settings,
        http: httpx.AsyncClient,
        signer: Callable[[str, Settings], str] = signed_raw_url,
    ):
        self.config = config
        self.http = http
        self.signer = signer

    def _resolve_url(self, url: str) -> str:
        try:
            return self.signer(url, self.config)
        except StorageNotConfigured:
            # reported once at startup
            logger.debug("Cloudinary not configured, fetching the stored URL")
            return url
        except Exception as e:
            logger.warning("Cloudinary signing failed, falling back to direct URL: %s", e)
            return url

    async def _get(self, url: str) -> httpx.Response:
        try:
            return await self.http.get(url, follow_redirects=True)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch PDF: {e}") from e

    async def fetch(self, url: str) -> bytes:
        target = self._resolve_url(url)
        logger.info("Fetching report PDF: %s", url)
        response = await self._get(target)
        if not response.is_success:
            logger.warning("Signed fetch failed (status=%s), retrying with the stored URL", response.status_code)
            response = await self._get(url)
            if not response.is_success:
                raise FetchError(
                    f"Failed to fetch PDF: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )
        return response.content

    async def extract(self, url: str) -> str:
        content = await self.fetch(url)
        return extract_text_from_pdf(content)
