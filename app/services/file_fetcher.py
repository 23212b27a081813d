import logging

import httpx

from app.config import settings
from app.core.errors import FileDownloadFailed

logger = logging.getLogger(__name__)


def _http_client() -> httpx.Client:
    return httpx.Client(timeout=settings.request_timeout_seconds, follow_redirects=True)


def _too_large() -> FileDownloadFailed:
    return FileDownloadFailed(details=f"File too large. Max allowed is {settings.max_resume_download_mb}MB.")


def _read_limited(resp: httpx.Response, max_bytes: int) -> bytes:
    declared = resp.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise _too_large()
    chunks = []
    size = 0
    for chunk in resp.iter_bytes():
        size += len(chunk)
        # Stop reading as soon as the limit is passed.
        if size > max_bytes:
            raise _too_large()
        chunks.append(chunk)
    return b"".join(chunks)


def download_file(url: str) -> bytes:
    """Fetch the uploaded document. Single attempt; any failure is FileDownloadFailed."""
    max_bytes = settings.max_resume_download_mb * 1024 * 1024
    try:
        with _http_client() as client:
            with client.stream("GET", url) as resp:
                if not resp.is_success:
                    logger.warning("File download returned HTTP %d for %s", resp.status_code, url)
                    raise FileDownloadFailed(details=f"HTTP {resp.status_code}")
                content = _read_limited(resp, max_bytes)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("File download failed for %s: %s", url, e)
        raise FileDownloadFailed(details=str(e)) from e

    logger.info("Downloaded %d bytes from %s", len(content), url)
    return content
