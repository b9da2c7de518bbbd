"""
Single-shot HTTP download of release archives.

The response body is streamed to disk in chunks so large archives never
sit in memory. A failed request is reported once; there is no retry.
"""

import logging
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from tofurunner import __version__
from tofurunner.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

USER_AGENT = f"tofu-runner/{__version__}"
CHUNK_SIZE = 8192


def download_file(
    url: str,
    destination: Path,
    session: Optional[requests.Session] = None,
) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file
        session: Optional requests session (a plain requests.get is used if None)

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the server answers with a status outside 200-299
            or the request cannot be completed
        ValueError: If URL or destination is invalid
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if destination is None:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Downloading from {url}")

    http = session or requests
    try:
        response = http.get(
            url,
            headers={"User-Agent": USER_AGENT},
            stream=True,
            allow_redirects=True,
        )
    except RequestException as e:
        raise DownloadError(url, reason=str(e)) from e

    with response:
        if not 200 <= response.status_code < 300:
            raise DownloadError(url, status_code=response.status_code)

        try:
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except RequestException as e:
            raise DownloadError(url, reason=str(e)) from e

    logger.debug(f"Download complete: {destination}")
    return destination


__all__ = ["USER_AGENT", "download_file"]
