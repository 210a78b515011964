"""Async HTTP download of Electron release archives."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Optional

import aiofiles
import aiohttp

from ..versions.models import get_zip_name

logger = logging.getLogger(__name__)


class ElectronDownloader:
    """Streams release zips from GitHub or a mirror into temp files."""

    DEFAULT_MIRROR = "https://github.com/electron/electron/releases/download/"

    def __init__(self, mirror: Optional[str] = None,
                 headers: Optional[Dict[str, str]] = None,
                 timeout: Optional[aiohttp.ClientTimeout] = None,
                 chunk_size: int = 64 * 1024):
        mirror = mirror or os.environ.get("ELECTRON_MIRROR") or self.DEFAULT_MIRROR
        self.mirror = mirror if mirror.endswith("/") else mirror + "/"
        self.default_headers = headers or {}
        self.timeout = timeout or aiohttp.ClientTimeout(total=None, sock_connect=30, sock_read=60)
        self.chunk_size = chunk_size

    def get_url(self, version: str, platform: str, arch: str) -> str:
        return f"{self.mirror}v{version}/{get_zip_name(version, platform, arch)}"

    async def fetch(self, version: str, platform: str, arch: str,
                    on_progress: Optional[Callable[[float], None]] = None) -> Path:
        """Download one archive and return the temp file holding it."""
        url = self.get_url(version, platform, arch)
        fd, temp_name = tempfile.mkstemp(prefix=f"electron-v{version}-", suffix=".zip")
        os.close(fd)
        dest = Path(temp_name)
        logger.debug("Fetching %s into %s", url, dest)

        try:
            async with aiohttp.ClientSession(headers=self.default_headers,
                                             timeout=self.timeout) as session:
                async with session.get(url) as resp:
                    resp.raise_for_status()
                    total_size = int(resp.headers.get("Content-Length", 0))
                    downloaded = 0

                    async with aiofiles.open(dest, "wb") as f:
                        async for chunk in resp.content.iter_chunked(self.chunk_size):
                            await f.write(chunk)
                            downloaded += len(chunk)
                            if on_progress and total_size:
                                on_progress(downloaded * 100 / total_size)
        except BaseException:
            dest.unlink(missing_ok=True)
            raise

        if on_progress:
            on_progress(100)
        return dest
