"""
Logo Cache — loads the report logo once and keeps it as a base64 data URL.

Part of the report_generator_service package.
"""

import base64
import logging
import mimetypes
from pathlib import Path
from typing import Optional

import httpx

from incubator.config import settings

logger = logging.getLogger(__name__)

TIMEOUT = 10.0


class LogoCache:
    """
    Cached logo data URL for embedding in reports.

    ``source`` is a file path or an http(s) URL. Failures return "" so the
    report renders without a logo; they are not cached, so the next call
    tries again.
    """

    def __init__(self, source: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.source = source if source is not None else settings.logo_source
        self._transport = transport
        self._data_url: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._data_url is not None

    async def get(self) -> str:
        """Return the logo as a data URL, loading it on first use."""
        if self._data_url is not None:
            return self._data_url
        if not self.source:
            return ""

        try:
            content, mime = await self._read()
        except (httpx.HTTPError, OSError) as e:
            logger.warning(f"Failed to load logo from {self.source}: {e}")
            return ""

        encoded = base64.b64encode(content).decode("ascii")
        self._data_url = f"data:{mime};base64,{encoded}"
        return self._data_url

    async def _read(self):
        if self.source.startswith(("http://", "https://")):
            async with httpx.AsyncClient(timeout=TIMEOUT, transport=self._transport) as client:
                response = await client.get(self.source)
                response.raise_for_status()
                mime = response.headers.get("content-type", "image/png").split(";")[0]
                return response.content, mime

        path = Path(self.source)
        mime = mimetypes.guess_type(path.name)[0] or "image/png"
        return path.read_bytes(), mime

    def clear(self):
        """Drop the cached logo (tests and brand reloads)."""
        self._data_url = None
