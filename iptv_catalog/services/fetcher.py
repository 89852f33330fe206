"""
Fetcher Service.
Retrieves playlist and guide documents over HTTP.
"""
import httpx
import logging
from typing import Optional

from iptv_catalog.config import get_settings
from iptv_catalog.exceptions import FetchError

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetch text documents by URL."""
    
    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout or get_settings().fetch_timeout_seconds
        self.transport = transport
    
    async def fetch_text(self, url: str) -> str:
        """
        Fetch a URL and return its body as text.
        
        Raises:
            FetchError: On transport failure or a non-success status
        """
        logger.info(f"Fetching {url}")
        
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FetchError(url, f"{status} {e.response.reason_phrase}", status_code=status) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, str(e) or type(e).__name__) from e
        
        logger.info(f"Fetched {len(response.content)} bytes from {url}")
        return response.text
