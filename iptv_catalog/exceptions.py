"""
Error taxonomy for catalog loading.

Playlist-path errors are fatal to a load cycle. Guide-path errors are
absorbed by the loader and only suppress guide enrichment.
"""
from typing import Optional


class CatalogError(Exception):
    """Base class for catalog errors."""


class FetchError(CatalogError):
    """Network or HTTP failure while fetching a source document."""
    
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Fetch of {url} failed: {reason}")


class EmptyPlaylistError(CatalogError):
    """Playlist parsed to zero channels."""
    
    def __init__(self, message: str = "M3U playlist is empty or could not be parsed."):
        super().__init__(message)


class GuideParseError(CatalogError):
    """Guide document could not be parsed."""


class ConfigValidationError(CatalogError):
    """Source configuration rejected before saving."""
