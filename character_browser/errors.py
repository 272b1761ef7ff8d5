# character_browser/errors.py

from typing import Optional

# Shown to the user whenever the primary character list cannot be loaded.
FETCH_ERROR_MESSAGE = "Could not load characters."


class BrowserError(Exception):
    """Base class for all character browser errors."""
    pass


class NetworkError(BrowserError):
    """Error related to network operations or a non-200 response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, url: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ParseError(BrowserError):
    """Error related to parsing responses."""
    pass


class ConfigError(BrowserError):
    """Error related to configuration."""
    pass
