"""
Exceptions raised by the starter service.

Service-layer errors carry the HTTP status the controllers answer with, so
the translation to the `{"status": "Failed", ...}` envelope stays in one place.
"""
from typing import List, Optional


class StarterError(Exception):
    """Base class for errors raised by this application"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(StarterError):
    status_code = 404


class ConflictError(StarterError):
    status_code = 409


class ConfigurationError(StarterError):
    """Required environment variables are missing or malformed"""

    def __init__(self, missing: Optional[List[str]] = None, invalid: Optional[List[str]] = None):
        self.missing = list(missing or [])
        self.invalid = list(invalid or [])
        parts = []
        if self.missing:
            parts.append(f"missing required environment variables: {', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid environment variables: {', '.join(self.invalid)}")
        super().__init__("; ".join(parts) or "invalid configuration")
