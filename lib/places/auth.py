"""
Places API credentials.
"""

from dataclasses import dataclass, field
from typing import Dict

from .constants import AUTH_HEADER


@dataclass(frozen=True, slots=True)
class Token:
    """
    Opaque bearer credential for the places endpoints.

    The token value never appears in ``repr()`` and is only used to build
    request headers.
    """

    bearer: str = field(repr=False)
    """Bearer (app-only) access token"""

    def __post_init__(self) -> None:
        if not self.bearer or not self.bearer.strip():
            raise ValueError("Access token cannot be empty")

    def authHeaders(self) -> Dict[str, str]:
        """Get headers authenticating a request with this token."""
        return {AUTH_HEADER: f"Bearer {self.bearer.strip()}"}
