"""
Pytest configuration and common fixtures for places client tests.

This module provides shared fixtures for scenario and CLI tests.
All fixtures follow camelCase naming convention.
"""

from typing import Callable, Generator
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from lib.places import Token

# ============================================================================
# Credentials
# ============================================================================


@pytest.fixture
def testToken() -> Token:
    """
    Provide bearer token for tests.

    Returns:
        Token: Token with ``test_token`` value
    """
    return Token(bearer="test_token")


# ============================================================================
# HTTP Mock Fixtures
# ============================================================================


@pytest.fixture
def mockHttpClient() -> Generator[MagicMock, None, None]:
    """
    Patch ``httpx.AsyncClient`` used by the places transport.

    Use ``respondWith`` fixture to set the response returned by the session.

    Yields:
        MagicMock: Patched AsyncClient class

    Example:
        async def testSearch(mockHttpClient, respondWith, testToken):
            send = respondWith(httpx.Response(200, json=searchPayload()))
            await searchQuery("x").call(testToken)
            send.assert_awaited_once()
    """
    with patch("httpx.AsyncClient") as client:
        client.return_value.__aexit__.return_value = False
        yield client


@pytest.fixture
def respondWith(mockHttpClient: MagicMock) -> Callable[[httpx.Response], AsyncMock]:
    """
    Get function setting HTTP response of the patched client.

    Returns:
        Callable: Function accepting ``httpx.Response`` and returning ``send`` mock
    """

    def _respondWith(response: httpx.Response) -> AsyncMock:
        send = AsyncMock(return_value=response)
        mockHttpClient.return_value.__aenter__.return_value.send = send
        return send

    return _respondWith


@pytest.fixture
def configFile(tmp_path) -> Callable[[str], str]:
    """
    Get function writing config.toml with given content into temporary directory.

    Returns:
        Callable: Function accepting TOML text and returning config file path
    """

    def _configFile(content: str) -> str:
        path = tmp_path / "config.toml"
        path.write_text(content)
        return str(path)

    return _configFile
