"""Builders shared by the mock-based tests."""

from unittest.mock import AsyncMock, MagicMock


def make_mock_response(url: str, status: int = 200, json_body=None, text_body: str = "", json_error=None, text_error=None):
    """Build a mock Playwright Response. ``json_error``/``text_error`` make the decoders raise."""
    response = MagicMock()
    response.url = url
    response.status = status
    response.json = AsyncMock(return_value=json_body, side_effect=json_error)
    response.text = AsyncMock(return_value=text_body, side_effect=text_error)
    return response


def make_mock_page():
    """A mock open Playwright Page, for tests that need more than one."""
    page = AsyncMock()
    page.on = MagicMock()
    page.is_closed = MagicMock(return_value=False)
    return page
