from enum import Enum


class BrowserType(str, Enum):
    """Browser launch strategy used for every (re)launch of the session browser."""

    DEFAULT = "default"  # Pure Playwright Chromium
    STEALTH = "stealth"  # Wrapped by playwright-stealth, launched on ``channel``
