"""
BrowserConfig
=============
Configuration dataclass for ``Browser`` and the session it backs.

The configuration is fixed for the lifetime of the process: every relaunch of
the session browser reuses it. ``from_env()`` builds it from ``QA_MCP_*``
environment variables.

STEALTH-only fields: ``channel``
"""

import os
from dataclasses import dataclass, field
from typing import Any

from .browser_type import BrowserType

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class BrowserConfig:
    type: BrowserType = BrowserType.DEFAULT
    headless: bool = False
    channel: str = "chrome"
    viewport: tuple[int, int] = (1280, 800)
    user_agent: str | None = None
    locale: str = "en-US"
    timezone: str | None = None
    args: list[str] = field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
        ]
    )
    navigation_timeout_ms: int = 30_000
    wait_until: str = "networkidle"
    launch_on_start: bool = False

    @classmethod
    def from_env(cls) -> "BrowserConfig":
        defaults = cls()
        raw_type = os.environ.get("QA_MCP_BROWSER_TYPE", "").strip().lower()
        try:
            browser_type = BrowserType(raw_type) if raw_type else defaults.type
        except ValueError:
            raise ValueError(f"Unsupported QA_MCP_BROWSER_TYPE: {raw_type!r}") from None
        extra_args = [arg.strip() for arg in os.environ.get("QA_MCP_BROWSER_ARGS", "").split(",") if arg.strip()]
        return cls(
            type=browser_type,
            headless=_env_flag("QA_MCP_HEADLESS", defaults.headless),
            channel=os.environ.get("QA_MCP_CHANNEL", defaults.channel),
            args=defaults.args + extra_args,
            navigation_timeout_ms=int(os.environ.get("QA_MCP_NAV_TIMEOUT_MS", defaults.navigation_timeout_ms)),
            launch_on_start=_env_flag("QA_MCP_LAUNCH_ON_START", defaults.launch_on_start),
        )

    def context_options(self) -> dict[str, Any]:
        """Keyword arguments for ``Browser.new_context``."""
        width, height = self.viewport
        return {
            "viewport": {"width": width, "height": height},
            "user_agent": self.user_agent,
            "locale": self.locale,
            "timezone_id": self.timezone,
        }
