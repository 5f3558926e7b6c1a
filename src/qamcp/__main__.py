"""
CLI entry point for the QA MCP server.

Usage:
    python -m qamcp
    qa-mcp-server

Configuration comes from ``QA_MCP_*`` environment variables (see
``BrowserConfig.from_env``). Logs go to stderr; stdout carries the MCP stream.
"""

import asyncio
import logging
import os
import sys

from .browser_config import BrowserConfig
from .server import serve

logger = logging.getLogger("qamcp")


def configure_logging(level: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel((level or os.environ.get("QA_MCP_LOG_LEVEL", "INFO")).upper())


def main() -> None:
    configure_logging()
    try:
        config = BrowserConfig.from_env()
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
