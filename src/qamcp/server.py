"""
MCP binding
===========
Exposes the ``ToolDispatcher`` registry as an MCP server over stdio.

Entry points::

    python -m qamcp          # stdio transport
    create_server(...)       # programmatic use (tests)
"""

import logging

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .browser_config import BrowserConfig
from .network import NetworkRecorder
from .session import SessionManager
from .tools import ToolDispatcher

SERVER_NAME = "qa-mcp-server"

logger = logging.getLogger(__name__)


def create_server(dispatcher: ToolDispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=spec.name,
                title=spec.title,
                description=spec.description,
                inputSchema=spec.input_schema(),
            )
            for spec in dispatcher.specs
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        # Raised errors are turned into isError tool results by the MCP server.
        return await dispatcher.dispatch(name, arguments)

    return server


def build_dispatcher(config: BrowserConfig) -> ToolDispatcher:
    recorder = NetworkRecorder()
    return ToolDispatcher(SessionManager(config, recorder), recorder)


async def serve(config: BrowserConfig) -> None:
    """Run the QA tool server on stdin/stdout until the client disconnects."""
    dispatcher = build_dispatcher(config)
    if config.launch_on_start:
        await dispatcher.sessions.acquire()
    server = create_server(dispatcher)
    logger.info("Serving %d tools over stdio", len(dispatcher.tools))
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
