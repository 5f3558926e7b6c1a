class QaMcpError(Exception):
    """Base class for errors raised by qamcp itself."""


class UnknownToolError(QaMcpError, LookupError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolInputError(QaMcpError, ValueError):
    """Arguments of a tool call do not match its declared input shape."""

    def __init__(self, name: str, detail: str):
        super().__init__(f"Invalid arguments for {name}: {detail}")
        self.name = name
        self.detail = detail
