"""qamcp — browser QA tools served over the Model Context Protocol."""

__version__ = "0.4.0"

from .browser import Browser  # noqa: E402
from .browser_config import BrowserConfig  # noqa: E402
from .browser_type import BrowserType  # noqa: E402
from .errors import QaMcpError, ToolInputError, UnknownToolError  # noqa: E402
from .matcher import ElementDescriptor, ElementMatcher  # noqa: E402
from .network import BodyKind, DecodedBody, NetworkLogEntry, NetworkRecorder  # noqa: E402
from .session import Session, SessionManager  # noqa: E402
from .tools import ToolDispatcher, ToolSpec  # noqa: E402

__all__ = [
    "__version__",
    "Browser",
    "BrowserConfig",
    "BrowserType",
    "BodyKind",
    "DecodedBody",
    "ElementDescriptor",
    "ElementMatcher",
    "NetworkLogEntry",
    "NetworkRecorder",
    "QaMcpError",
    "Session",
    "SessionManager",
    "ToolDispatcher",
    "ToolInputError",
    "ToolSpec",
    "UnknownToolError",
]
