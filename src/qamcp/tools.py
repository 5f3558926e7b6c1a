"""
ToolDispatcher
==============
The fixed registry of QA tools exposed over MCP.

Every call is validated against the tool's pydantic input model before a
session is touched, then runs against the page returned by
``SessionManager.acquire()`` and yields exactly one text content block.
Negative outcomes (navigation failed, element or text not found) are plain
text results, not errors.

Usage::

    dispatcher = ToolDispatcher(SessionManager(config, recorder), recorder)
    content = await dispatcher.dispatch("navigate", {"url": "https://example.com"})
    content[0].text  # "✅ Visited https://example.com"
"""

import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from mcp.types import TextContent
from playwright.async_api import Error as PlaywrightError
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ToolInputError, UnknownToolError
from .matcher import ElementMatcher
from .network import NetworkRecorder, render_entries
from .session import SessionManager


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)


class NavigateInput(ToolInput):
    url: str


class KeywordInput(ToolInput):
    keyword: str


class FillFormInput(ToolInput):
    keyword: str
    value: str


class AssertTextInput(ToolInput):
    text: str


Handler = Callable[[Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    title: str
    description: str
    input_model: type[ToolInput]
    handler: Handler

    def input_schema(self) -> dict[str, Any]:
        return self.input_model.model_json_schema()


class ToolDispatcher:
    def __init__(self, sessions: SessionManager, recorder: NetworkRecorder | None = None):
        self.sessions = sessions
        self.recorder = recorder or sessions.recorder
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.tools: Mapping[str, ToolSpec] = self._build_registry(
            [
                ToolSpec(
                    "navigate",
                    "Visit a webpage",
                    "Navigate the browser page to a URL and wait for the network to go idle.",
                    NavigateInput,
                    self._navigate,
                ),
                ToolSpec(
                    "list_elements",
                    "List clickable and input elements",
                    "List links, buttons, inputs and textareas on the current page in document order.",
                    ToolInput,
                    self._list_elements,
                ),
                ToolSpec(
                    "click_element",
                    "Click element by text or type",
                    "Click the first link or button whose text contains the keyword or whose type equals it.",
                    KeywordInput,
                    self._click_element,
                ),
                ToolSpec(
                    "fill_form",
                    "Fill input by placeholder or label",
                    "Find an input by placeholder or label text, clear it and type the value.",
                    FillFormInput,
                    self._fill_form,
                ),
                ToolSpec(
                    "assert_text",
                    "Assert page contains text",
                    "Check whether the rendered page markup contains the text (case-sensitive).",
                    AssertTextInput,
                    self._assert_text,
                ),
                ToolSpec(
                    "get_network_logs",
                    "Get captured network logs",
                    "Return every HTTP(S) response captured so far, oldest first.",
                    ToolInput,
                    self._get_network_logs,
                ),
                ToolSpec(
                    "check_network_request",
                    "Check network request",
                    "Check whether any captured request URL contains the keyword; returns the full log if so.",
                    KeywordInput,
                    self._check_network_request,
                ),
            ]
        )

    @staticmethod
    def _build_registry(specs: list[ToolSpec]) -> Mapping[str, ToolSpec]:
        registry: dict[str, ToolSpec] = {}
        for spec in specs:
            if spec.name in registry:
                raise ValueError(f"Duplicate tool name: {spec.name}")
            registry[spec.name] = spec
        return MappingProxyType(registry)

    @property
    def specs(self) -> list[ToolSpec]:
        return list(self.tools.values())

    async def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> list[TextContent]:
        """Validate ``arguments`` and run tool ``name``. Raises before any session work if validation fails."""
        spec = self.tools.get(name)
        if spec is None:
            raise UnknownToolError(name)
        try:
            params = spec.input_model.model_validate(arguments or {})
        except ValidationError as exc:
            raise ToolInputError(name, _summarize(exc)) from exc
        self.logger.info("Calling tool %s", name)
        text = await spec.handler(params)
        return [TextContent(type="text", text=text)]

    # ── Handlers ─────────────────────────────────────────────────────────────

    async def _navigate(self, params: NavigateInput) -> str:
        page = await self.sessions.acquire()
        config = self.sessions.config
        try:
            await page.goto(params.url, wait_until=config.wait_until, timeout=config.navigation_timeout_ms)
        except PlaywrightError as exc:
            self.logger.warning("Navigation to %s failed: %s", params.url, exc.message)
            return f"❌ Visit failed: {exc.message}"
        return f"✅ Visited {params.url}"

    async def _list_elements(self, _params: ToolInput) -> str:
        page = await self.sessions.acquire()
        elements = await ElementMatcher(page).list_elements()
        return json.dumps([element.to_dict() for element in elements], indent=2, ensure_ascii=False)

    async def _click_element(self, params: KeywordInput) -> str:
        page = await self.sessions.acquire()
        element = await ElementMatcher(page).find_clickable(params.keyword)
        if element is None:
            return f"❌ Not Found: {params.keyword}"
        try:
            # Synthetic click in page context, no actionability checks.
            await element.evaluate("(el) => el.click()")
        finally:
            await element.dispose()
        return f"✅ Clicked {params.keyword}"

    async def _fill_form(self, params: FillFormInput) -> str:
        page = await self.sessions.acquire()
        element = await ElementMatcher(page).find_input(params.keyword)
        if element is None:
            return f"❌ Input not found: {params.keyword}"
        try:
            await element.select_text()
            await element.press("Backspace")
            await element.type(params.value)
        finally:
            await element.dispose()
        return f"✍️ Typed into {params.keyword}"

    async def _assert_text(self, params: AssertTextInput) -> str:
        page = await self.sessions.acquire()
        markup = await page.content()
        return f"Found: {params.text}" if params.text in markup else f"Not Found: {params.text}"

    async def _get_network_logs(self, _params: ToolInput) -> str:
        return render_entries(self.recorder.dump())

    async def _check_network_request(self, params: KeywordInput) -> str:
        # A match returns the whole log, not just the matching entries.
        if self.recorder.filter_by_url(params.keyword):
            return render_entries(self.recorder.dump())
        return f"No request found for {params.keyword}"


def _summarize(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}" for error in exc.errors()
    )
