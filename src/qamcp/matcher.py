"""
ElementMatcher
==============
Heuristic lookup of interactive elements, evaluated inside the page's own
JavaScript context. Matching is first-match-wins in document order; free text
uses case-sensitive substring containment, the ``type`` property exact
equality. Ambiguity is never reported.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any

from playwright.async_api import ElementHandle, Page

logger = logging.getLogger(__name__)

LIST_ELEMENTS_JS = """
() => Array.from(document.querySelectorAll("a, button, input, textarea")).map((el) => ({
  tag: el.tagName.toLowerCase(),
  type: el.getAttribute("type") || null,
  placeholder: el.getAttribute("placeholder") || null,
  text: el.innerText || el.value || null,
}))
"""

FIND_CLICKABLE_JS = """
(keyword) => Array.from(document.querySelectorAll("a, button, input[type=submit]")).find(
  (el) => (el.innerText && el.innerText.includes(keyword)) || (el.type && el.type === keyword)
)
"""

FIND_INPUT_JS = """
(keyword) => Array.from(document.querySelectorAll("input, textarea")).find(
  (el) =>
    (el.placeholder && el.placeholder.includes(keyword)) ||
    (el.labels && el.labels.length > 0 && el.labels[0].innerText.includes(keyword))
)
"""


@dataclass(frozen=True)
class ElementDescriptor:
    """Read-only snapshot of one interactive element; not a handle into the page."""

    tag: str
    type: str | None = None
    placeholder: str | None = None
    text: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "ElementDescriptor":
        return cls(
            tag=raw["tag"],
            type=raw.get("type"),
            placeholder=raw.get("placeholder"),
            text=raw.get("text"),
        )

    def to_dict(self) -> dict[str, str | None]:
        return asdict(self)


class ElementMatcher:
    def __init__(self, page: Page):
        self.page = page

    async def list_elements(self) -> list[ElementDescriptor]:
        """Anchors, buttons, inputs and textareas in document order."""
        raw = await self.page.evaluate(LIST_ELEMENTS_JS)
        return [ElementDescriptor.from_dict(item) for item in raw]

    async def find_clickable(self, keyword: str) -> ElementHandle | None:
        """First anchor, button or submit input whose text contains ``keyword`` or whose type equals it."""
        return await self._find(FIND_CLICKABLE_JS, keyword)

    async def find_input(self, keyword: str) -> ElementHandle | None:
        """First input or textarea whose placeholder or first label text contains ``keyword``."""
        return await self._find(FIND_INPUT_JS, keyword)

    async def _find(self, script: str, keyword: str) -> ElementHandle | None:
        handle = await self.page.evaluate_handle(script, keyword)
        element = handle.as_element()
        if element is None:
            # ``undefined`` comes back as a plain JSHandle
            await handle.dispose()
            logger.debug("No element matched %r", keyword)
        return element
