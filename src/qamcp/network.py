"""
NetworkRecorder
===============
Passively records every HTTP(S) response seen on the session page into an
append-only, arrival-ordered log that lives for the lifetime of the process.

Usage::

    recorder = NetworkRecorder()
    recorder.attach(page)
    await page.goto("https://example.com")

    recorder.dump()                  # every entry, oldest first
    recorder.filter_by_url("api/")   # case-sensitive URL substring match
"""

import bisect
import itertools
import json
import logging
import weakref
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from urllib.parse import urlsplit

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, Response

logger = logging.getLogger(__name__)

RECORDED_SCHEMES = frozenset({"http", "https"})

# JSONDecodeError and UnicodeDecodeError are both ValueErrors.
_DECODE_ERRORS = (PlaywrightError, ValueError)


class BodyKind(str, Enum):
    STRUCTURED = "structured"
    TEXT = "text"
    ABSENT = "absent"


@dataclass(frozen=True)
class DecodedBody:
    kind: BodyKind
    value: Any = None

    @classmethod
    def absent(cls) -> "DecodedBody":
        return cls(BodyKind.ABSENT)


async def decode_body(response: Response) -> DecodedBody:
    """Decode ``response`` as JSON, falling back to text, falling back to an absent body. Never raises."""
    try:
        return DecodedBody(BodyKind.STRUCTURED, await response.json())
    except _DECODE_ERRORS:
        pass
    try:
        return DecodedBody(BodyKind.TEXT, await response.text())
    except _DECODE_ERRORS as exc:
        logger.debug("No readable body for %s: %s", response.url, exc)
    return DecodedBody.absent()


def _isoformat(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class NetworkLogEntry:
    url: str
    status: int
    body: DecodedBody
    time: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status,
            "body": self.body.value,
            "time": _isoformat(self.time),
        }


def render_entries(entries: list[NetworkLogEntry]) -> str:
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


class NetworkRecorder:
    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._entries: list[NetworkLogEntry] = []
        self._arrivals: list[int] = []
        self._next_arrival = itertools.count()
        self._pages: "weakref.WeakSet[Page]" = weakref.WeakSet()

    def attach(self, page: Page) -> None:
        """Start recording responses on ``page``. Attaching the same page twice is a no-op."""
        if page in self._pages:
            return
        self._pages.add(page)
        page.on("response", self._handle_response)
        self.logger.debug("Recording responses on new page")

    def is_attached(self, page: Page) -> bool:
        return page in self._pages

    async def _handle_response(self, response: Response) -> None:
        url = response.url
        if urlsplit(url).scheme not in RECORDED_SCHEMES:
            return
        arrival = next(self._next_arrival)
        arrived = datetime.now(timezone.utc)
        body = await decode_body(response)
        entry = NetworkLogEntry(url=url, status=response.status, body=body, time=arrived)
        # Bodies finish in any order; slot each entry by when its response arrived.
        index = bisect.bisect(self._arrivals, arrival)
        self._arrivals.insert(index, arrival)
        self._entries.insert(index, entry)

    def dump(self) -> list[NetworkLogEntry]:
        """Return every captured entry, oldest first."""
        return list(self._entries)

    def filter_by_url(self, keyword: str) -> list[NetworkLogEntry]:
        """Return captured entries whose URL contains ``keyword`` (case-sensitive)."""
        return [entry for entry in self._entries if keyword in entry.url]

    def __len__(self) -> int:
        return len(self._entries)
