"""Shared fixtures: an in-memory browser session and sample subtitle files."""

from __future__ import annotations

from pathlib import Path

import pytest

from srt_web_translator.config import TranslatorConfig
from srt_web_translator.errors import BrowserError
from srt_web_translator.publish import PublishResult, PublishTarget


SAMPLE_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:02,500\n"
    "Hello there,\n"
    "how are you?\n"
    "\n"
    "2\n"
    "00:00:03,000 --> 00:00:04,000\n"
    "Fine.\n"
    "\n"
)


class FakeSession:
    """Stands in for BrowserSession; serves a scripted sequence of pages.

    ``pages`` maps a URL to a list of HTML snapshots; every reload advances
    to the next snapshot (the last one repeats).
    """

    def __init__(self, pages: dict[str, list[str]], viewport: int = 500, height: int = 1200):
        self.pages = pages
        self.viewport = viewport
        self.height = height
        self.url: str | None = None
        self.loads = 0
        self.scrolled: list[int] = []
        self.sanitized = False
        self.closed = False
        self.timeouts: list[float | None] = []
        self.idle_failures = 0

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    def _current(self) -> str:
        snapshots = self.pages[self.url]
        return snapshots[min(self.loads, len(snapshots) - 1)]

    async def navigate(self, url: str) -> None:
        if url not in self.pages:
            raise BrowserError(f"Could not open {url}")
        self.url = url
        self.loads = 0

    async def reload(self) -> None:
        self.loads += 1

    async def wait_for_network_idle(self, timeout: float | None = None) -> None:
        self.timeouts.append(timeout)
        if self.idle_failures > 0:
            self.idle_failures -= 1
            raise BrowserError("Could not wait for network idle")

    async def wait_for_selector(self, selector: str, timeout: float | None = None) -> None:
        self.timeouts.append(timeout)
        assert selector == "#run-id"
        if 'id="run-id"' not in self._current():
            raise BrowserError(f"{selector} did not appear")

    async def read_text(self, selector: str) -> str:
        html = self._current()
        start = html.index('id="run-id">') + len('id="run-id">')
        return html[start:html.index("</div>", start)]

    async def viewport_height(self) -> int:
        return self.viewport

    async def scroll_height(self) -> int:
        return self.height

    async def scroll_to(self, y: int) -> None:
        self.scrolled.append(y)

    async def sanitize(self) -> None:
        # Leaves the markup untouched so extraction has to cope on its own
        self.sanitized = True

    async def content(self) -> str:
        return self._current()


class RecordingTarget(PublishTarget):
    """Publish target that keeps the published markup in memory."""

    def __init__(self, config: TranslatorConfig, verifies: bool = True, ok: bool = True):
        super().__init__(config)
        self.verifies_liveness = verifies
        self.ok = ok
        self.published: list[str] = []
        self.torn_down = False

    def publish(self, markup: str) -> PublishResult:
        self.published.append(markup)
        return PublishResult(ok=self.ok, url=self.resolve_url())

    def resolve_url(self) -> str:
        return "http://published.test/index.html"

    def translated_url(self) -> str:
        return "http://translated.test/index.html"

    def teardown(self) -> None:
        self.torn_down = True


@pytest.fixture()
def sample_srt(tmp_path: Path) -> Path:
    path = tmp_path / "episode.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture()
def config(tmp_path: Path) -> TranslatorConfig:
    return TranslatorConfig(
        translated_local_url="http://translated.test/index.html",
        dist_dir=tmp_path / "dist",
        poll_interval=0,
        max_wait=5,
        scroll_pause=0,
        server_startup_delay=0,
    )
