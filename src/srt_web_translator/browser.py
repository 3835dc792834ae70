"""
Headless browser control for verifying and extracting the translated page.
"""
from typing import Callable, List, Optional, Union
from functools import partial
from pathlib import Path
import asyncio

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .errors import BrowserError, VerificationTimeoutError
from .markup import ORIGINAL_TEXT_CLASS, RUN_ID_SELECTOR, extract_entries
from .quality import DEFAULT_MAX_LINE_CHARS, rewrap_text
from .srt_io import SubtitleEntry

TRANSLATED_PAGE_NAME = "translated.html"

# Removal is repeated because taking out one element can expose others
SANITIZE_SCRIPT = """
(originalClass) => {
  const removeAll = (collect) => {
    let found = collect();
    while (found.length > 0) {
      for (const element of Array.from(found)) {
        element.remove();
      }
      found = collect();
    }
  };
  removeAll(() => document.getElementsByTagName("script"));
  removeAll(() => document.getElementsByTagName("iframe"));
  removeAll(() => document.getElementsByClassName(originalClass));
}
"""


def _milliseconds(seconds: Optional[float]) -> Optional[float]:
    return None if seconds is None else seconds * 1000


class BrowserSession:
    """One headless browser with a single open page

    Use as an async context manager; the browser is closed on exit. A new
    session is opened for every step, sessions are never shared.
    """

    def __init__(
        self,
        headless: bool = True,
        browser_name: str = "chromium",
        timeout: float = 60.0,
    ):
        """Initialize the session

        Args:
            headless: Run the browser without a window
            browser_name: Playwright browser type (chromium, firefox, webkit)
            timeout: Default timeout in seconds for navigation and waits
        """
        self.headless = headless
        self.browser_name = browser_name
        self.timeout = timeout
        self._playwright = None
        self._browser = None
        self.page = None

    async def __aenter__(self) -> "BrowserSession":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def open(self) -> None:
        try:
            self._playwright = await async_playwright().start()
            browser_type = getattr(self._playwright, self.browser_name)
            self._browser = await browser_type.launch(headless=self.headless)
            self.page = await self._browser.new_page()
        except PlaywrightError as e:
            await self.close()
            raise BrowserError(f"Could not launch {self.browser_name}: {e}") from e
        self.page.set_default_timeout(self.timeout * 1000)

    async def close(self) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self.page = None

    async def _guarded(self, action: str, operation):
        try:
            return await operation
        except PlaywrightError as e:
            raise BrowserError(f"Could not {action} on {self.page.url}: {e}") from e

    async def navigate(self, url: str) -> None:
        try:
            await self.page.goto(url)
        except PlaywrightError as e:
            raise BrowserError(f"Could not open {url}: {e}") from e

    async def reload(self) -> None:
        await self._guarded("reload", self.page.reload())

    async def wait_for_network_idle(self, timeout: Optional[float] = None) -> None:
        await self._guarded(
            "wait for network idle",
            self.page.wait_for_load_state("networkidle", timeout=_milliseconds(timeout)),
        )

    async def wait_for_selector(self, selector: str, timeout: Optional[float] = None) -> None:
        await self._guarded(
            f"find {selector}",
            self.page.wait_for_selector(selector, state="attached", timeout=_milliseconds(timeout)),
        )

    async def read_text(self, selector: str) -> str:
        return await self._guarded(f"read {selector}", self.page.inner_text(selector))

    async def viewport_height(self) -> int:
        return await self._guarded("measure the viewport", self.page.evaluate("() => window.innerHeight"))

    async def scroll_height(self) -> int:
        return await self._guarded("measure the page", self.page.evaluate("() => document.body.scrollHeight"))

    async def scroll_to(self, y: int) -> None:
        await self._guarded(f"scroll to {y}", self.page.evaluate("(y) => window.scrollTo(0, y)", y))

    async def sanitize(self) -> None:
        await self._guarded("sanitize the page", self.page.evaluate(SANITIZE_SCRIPT, ORIGINAL_TEXT_CLASS))

    async def content(self) -> str:
        return await self._guarded("read the page", self.page.content())


async def verify_live(
    session,
    url: str,
    run_id: str,
    poll_interval: float = 5.0,
    max_wait: float = 900.0,
    on_attempt: Optional[Callable[[int, str], None]] = None,
) -> int:
    """Poll a page until its run id element shows run_id

    Args:
        session: Open browser session
        url: Published page URL
        run_id: Expected run identifier
        poll_interval: Seconds to wait before reloading after a mismatch
        max_wait: Seconds after which polling gives up
        on_attempt: Called with (attempt, seen_run_id) after every mismatch

    Returns:
        Number of attempts it took

    Raises:
        VerificationTimeoutError: If the run id did not match within max_wait
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + max_wait

    await session.navigate(url)
    attempt = 1
    while True:
        # Waits never run past the deadline
        remaining = max(deadline - loop.time(), 0.001)
        try:
            await session.wait_for_network_idle(timeout=remaining)
            remaining = max(deadline - loop.time(), 0.001)
            await session.wait_for_selector(RUN_ID_SELECTOR, timeout=remaining)
            seen = (await session.read_text(RUN_ID_SELECTOR)).strip()
        except BrowserError:
            # Page not deployed yet
            seen = ""
        if seen == run_id:
            return attempt

        if on_attempt is not None:
            on_attempt(attempt, seen)
        if loop.time() + poll_interval > deadline:
            raise VerificationTimeoutError(
                f"Run id {run_id} not live on {url} after {attempt} attempts (last seen: {seen or 'nothing'})"
            )

        await asyncio.sleep(poll_interval)
        await session.reload()
        attempt += 1


async def scroll_page(
    session,
    pause: float = 0.05,
    on_progress: Optional[Callable[[float], None]] = None,
) -> List[int]:
    """Scroll from top to bottom one viewport at a time

    The translation page only translates what has been scrolled into view.

    Returns:
        The scroll offsets visited
    """
    window_height = max(int(await session.viewport_height()), 1)
    scroll_height = int(await session.scroll_height())

    offsets = list(range(0, scroll_height + 1, window_height))
    for position, offset in enumerate(offsets, start=1):
        await session.scroll_to(offset)
        await asyncio.sleep(pause)
        if on_progress is not None:
            on_progress(min(100.0, position * window_height / max(scroll_height, 1) * 100))

    return offsets


async def extract_translated(
    session,
    url: str,
    diagnostics_path: Optional[Union[str, Path]] = None,
    scroll_pause: float = 0.05,
    wrap_threshold: int = DEFAULT_MAX_LINE_CHARS,
    on_progress: Optional[Callable[[float], None]] = None,
) -> List[SubtitleEntry]:
    """Load the translated mirror and read the entries back

    Args:
        session: Open browser session
        url: Translated mirror URL
        diagnostics_path: Where to save the sanitized page (optional)
        scroll_pause: Seconds to pause after each scroll step
        wrap_threshold: Length above which translated text is wrapped
        on_progress: Called with the scroll percentage

    Returns:
        Translated entries in page order
    """
    await session.navigate(url)
    await session.wait_for_network_idle()
    await session.wait_for_selector(RUN_ID_SELECTOR)

    await scroll_page(session, pause=scroll_pause, on_progress=on_progress)
    await session.sanitize()

    html = await session.content()
    if diagnostics_path is not None:
        diagnostics_path = Path(diagnostics_path)
        diagnostics_path.parent.mkdir(parents=True, exist_ok=True)
        diagnostics_path.write_text(html, encoding="utf-8")

    return extract_entries(html, wrap=partial(rewrap_text, max_chars=wrap_threshold))
