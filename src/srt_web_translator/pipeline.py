"""
End-to-end translation of one subtitle file through a web translation page.
"""
from typing import Callable, List, Optional, Union
from enum import Enum
from pathlib import Path
import asyncio
import uuid

from .browser import TRANSLATED_PAGE_NAME, BrowserSession, extract_translated, verify_live
from .config import TranslatorConfig
from .errors import ConfigurationError
from .events import EventCallback, EventEmitter, Phase
from .markup import render_markup
from .publish import PublishTarget, create_publish_target
from .srt_io import SubtitleEntry, read_srt, write_srt


class PipelineState(str, Enum):
    INIT = "init"
    PUBLISHED = "published"
    VERIFIED = "verified"
    TRANSLATED = "translated"
    WRITTEN = "written"
    CLEANED = "cleaned"
    DONE = "done"


def new_run_id() -> str:
    return str(uuid.uuid4())


class TranslationPipeline:
    """Publishes a subtitle file, waits for it to go live and reads back its translation

    Steps run strictly in order: publish, verify (when the target supports
    it), translate, write, optional cleanup. The input is read and rendered
    at construction, so a bad input fails before anything is started.
    """

    def __init__(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        config: Optional[TranslatorConfig] = None,
        target: Optional[PublishTarget] = None,
        remove_input: bool = False,
        on_event: Optional[EventCallback] = None,
        session_factory: Optional[Callable[[], BrowserSession]] = None,
    ):
        """Initialize the pipeline

        Args:
            input_path: SRT file to translate
            output_path: Where to write the translated SRT
            config: Run configuration (default: TranslatorConfig())
            target: Publish target (default: chosen from config.deployment)
            remove_input: Delete the input file after a successful write
            on_event: Receives progress events
            session_factory: Creates browser sessions (default: BrowserSession)

        Raises:
            InputFileError: If the input file cannot be read
            ConfigurationError: If no translated page URL is configured
        """
        self.config = config or TranslatorConfig()
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.remove_input = remove_input
        self.events = EventEmitter(on_event)
        self.session_factory = session_factory or (
            lambda: BrowserSession(headless=self.config.headless)
        )

        self.run_id = new_run_id()
        self.state = PipelineState.INIT
        self.translated_entries: List[SubtitleEntry] = []

        self.events.start(Phase.READ, str(self.input_path))
        self.entries = read_srt(self.input_path)
        self.markup = render_markup(self.entries, self.run_id)
        self.events.complete(Phase.READ, f"{len(self.entries)} entries")

        self.target = target or create_publish_target(self.config)
        if not self.target.translated_url():
            raise ConfigurationError(
                f"No translated page URL configured for {self.config.deployment} deployment"
            )

    @property
    def diagnostics_path(self) -> Path:
        return self.config.dist_dir / TRANSLATED_PAGE_NAME

    async def run(self) -> Path:
        """Run every step and return the output path"""
        try:
            await self.publish()
            await self.verify()
            await self.translate()
        finally:
            await asyncio.to_thread(self.target.teardown)

        self.write()
        self.cleanup()
        self.state = PipelineState.DONE
        return self.output_path

    async def publish(self) -> None:
        self.events.start(Phase.PUBLISH, self.target.resolve_url())
        # Runs a deploy command or waits for server startup
        result = await asyncio.to_thread(self.target.publish, self.markup)
        if result.ok:
            self.events.complete(Phase.PUBLISH, result.url)
        else:
            # Not fatal, the translated mirror is still read
            self.events.error(Phase.PUBLISH, f"deployment failed, see {result.log_path}")
        self.state = PipelineState.PUBLISHED

    async def verify(self) -> None:
        if not self.target.verifies_liveness:
            self.state = PipelineState.VERIFIED
            return

        url = self.target.resolve_url()
        self.events.start(Phase.VERIFY, f"waiting for run id on {url}")

        def on_attempt(attempt: int, seen: str) -> None:
            self.events.update(Phase.VERIFY, f"retrying ({attempt} so far)")

        async with self.session_factory() as session:
            attempts = await verify_live(
                session,
                url,
                self.run_id,
                poll_interval=self.config.poll_interval,
                max_wait=self.config.max_wait,
                on_attempt=on_attempt,
            )
        self.events.complete(Phase.VERIFY, f"live after {attempts} attempt(s)")
        self.state = PipelineState.VERIFIED

    async def translate(self) -> None:
        url = self.target.translated_url()
        self.events.start(Phase.TRANSLATE, url)

        def on_progress(percent: float) -> None:
            self.events.update(Phase.TRANSLATE, "scrolling translation page", progress=percent)

        async with self.session_factory() as session:
            self.translated_entries = await extract_translated(
                session,
                url,
                diagnostics_path=self.diagnostics_path,
                scroll_pause=self.config.scroll_pause,
                wrap_threshold=self.config.wrap_threshold,
                on_progress=on_progress,
            )
        self.events.complete(Phase.TRANSLATE, f"{len(self.translated_entries)} entries")
        self.state = PipelineState.TRANSLATED

    def write(self) -> None:
        self.events.start(Phase.WRITE, str(self.output_path))
        write_srt(self.translated_entries, self.output_path)
        self.events.complete(Phase.WRITE, str(self.output_path))
        self.state = PipelineState.WRITTEN

    def cleanup(self) -> None:
        if not self.remove_input:
            return
        if self.input_path.resolve() == self.output_path.resolve():
            # Translated in place, the input is the output now
            return
        self.events.start(Phase.CLEANUP, str(self.input_path))
        self.input_path.unlink(missing_ok=True)
        self.events.complete(Phase.CLEANUP, str(self.input_path))
        self.state = PipelineState.CLEANED


def translate_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[TranslatorConfig] = None,
    remove_input: bool = False,
    on_event: Optional[EventCallback] = None,
) -> Path:
    """Translate one SRT file, blocking until done

    Returns:
        Path to the written translation
    """
    pipeline = TranslationPipeline(
        input_path,
        output_path,
        config=config,
        remove_input=remove_input,
        on_event=on_event,
    )
    return asyncio.run(pipeline.run())
