"""Tests for the console rendering of pipeline events."""

from __future__ import annotations

from rich.console import Console

from srt_web_translator.events import EventEmitter, EventKind, Phase, PipelineEvent
from srt_web_translator.status import ConsoleReporter


def make_reporter(verbose: bool = False) -> tuple[ConsoleReporter, Console]:
    console = Console(record=True, width=120, color_system=None)
    return ConsoleReporter(console, verbose=verbose), console


def test_emitter_without_callback_is_silent() -> None:
    EventEmitter().complete(Phase.WRITE, "nothing listens")


def test_emitter_builds_events() -> None:
    received = []
    emitter = EventEmitter(received.append)

    emitter.update(Phase.TRANSLATE, "scrolling", progress=50.0)

    assert received == [PipelineEvent(Phase.TRANSLATE, EventKind.UPDATE, "scrolling", 50.0)]


def test_reporter_prints_phase_message_and_status() -> None:
    reporter, console = make_reporter()

    reporter(PipelineEvent(Phase.PUBLISH, EventKind.ERROR, "deployment failed, see [dist]/deployment.log"))
    reporter(PipelineEvent(Phase.WRITE, EventKind.COMPLETE, "out.srt"))

    text = console.export_text()
    assert "Publish deployment failed, see [dist]/deployment.log ✗ Error" in text
    assert "Write out.srt ✓ Done" in text


def test_reporter_throttles_progress_unless_verbose() -> None:
    reporter, console = make_reporter()
    for percent in (10.0, 20.0, 30.0, 100.0):
        reporter(PipelineEvent(Phase.TRANSLATE, EventKind.UPDATE, "scrolling", percent))

    assert console.export_text().count("scrolling") == 3

    verbose, verbose_console = make_reporter(verbose=True)
    for percent in (10.0, 20.0, 30.0, 100.0):
        verbose(PipelineEvent(Phase.TRANSLATE, EventKind.UPDATE, "scrolling", percent))

    assert verbose_console.export_text().count("scrolling") == 4
