"""
Progress events emitted by the translation pipeline.
"""
from typing import Callable, Optional
from dataclasses import dataclass
from enum import Enum


class Phase(str, Enum):
    READ = "read"
    PUBLISH = "publish"
    VERIFY = "verify"
    TRANSLATE = "translate"
    WRITE = "write"
    CLEANUP = "cleanup"


class EventKind(str, Enum):
    START = "start"
    UPDATE = "update"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class PipelineEvent:
    """A single progress notification"""
    phase: Phase
    kind: EventKind
    message: str = ""
    progress: Optional[float] = None  # percent, for phases that can measure it


EventCallback = Callable[[PipelineEvent], None]


class EventEmitter:
    """Forwards events to an optional callback"""

    def __init__(self, callback: Optional[EventCallback] = None):
        self.callback = callback

    def emit(
        self,
        phase: Phase,
        kind: EventKind,
        message: str = "",
        progress: Optional[float] = None,
    ) -> None:
        if self.callback is not None:
            self.callback(PipelineEvent(phase, kind, message, progress))

    def start(self, phase: Phase, message: str = "") -> None:
        self.emit(phase, EventKind.START, message)

    def update(self, phase: Phase, message: str = "", progress: Optional[float] = None) -> None:
        self.emit(phase, EventKind.UPDATE, message, progress)

    def complete(self, phase: Phase, message: str = "") -> None:
        self.emit(phase, EventKind.COMPLETE, message)

    def error(self, phase: Phase, message: str = "") -> None:
        self.emit(phase, EventKind.ERROR, message)
