"""
SRT Web Translator - translate subtitles through a web translation page

Subtitles are rendered to an HTML page, published (local server or a
static-site deploy), opened through a translation site in a headless
browser, and read back into a translated SRT file. Includes:
- SRT parsing and writing
- HTML rendering and position-based decoding of entries
- Local and remote publish targets
- Playwright-driven liveness checks and extraction
- FFmpeg subtitle stream extraction
"""

__version__ = "0.1.0"

# Import core classes and functions
from .errors import (
    TranslatorError,
    InputFileError,
    ConfigurationError,
    PublishError,
    PortInUseError,
    BrowserError,
    VerificationTimeoutError,
    TranscoderError,
)
from .srt_io import SubtitleEntry, parse_srt, serialize_srt, read_srt, write_srt
from .markup import render_markup, extract_entries, FIELD_ORDER
from .quality import rewrap_text
from .config import TranslatorConfig, load_config, config_from_environ
from .events import Phase, EventKind, PipelineEvent
from .status import ConsoleReporter
from .publish import PublishTarget, PublishResult, LocalPublishTarget, RemotePublishTarget, create_publish_target
from .browser import BrowserSession, verify_live, extract_translated
from .pipeline import TranslationPipeline, PipelineState, translate_file
from .media import extract_subtitles, list_subtitle_streams, get_media_info, check_ffmpeg_available, subtitle_path_for
from .files import rename_without_spaces, rename_all, find_media_files
from .install import install_alias

__all__ = [
    # Errors
    "TranslatorError",
    "InputFileError",
    "ConfigurationError",
    "PublishError",
    "PortInUseError",
    "BrowserError",
    "VerificationTimeoutError",
    "TranscoderError",

    # Classes
    "SubtitleEntry",
    "TranslatorConfig",
    "TranslationPipeline",
    "PipelineState",
    "PublishTarget",
    "PublishResult",
    "LocalPublishTarget",
    "RemotePublishTarget",
    "BrowserSession",
    "ConsoleReporter",
    "Phase",
    "EventKind",
    "PipelineEvent",

    # SRT handling
    "parse_srt",
    "serialize_srt",
    "read_srt",
    "write_srt",
    "render_markup",
    "extract_entries",
    "FIELD_ORDER",
    "rewrap_text",

    # Pipeline
    "load_config",
    "config_from_environ",
    "create_publish_target",
    "verify_live",
    "extract_translated",
    "translate_file",

    # Media and files
    "extract_subtitles",
    "list_subtitle_streams",
    "get_media_info",
    "check_ffmpeg_available",
    "subtitle_path_for",
    "rename_without_spaces",
    "rename_all",
    "find_media_files",
    "install_alias",
]
