"""
Exception types for the srt web translator package.
"""


class TranslatorError(Exception):
    """Base error for the srt web translator"""


class InputFileError(TranslatorError, FileNotFoundError):
    """Raised when the input subtitle file is missing or unreadable"""


class ConfigurationError(TranslatorError, ValueError):
    """Raised when configuration values are missing or invalid"""


class PublishError(TranslatorError):
    """Raised when the rendered page cannot be published at all"""


class PortInUseError(PublishError):
    """Raised when the local server port is already bound"""


class BrowserError(TranslatorError):
    """Raised when the headless browser cannot be launched or driven"""


class VerificationTimeoutError(TranslatorError, TimeoutError):
    """Raised when the published run id never shows up within the allowed wait"""


class TranscoderError(TranslatorError, RuntimeError):
    """Raised when ffmpeg/ffprobe fails"""
