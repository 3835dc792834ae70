"""
Line wrapping for translated subtitle text.
"""
import math

# Translated text longer than this is broken into two lines
DEFAULT_MAX_LINE_CHARS = 30


def rewrap_text(text: str, max_chars: int = DEFAULT_MAX_LINE_CHARS) -> str:
    """Break long text into two lines of roughly equal word count

    The translation page lays text out as a single line, so the two-line
    shape of the source subtitle is restored here. The break goes after
    ceil(words / 2) words.

    Args:
        text: Translated subtitle text
        max_chars: Length above which the text is wrapped

    Returns:
        The text, with at most one inserted line break
    """
    if len(text) <= max_chars:
        return text

    words = text.split()
    if len(words) < 2:
        return text

    half_way = math.ceil(len(words) / 2)
    first_half = " ".join(words[:half_way])
    second_half = " ".join(words[half_way:])
    return f"{first_half}\n{second_half}"
