"""
HTML rendering and decoding of subtitle entries.

The page produced by render_markup() is what the translation site loads.
Each entry becomes a container element with exactly three children, in the
order given by FIELD_ORDER. extract_entries() reads them back by position
only: the translation site is free to rewrite tags and classes inside the
container, but it keeps the children in place.
"""
from typing import Callable, List, Optional
from html import escape

from bs4 import BeautifulSoup

from .srt_io import SubtitleEntry

RUN_ID_ELEMENT_ID = "run-id"
RUN_ID_SELECTOR = f"#{RUN_ID_ELEMENT_ID}"
ENTRY_CLASS = "srt-object"
ORIGINAL_TEXT_CLASS = "original-text"

# Position of each child inside an entry container
FIELD_ORDER = ("index", "timing", "text")

# Elements that never carry translated subtitle text
STRIPPED_TAGS = ["script", "iframe"]

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{run_id}</title>
</head>
<body>
  <div id="{run_id_element}">{run_id}</div>
{entries}
</body>
</html>
"""


def render_markup(entries: List[SubtitleEntry], run_id: str) -> str:
    """Render entries into the HTML page published for translation

    Args:
        entries: Entries to render, in on-screen order
        run_id: Identifier of the current run, shown in the run id element

    Returns:
        HTML document text
    """
    blocks = []
    for entry in entries:
        children = "\n".join(
            f'    <div class="{field}">{escape(getattr(entry, field))}</div>'
            for field in FIELD_ORDER
        )
        blocks.append(f'  <br>\n  <div class="{ENTRY_CLASS}">\n{children}\n  </div>\n  <br>')

    return PAGE_TEMPLATE.format(
        run_id=escape(run_id),
        run_id_element=RUN_ID_ELEMENT_ID,
        entries="\n".join(blocks),
    )


def _element_text(element) -> str:
    # Translated text is usually split over nested <font> wrappers
    return " ".join(element.get_text(" ").split())


def decode_fields(children) -> SubtitleEntry:
    """Build an entry from the child elements of one container

    Missing trailing children leave the matching fields empty.
    """
    values = {}
    for position, field in enumerate(FIELD_ORDER):
        values[field] = _element_text(children[position]) if position < len(children) else ""
    return SubtitleEntry(**values)


def extract_entries(
    html: str,
    wrap: Optional[Callable[[str], str]] = None,
) -> List[SubtitleEntry]:
    """Decode entries from a (translated) page

    Scripts, frames and every element marked as original text are removed
    first, so only translated text can reach the result.

    Args:
        html: Page markup
        wrap: Optional transformation applied to each text field

    Returns:
        Entries in document order
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.find_all(STRIPPED_TAGS):
        element.decompose()
    for element in soup.select(f".{ORIGINAL_TEXT_CLASS}"):
        if not element.decomposed:
            element.decompose()

    entries = []
    for container in soup.select(f".{ENTRY_CLASS}"):
        entry = decode_fields(container.find_all(True, recursive=False))
        if wrap is not None:
            entry.text = wrap(entry.text)
        entries.append(entry)

    return entries
