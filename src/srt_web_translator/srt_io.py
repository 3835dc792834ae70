"""
SRT input/output module for the srt web translator package.
"""
from typing import List, Union
from pathlib import Path
from dataclasses import dataclass
import re

from .errors import InputFileError

# Entries are separated by a line that is empty or holds only whitespace
BLOCK_SEPARATOR = re.compile(r"\n[ \t]*\n")


@dataclass
class SubtitleEntry:
    """One subtitle block; every field is kept as opaque text"""
    index: str = ""
    timing: str = ""
    text: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.index and self.timing and self.text)


def parse_srt(content: str) -> List[SubtitleEntry]:
    """Parse raw SRT text into subtitle entries

    The index and timing lines are not validated. Blocks with missing lines
    produce entries with empty fields, which serialize_srt() later drops.

    Args:
        content: Raw SRT text

    Returns:
        Entries in file order
    """
    content = content.replace("\r", "").lstrip("\ufeff")

    entries = []
    for block in BLOCK_SEPARATOR.split(content):
        block = block.strip("\n")
        if not block.strip():
            continue

        lines = block.split("\n")
        index = lines[0].strip()
        timing = lines[1].strip() if len(lines) > 1 else ""
        text = " ".join(line.strip() for line in lines[2:]).strip()

        entries.append(SubtitleEntry(index=index, timing=timing, text=text))

    return entries


def serialize_srt(entries: List[SubtitleEntry]) -> str:
    """Serialize entries back to SRT text, skipping incomplete ones

    Args:
        entries: Entries to serialize

    Returns:
        SRT text where every block ends with one blank line
    """
    return "".join(
        f"{entry.index}\n{entry.timing}\n{entry.text}\n\n"
        for entry in entries
        if entry.is_complete
    )


def read_srt(file_path: Union[str, Path]) -> List[SubtitleEntry]:
    """Read entries from an SRT file

    Args:
        file_path: Path to the SRT file

    Returns:
        List of entries

    Raises:
        InputFileError: If the file does not exist or cannot be read
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        raise InputFileError(f"Input file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8-sig") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(f"Could not read {file_path}: {e}") from e

    return parse_srt(content)


def write_srt(entries: List[SubtitleEntry], file_path: Union[str, Path]) -> Path:
    """Write entries to an SRT file, replacing any previous contents

    Args:
        entries: Entries to write
        file_path: Path to the output SRT file

    Returns:
        Path of the written file
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(serialize_srt(entries))

    return file_path
