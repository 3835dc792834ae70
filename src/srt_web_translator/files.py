"""
File name helpers used by the batch commands.
"""
from typing import List, Union
from pathlib import Path

from rich.console import Console

console = Console()


def rename_without_spaces(file_path: Union[str, Path], replacement: str = ".") -> Path:
    """Rename a file so its name contains no spaces

    Args:
        file_path: File to rename
        replacement: What each space becomes

    Returns:
        The new path (unchanged if there was nothing to replace)
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    new_name = file_path.name.replace(" ", replacement)
    if new_name == file_path.name:
        return file_path

    target = file_path.with_name(new_name)
    if target.exists():
        raise FileExistsError(f"Cannot rename {file_path.name}: {new_name} already exists")

    return file_path.rename(target)


def rename_all(directory: Union[str, Path], replacement: str = ".") -> List[Path]:
    """Rename every file in a directory so names contain no spaces

    Files whose target name is taken are skipped with a warning.

    Returns:
        Paths of the files that were renamed
    """
    directory = Path(directory)
    renamed = []
    for file_path in sorted(directory.iterdir()):
        if not file_path.is_file() or " " not in file_path.name:
            continue
        try:
            renamed.append(rename_without_spaces(file_path, replacement))
        except FileExistsError as e:
            console.print(f"[yellow]Skipping: {e}[/yellow]")
    return renamed


def find_media_files(directory: Union[str, Path], extension: str) -> List[Path]:
    """List files in directory with the given extension (case-insensitive)"""
    suffix = "." + extension.lower().lstrip(".")
    return sorted(
        path for path in Path(directory).iterdir()
        if path.is_file() and path.suffix.lower() == suffix
    )
