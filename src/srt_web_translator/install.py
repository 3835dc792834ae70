"""
Installs the srt-translate shell alias.
"""
from typing import List, Optional
from pathlib import Path
import shlex
import sys

from rich.console import Console

console = Console()

RC_FILES = (".bashrc", ".zshrc")
ALIAS_MARKER = "# srt-translate"


def alias_line(python: Optional[str] = None) -> str:
    python = python or sys.executable
    return f'alias srt-translate="{shlex.quote(python)} -m srt_web_translator.cli"'


def install_alias(home: Optional[Path] = None, python: Optional[str] = None) -> List[Path]:
    """Append the alias to every existing shell rc file

    Rc files that do not exist are left alone, and files that already carry
    the alias are not touched again.

    Returns:
        The rc files that were modified
    """
    home = Path(home) if home is not None else Path.home()
    block = f"\n{ALIAS_MARKER}\n{alias_line(python)}\n"

    modified = []
    for name in RC_FILES:
        rc_file = home / name
        if not rc_file.is_file():
            continue
        content = rc_file.read_text(encoding="utf-8")
        if ALIAS_MARKER in content:
            console.print(f"[yellow]Alias already installed in {rc_file}[/yellow]")
            continue
        with open(rc_file, "a", encoding="utf-8") as f:
            f.write(block)
        modified.append(rc_file)
        console.print(
            f"[green]✓ Installed in {rc_file}[/green], restart your terminal or run:\n"
            f"    source {rc_file}"
        )

    return modified
