"""
CLI application for srt-web-translator
"""
from pathlib import Path
from typing import Optional, Annotated
import typer

from rich.console import Console
from rich.table import Table

from srt_web_translator import (
    TranslatorError,
    ConsoleReporter,
    extract_subtitles,
    find_media_files,
    install_alias,
    list_subtitle_streams,
    load_config,
    rename_all as rename_all_files,
    rename_without_spaces,
    subtitle_path_for,
    translate_file,
)

app = typer.Typer(
    help="Translate SRT subtitles by round-tripping them through a web translation page",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()

EnvFileOption = Annotated[Optional[Path], typer.Option("--env-file", help="Read settings from this .env file")]
RemoteOption = Annotated[Optional[bool], typer.Option("--remote/--local", help="Publish with the deploy command instead of a local server")]
MaxWaitOption = Annotated[Optional[float], typer.Option(help="Seconds to wait for the published page to go live")]
PollIntervalOption = Annotated[Optional[float], typer.Option(help="Seconds between liveness checks")]
HeadedOption = Annotated[bool, typer.Option("--headed", help="Show the browser window")]
VerboseOption = Annotated[bool, typer.Option(help="Show every progress update")]


def _build_config(env_file, remote, max_wait, poll_interval, headed):
    config = load_config(env_file)
    deployment = None if remote is None else ("remote" if remote else "local")
    return config.with_overrides(
        deployment=deployment,
        max_wait=max_wait,
        poll_interval=poll_interval,
        headless=False if headed else None,
    )


def _translate_one(input_file: Path, output_file: Path, config, remove_input: bool, verbose: bool) -> Path:
    reporter = ConsoleReporter(console, verbose=verbose)
    return translate_file(
        input_file,
        output_file,
        config=config,
        remove_input=remove_input,
        on_event=reporter,
    )


@app.command()
def install():
    """Add the srt-translate alias to ~/.bashrc and ~/.zshrc"""
    modified = install_alias()
    if not modified:
        console.print("[yellow]No shell rc file was changed[/yellow]")


@app.command()
def rename(
    file: Annotated[Path, typer.Argument(help="File to rename")],
):
    """Replace spaces in a file name with dots"""
    try:
        new_path = rename_without_spaces(file)
    except (FileNotFoundError, FileExistsError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {new_path.name}[/green]")


@app.command("rename-all")
def rename_all(
    directory: Annotated[Path, typer.Argument(help="Directory whose files are renamed")] = Path("."),
):
    """Replace spaces with dots in every file name of a directory"""
    if not directory.is_dir():
        console.print(f"[red]Directory not found: {directory}[/red]")
        raise typer.Exit(1)
    renamed = rename_all_files(directory)
    for path in renamed:
        console.print(f"[green]✓ {path.name}[/green]")
    console.print(f"Renamed {len(renamed)} file(s)")


@app.command()
def streams(
    media_file: Annotated[Path, typer.Argument(help="Media container file")],
):
    """List the subtitle streams of a media file"""
    try:
        found = list_subtitle_streams(media_file)
    except TranslatorError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if not found:
        console.print(f"[yellow]No subtitle streams in {media_file}[/yellow]")
        return

    table = Table(title=str(media_file))
    for column in ("stream", "index", "codec", "language", "title", "default", "forced"):
        table.add_column(column)
    for stream in found:
        table.add_row(
            str(stream["position"]),
            str(stream["index"]),
            str(stream["codec"]),
            stream["language"],
            stream["title"],
            "yes" if stream["default"] else "",
            "yes" if stream["forced"] else "",
        )
    console.print(table)


@app.command()
def translate(
    input_file: Annotated[Path, typer.Argument(help="SRT file, or media file to extract subtitles from")],
    output_file: Annotated[Optional[Path], typer.Argument(help="Output SRT path")] = None,
    stream: Annotated[Optional[int], typer.Option(help="Subtitle stream to extract from a media file")] = None,
    remove_input: Annotated[bool, typer.Option(help="Delete the input SRT after a successful translation")] = False,
    remote: RemoteOption = None,
    max_wait: MaxWaitOption = None,
    poll_interval: PollIntervalOption = None,
    headed: HeadedOption = False,
    env_file: EnvFileOption = None,
    verbose: VerboseOption = False,
):
    """Translate one subtitle file"""
    if not input_file.exists():
        console.print(f"[red]Input file not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        config = _build_config(env_file, remote, max_wait, poll_interval, headed)

        if input_file.suffix.lower() != ".srt":
            console.print(f"[bold blue]Extracting subtitles from {input_file}[/bold blue]")
            input_file = extract_subtitles(input_file, stream=stream)

        if output_file is None:
            output_file = input_file

        result = _translate_one(input_file, output_file, config, remove_input, verbose)
    except TranslatorError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Translation complete: {result}[/green]")
    raise typer.Exit(0)


@app.command("translate-all")
def translate_all(
    directory: Annotated[Path, typer.Argument(help="Directory with media files")] = Path("."),
    extension: Annotated[str, typer.Option("--extension", "-e", help="Media file extension")] = "mkv",
    stream: Annotated[Optional[int], typer.Option(help="Subtitle stream to extract")] = None,
    remote: RemoteOption = None,
    max_wait: MaxWaitOption = None,
    poll_interval: PollIntervalOption = None,
    headed: HeadedOption = False,
    env_file: EnvFileOption = None,
    verbose: VerboseOption = False,
):
    """Extract and translate the subtitles of every media file in a directory"""
    if not directory.is_dir():
        console.print(f"[red]Directory not found: {directory}[/red]")
        raise typer.Exit(1)

    media_files = find_media_files(directory, extension)
    if not media_files:
        console.print(f"[yellow]No .{extension.lstrip('.')} files in {directory}[/yellow]")
        raise typer.Exit(0)

    try:
        config = _build_config(env_file, remote, max_wait, poll_interval, headed)
        for number, media_file in enumerate(media_files, start=1):
            console.print(f"\n[bold blue]({number}/{len(media_files)}) {media_file.name}[/bold blue]")
            srt_file = extract_subtitles(media_file, subtitle_path_for(media_file), stream=stream)
            result = _translate_one(srt_file, srt_file, config, False, verbose)
            console.print(f"[green]✓ {result}[/green]")
    except TranslatorError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Translated {len(media_files)} file(s)[/green]")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
