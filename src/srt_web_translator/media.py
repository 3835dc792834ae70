"""
Media handling module for the srt web translator package.

Pulls subtitle streams out of container files with FFmpeg.
"""
from typing import Any, Dict, List, Optional, Union
from pathlib import Path
import json
import subprocess

from rich.console import Console

from .errors import TranscoderError

console = Console()


def subtitle_path_for(media_path: Union[str, Path]) -> Path:
    """Path of the SRT extracted from a media file (same name, .srt)"""
    return Path(media_path).with_suffix(".srt")


def _run(cmd: List[str], what: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=True
        )
    except FileNotFoundError as e:
        raise TranscoderError(f"{cmd[0]} not found, install FFmpeg first") from e
    except subprocess.CalledProcessError as e:
        console.print(f"[red]{what} failed: {e}[/red]")
        console.print(f"[dim]{e.stderr}[/dim]")
        raise TranscoderError(f"{what} failed: {e}") from e


def extract_subtitles(
    media_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    stream: Optional[int] = None,
) -> Path:
    """Extract a subtitle stream from a media file as SRT

    Args:
        media_path: Path to the input media file
        output_path: Path to the output SRT (default: media path with .srt)
        stream: Position among the subtitle streams (default: FFmpeg's choice)

    Returns:
        Path to the extracted subtitle file
    """
    media_path = Path(media_path)
    if not media_path.is_file():
        raise TranscoderError(f"Media file not found: {media_path}")

    output_path = Path(output_path) if output_path is not None else subtitle_path_for(media_path)

    cmd = ["ffmpeg", "-y", "-i", str(media_path)]
    if stream is not None:
        cmd.extend(["-map", f"0:s:{stream}"])
    cmd.extend(["-f", "srt", str(output_path)])

    _run(cmd, "Subtitle extraction")
    return output_path


def get_media_info(media_path: Union[str, Path]) -> Dict[str, Any]:
    """Get information about a media file using FFprobe

    Args:
        media_path: Path to the media file

    Returns:
        Dictionary with media information
    """
    cmd = [
        "ffprobe",
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        str(media_path)
    ]

    result = _run(cmd, "FFprobe")
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as e:
        console.print("[red]Failed to parse FFprobe output as JSON[/red]")
        raise TranscoderError("Failed to parse FFprobe output") from e


def list_subtitle_streams(media_path: Union[str, Path]) -> List[Dict[str, Any]]:
    """List subtitle streams in a media file

    Args:
        media_path: Path to the media file

    Returns:
        One dict per subtitle stream; "position" is the value to pass as
        extract_subtitles(stream=...)
    """
    media_info = get_media_info(media_path)

    subtitle_streams = []
    for stream in media_info.get("streams", []):
        if stream.get("codec_type") != "subtitle":
            continue
        tags = stream.get("tags", {})
        disposition = stream.get("disposition", {})
        subtitle_streams.append({
            "position": len(subtitle_streams),
            "index": stream.get("index"),
            "codec": stream.get("codec_name"),
            "language": tags.get("language", "unknown"),
            "title": tags.get("title", ""),
            "default": disposition.get("default", 0) == 1,
            "forced": disposition.get("forced", 0) == 1,
        })

    return subtitle_streams


def check_ffmpeg_available() -> bool:
    """Check if FFmpeg is available on the system

    Returns:
        True if FFmpeg is available, False otherwise
    """
    try:
        result = subprocess.run(
            ["ffmpeg", "-version"],
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True
        )
        return result.returncode == 0
    except FileNotFoundError:
        return False
