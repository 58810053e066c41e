"""WebVTT parsing, reconstruction and saving utilities."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Optional

from .config import SUPPORTED_EXTENSIONS
from .models import VttCue

logger = logging.getLogger(__name__)

VTT_HEADER = "WEBVTT"
TIMESTAMP_SEPARATOR = "-->"


def _finalize(cue: Optional[VttCue], index: int, cues: List[VttCue]) -> int:
    """Append ``cue`` if it carries text, return the next free index."""
    if cue is None or not cue.text_lines:
        return index
    cues.append(cue.copy(original_index=index))
    return index + 1


def parse_vtt(content: str) -> List[VttCue]:
    """
    Parse WebVTT content into list of VttCue objects.

    Tolerates a missing header, extra blank lines and cues
    without text; timestamps are passed through as-is.

    Args:
        content: Raw WebVTT file content as string

    Returns:
        List of parsed VttCue objects, ``original_index`` counting from 0
    """
    if not content or not content.strip():
        return []

    # 标准化换行符
    content = content.replace('\r\n', '\n').replace('\r', '\n')

    cues: List[VttCue] = []
    current: Optional[VttCue] = None
    next_index = 0

    for raw_line in content.split('\n'):
        line = raw_line.strip()

        if not line or line == VTT_HEADER:
            continue

        if TIMESTAMP_SEPARATOR in line:
            next_index = _finalize(current, next_index, cues)
            start, _, end = line.partition(TIMESTAMP_SEPARATOR)
            current = VttCue(start=start.strip(), end=end.strip())
        elif current is not None:
            current.text_lines.append(line)

    _finalize(current, next_index, cues)

    if not cues:
        logger.warning("No valid VTT cues found in content")

    return cues


def reconstruct_vtt(cues: Sequence[VttCue]) -> str:
    """
    Serialize cues back into WebVTT text.

    Cues are written in ``original_index`` order regardless of the order
    they are passed in.
    """
    ordered = sorted(cues, key=lambda c: c.original_index)

    parts = [VTT_HEADER, ""]
    for cue in ordered:
        parts.append(cue.to_vtt())
        parts.append("")

    return "\n".join(parts).rstrip()


def validate_vtt_file(path: Path) -> Optional[str]:
    """
    Validate VTT file before processing.

    Args:
        path: Path to VTT file

    Returns:
        Error message if invalid, None if valid
    """
    if not path.exists():
        return f"File not found: {path}"

    if not path.is_file():
        return f"Not a file: {path}"

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        return f"Invalid file extension: {suffix} (expected .vtt)"

    size = path.stat().st_size
    if size == 0:
        return "File is empty"
    if size > 50 * 1024 * 1024:  # 50MB
        return f"File too large: {size / 1024 / 1024:.1f}MB (max 50MB)"

    return None


def save_vtt(cues: Sequence[VttCue], path: Path) -> None:
    """
    Save cues to a WebVTT file.

    Args:
        cues: Sequence of VttCue objects to save
        path: Output file path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        f.write(reconstruct_vtt(cues))
        f.write("\n")

    logger.info(f"Saved {len(cues)} cues to {path}")
