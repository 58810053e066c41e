"""Data models for WebVTT cues and sentence groups."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass
class VttCue:
    """Represents a single timed cue in WebVTT format.

    ``start`` and ``end`` are kept as opaque timestamp tokens, they are
    never parsed or validated.
    """

    start: str
    end: str
    text_lines: List[str] = field(default_factory=list)
    original_index: int = 0

    @property
    def timecode(self) -> str:
        """Return the timecode line in WebVTT format."""
        return f"{self.start} --> {self.end}"

    @property
    def text(self) -> str:
        """All text lines joined with a single space."""
        return " ".join(self.text_lines)

    def to_vtt(self) -> str:
        """Convert cue to a WebVTT block (without the separating blank line)."""
        return "\n".join([self.timecode, *self.text_lines])

    def copy(self, **changes) -> "VttCue":
        """Create a copy with optional field changes."""
        return VttCue(
            start=changes.get('start', self.start),
            end=changes.get('end', self.end),
            text_lines=list(changes.get('text_lines', self.text_lines)),
            original_index=changes.get('original_index', self.original_index),
        )


@dataclass
class VttGroup:
    """A contiguous run of cues that together form one sentence."""

    cues: List[VttCue]
    combined_text: str

    @property
    def slot_count(self) -> int:
        """Number of original text-line slots across all cues."""
        return sum(len(cue.text_lines) for cue in self.cues)

    def __len__(self) -> int:
        return len(self.cues)
