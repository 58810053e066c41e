"""Sentence-level grouping of consecutive subtitle cues."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

from .models import VttCue, VttGroup

logger = logging.getLogger(__name__)

# 句末标点（含省略号）
SENTENCE_ENDINGS = frozenset(".!?…")

# 引号：直引号和弯引号
SENTENCE_QUOTES = frozenset("\"'“”‘’«„")

_WHITESPACE_RE = re.compile(r'\s+')


def ends_sentence(line: str) -> bool:
    """Return True if the trimmed line ends with terminal punctuation."""
    line = line.strip()
    return bool(line) and line[-1] in SENTENCE_ENDINGS


def starts_sentence(line: str) -> bool:
    """
    Return True if the trimmed line looks like the start of a sentence.

    That is an uppercase letter, a hyphen (dialogue dash) or an opening quote.
    """
    line = line.strip()
    if not line:
        return False
    first = line[0]
    return first.isupper() or first == '-' or first in SENTENCE_QUOTES


def is_sentence_boundary(prev_cue: VttCue, next_cue: VttCue) -> bool:
    """
    Check whether a sentence ends between two adjacent cues.

    Only the last line of ``prev_cue`` and the first line of ``next_cue``
    are inspected.
    """
    last_line = prev_cue.text_lines[-1] if prev_cue.text_lines else ""
    first_line = next_cue.text_lines[0] if next_cue.text_lines else ""
    return ends_sentence(last_line) and starts_sentence(first_line)


def combine_cue_texts(cues: Sequence[VttCue]) -> str:
    """Join all text lines of ``cues`` into one whitespace-normalized string."""
    joined = " ".join(cue.text for cue in cues)
    return _WHITESPACE_RE.sub(" ", joined).strip()


def _close_group(cues: List[VttCue]) -> VttGroup:
    return VttGroup(cues=list(cues), combined_text=combine_cue_texts(cues))


def group_cues_into_sentences(cues: Sequence[VttCue]) -> List[VttGroup]:
    """
    Merge consecutive cues into sentence groups.

    A new group starts only when the previous cue ends with terminal
    punctuation AND the next cue starts like a sentence. Every cue ends
    up in exactly one group and the original order is kept.

    注意：不会修改原始 cues。
    """
    if not cues:
        return []

    groups: List[VttGroup] = []
    current: List[VttCue] = [cues[0]]

    for i in range(1, len(cues)):
        prev_cue = cues[i - 1]
        next_cue = cues[i]

        if is_sentence_boundary(prev_cue, next_cue):
            groups.append(_close_group(current))
            current = [next_cue]
        else:
            current.append(next_cue)

    groups.append(_close_group(current))

    logger.debug(f"Grouped {len(cues)} cues into {len(groups)} sentence groups")
    return groups
