"""Redistribute a translated sentence back onto the original cue line slots."""

from __future__ import annotations

import logging
import math
import re
from typing import List

from .models import VttCue, VttGroup

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r'\r?\n')


def split_translated_lines(translated_text: str) -> List[str]:
    """Split on line breaks, trim each piece and drop empty ones."""
    pieces = (piece.strip() for piece in _LINE_BREAK_RE.split(translated_text or ""))
    return [piece for piece in pieces if piece]


def _longest_index(lines: List[str]) -> int:
    # max() 返回第一个最大值，即长度相同时取最靠前的一行
    return max(range(len(lines)), key=lambda i: len(lines[i]))


def split_to_fill(lines: List[str], slot_count: int) -> List[str]:
    """
    Halve the longest line until there are ``slot_count`` lines.

    The longest line (first one on ties) is split on single spaces into
    ``ceil(n/2)`` and the remaining words. Stops early when the longest
    line is a single word, leaving fewer lines than slots.
    """
    lines = list(lines)

    while 0 < len(lines) < slot_count:
        idx = _longest_index(lines)
        words = lines[idx].split(' ')

        if len(words) < 2:
            logger.debug(f"Cannot split '{lines[idx]}' further, {slot_count - len(lines)} slot(s) left empty")
            break

        mid = math.ceil(len(words) / 2)
        lines[idx:idx + 1] = [' '.join(words[:mid]), ' '.join(words[mid:])]

    return lines


def merge_to_fit(lines: List[str], slot_count: int) -> List[str]:
    """Fold every line beyond the last slot into that slot."""
    if len(lines) <= slot_count:
        return list(lines)
    if slot_count <= 0:
        return []

    head = lines[:slot_count - 1]
    tail = ' '.join(lines[slot_count - 1:])
    return head + [tail]


def fit_lines_to_slots(translated_text: str, slot_count: int) -> List[str]:
    """Turn translated text into at most ``slot_count`` balanced lines."""
    lines = split_translated_lines(translated_text)

    if len(lines) < slot_count:
        return split_to_fill(lines, slot_count)
    if len(lines) > slot_count:
        return merge_to_fit(lines, slot_count)
    return lines


def redistribute_translation(group: VttGroup, translated_text: str) -> List[VttCue]:
    """
    Map a translated sentence back onto the cues of ``group``.

    Each original text line is one slot. Slots are refilled in cue order;
    slots left over after a failed split stay empty and are dropped from
    the owning cue. Timing and ``original_index`` are carried over, the
    input cues are not modified.

    Args:
        group: Sentence group the text was translated from
        translated_text: Translation of ``group.combined_text``

    Returns:
        One new VttCue per cue in the group, in the same order
    """
    lines = fit_lines_to_slots(translated_text, group.slot_count)

    updated: List[VttCue] = []
    pos = 0

    for cue in group.cues:
        assigned: List[str] = []
        for _ in cue.text_lines:
            if pos < len(lines):
                assigned.append(lines[pos])
                pos += 1
            else:
                assigned.append("")

        updated.append(cue.copy(text_lines=[line for line in assigned if line.strip()]))

    return updated
