"""Parse -> group -> translate -> redistribute -> reconstruct."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from tqdm.asyncio import tqdm_asyncio

from .exceptions import TranslationError
from .grouper import group_cues_into_sentences
from .models import VttCue, VttGroup
from .parser import parse_vtt, reconstruct_vtt
from .progress import TranslationProgress
from .redistributor import redistribute_translation
from .translator import TranslateFn, TranslationResult

logger = logging.getLogger(__name__)


def summarize_groups(groups: Sequence[VttGroup]) -> Tuple[int, int]:
    """Return (cue count, group count)."""
    return sum(len(g) for g in groups), len(groups)


async def translate_groups(
    groups: Sequence[VttGroup],
    translate_fn: TranslateFn,
    source_language: str,
    target_language: str,
    concurrency: int = 4,
    progress: Optional[TranslationProgress] = None,
    on_group_done: Optional[Callable[[int, str], None]] = None,
    show_progress: bool = True,
) -> Dict[int, str]:
    """
    Translate the combined text of every group.

    Groups are independent, so they are sent concurrently (at most
    ``concurrency`` at once). Groups already recorded in ``progress`` are
    not sent again.

    Returns:
        Dict mapping group index to translated text

    Raises:
        TranslationError: for the first group (by index) whose translation
            failed; successful groups have already been reported through
            ``on_group_done`` by then
    """
    sem = asyncio.Semaphore(concurrency)
    results: Dict[int, str] = {}

    if progress:
        results.update(progress.translations)
        pending = progress.get_pending_groups()
        if results:
            logger.info(f"Resuming: {len(results)}/{len(groups)} groups already translated")
    else:
        pending = list(range(len(groups)))

    async def _run(idx: int) -> Tuple[int, TranslationResult]:
        async with sem:
            result = await translate_fn(groups[idx].combined_text, source_language, target_language)
        if result.success and on_group_done:
            on_group_done(idx, result.translated_text)
        return idx, result

    if not pending:
        logger.info("No groups to translate")
        return results

    logger.info(f"Translating {len(pending)} sentence groups...")

    tasks = [_run(idx) for idx in pending]
    if show_progress:
        outcomes = await tqdm_asyncio.gather(*tasks, desc="Translating")
    else:
        outcomes = await asyncio.gather(*tasks)

    failures: List[Tuple[int, str]] = []
    for idx, result in outcomes:
        if result.success:
            results[idx] = result.translated_text
        else:
            failures.append((idx, result.error or "Translation failed"))

    if failures:
        failures.sort()
        for idx, error in failures:
            logger.warning(f"Translation failed for group #{idx}: {error}")
        raise TranslationError(*failures[0])

    return results


def apply_translations(groups: Sequence[VttGroup], translations: Dict[int, str]) -> List[VttCue]:
    """Redistribute every group's translation onto its cues."""
    cues: List[VttCue] = []
    for idx, group in enumerate(groups):
        cues.extend(redistribute_translation(group, translations[idx]))
    return sorted(cues, key=lambda c: c.original_index)


async def translate_cues(
    cues: Sequence[VttCue],
    translate_fn: TranslateFn,
    source_language: str,
    target_language: str,
    concurrency: int = 4,
    show_progress: bool = False,
) -> List[VttCue]:
    """Translate parsed cues sentence by sentence, keeping their timing."""
    groups = group_cues_into_sentences(cues)
    translations = await translate_groups(
        groups,
        translate_fn,
        source_language,
        target_language,
        concurrency=concurrency,
        show_progress=show_progress,
    )
    return apply_translations(groups, translations)


async def translate_vtt(
    content: str,
    translate_fn: TranslateFn,
    source_language: str,
    target_language: str,
    concurrency: int = 4,
) -> str:
    """Translate a whole WebVTT document and return the new document."""
    cues = parse_vtt(content)
    translated = await translate_cues(
        cues, translate_fn, source_language, target_language, concurrency=concurrency
    )
    return reconstruct_vtt(translated)
