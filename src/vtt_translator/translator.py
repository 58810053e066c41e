"""Translation of sentence groups through an LLM backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from openai import AsyncOpenAI

from .config import language_name
from .llm_client import call_llm_async, LLMCallError
from .text_utils import clean_translated_text, validate_translation, truncate_text

logger = logging.getLogger(__name__)


@dataclass
class TranslationResult:
    """Outcome of translating one piece of text."""
    translated_text: str
    success: bool
    error: str = ""


# (text, source_language, target_language) -> TranslationResult
TranslateFn = Callable[[str, str, str], Awaitable[TranslationResult]]


def build_translation_messages(
    text: str,
    source_language: str,
    target_language: str,
) -> list[dict[str, str]]:
    """Build chat messages asking for a plain translation of ``text``."""
    src = language_name(source_language)
    tgt = language_name(target_language)

    system_prompt = (
        f"You are a professional translator. Translate text from {src} to {tgt}. "
        "Preserve all formatting including HTML tags, line breaks, and punctuation. "
        "Only return the translated text, nothing else."
    )

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": text},
    ]


async def translate_text(
    client: AsyncOpenAI,
    text: str,
    source_language: str,
    target_language: str,
    model: str,
    max_retries: int = 3,
) -> TranslationResult:
    """
    Translate ``text`` with the given chat model.

    Never raises: API errors and unusable answers are returned as a
    TranslationResult with ``success=False``.
    """
    if not text.strip():
        return TranslationResult(translated_text="", success=False, error="Nothing to translate")

    messages = build_translation_messages(text, source_language, target_language)

    try:
        raw = await call_llm_async(client, model, messages, temperature=0.3, max_retries=max_retries)
    except LLMCallError as e:
        return TranslationResult(translated_text="", success=False, error=str(e))

    translated = clean_translated_text(raw, original=text)
    is_valid, error = validate_translation(text, translated)

    if not is_valid:
        logger.debug(f"Validation failed for '{truncate_text(text, 40)}': {error}")
        return TranslationResult(translated_text=translated, success=False, error=error)

    return TranslationResult(translated_text=translated, success=True)


def make_translate_fn(client: AsyncOpenAI, model: str, max_retries: int = 3) -> TranslateFn:
    """Bind a client and model into a TranslateFn for the pipeline."""

    async def _translate(text: str, source_language: str, target_language: str) -> TranslationResult:
        return await translate_text(
            client, text, source_language, target_language, model, max_retries=max_retries
        )

    return _translate
