"""Text processing utilities for translated subtitle text."""

from __future__ import annotations

import re


# 模型有时会把译文包在代码块里
_CODE_FENCE_RE = re.compile(r'^```[\w-]*\s*|\s*```$')

# 成对的包裹引号
WRAPPING_QUOTES = {'"': '"', '“': '”', '«': '»', '„': '“'}

_INNER_WHITESPACE_RE = re.compile(r'[ \t]+')


def _is_wrapped(text: str) -> bool:
    text = text.strip()
    closing = WRAPPING_QUOTES.get(text[:1])
    return bool(closing) and len(text) >= 2 and text.endswith(closing)


def _strip_wrapping_quotes(text: str) -> str:
    if not _is_wrapped(text):
        return text
    inner = text[1:-1]
    # 内部还有同样的引号时说明不是整体包裹
    if text[0] not in inner and WRAPPING_QUOTES[text[0]] not in inner:
        return inner.strip()
    return text


def clean_translated_text(text: str, original: str = "") -> str:
    """
    Clean and normalize a translation returned by an LLM.

    Only formatting noise is removed: code fences, quotes wrapping the
    whole answer, and repeated spaces. Wrapping quotes are kept when
    ``original`` was itself a quotation. Line breaks are kept because they
    drive redistribution.

    Args:
        text: Raw translated text
        original: Source text the translation was made from

    Returns:
        Cleaned text
    """
    if not text or not isinstance(text, str):
        return ""

    text = text.replace('\r\n', '\n').strip()
    text = _CODE_FENCE_RE.sub('', text).strip()
    if not _is_wrapped(original or ""):
        text = _strip_wrapping_quotes(text)

    lines = [_INNER_WHITESPACE_RE.sub(' ', line).strip() for line in text.split('\n')]
    return "\n".join(line for line in lines if line)


def validate_translation(original: str, translated: str) -> tuple[bool, str]:
    """
    Validate a translation before it is redistributed.

    Empty or whitespace-only output counts as a failure, so a group is
    never refilled with blank cues.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not translated or not translated.strip():
        return False, "Empty translation"

    clean = re.sub(r'[\s\W]', '', translated)
    # 原文本身只有符号（如 ♪）时允许原样返回
    if not clean and re.sub(r'[\s\W]', '', original):
        return False, "Translation contains only special characters"

    orig_len = len(original)
    trans_len = len(translated)

    if orig_len > 10:  # 只对较长文本检查
        if trans_len > orig_len * 5:
            return False, f"Translation too long ({trans_len} vs {orig_len})"

    return True, ""


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to maximum length with suffix."""
    if len(text) <= max_length:
        return text
    return text[:max_length - len(suffix)] + suffix
