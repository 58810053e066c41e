"""LLM API client utilities."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Dict, Optional
from enum import Enum

from openai import (
    AsyncOpenAI,
    APIConnectionError,
    APITimeoutError,
    RateLimitError,
    AuthenticationError,
    BadRequestError,
    APIStatusError,
)

logger = logging.getLogger(__name__)


class APIErrorType(Enum):
    """API 错误类型分类。"""
    RATE_LIMIT = "rate_limit"      # 429 - 可重试
    CONNECTION = "connection"       # 网络问题 - 可重试
    AUTH = "auth"                   # 401 - 不可重试
    BAD_REQUEST = "bad_request"     # 400 - 不可重试
    SERVER = "server"               # 500+ - 可重试
    UNKNOWN = "unknown"


def classify_error(error: Exception) -> tuple[APIErrorType, bool]:
    """
    Classify an API error and decide whether it is worth retrying.

    Returns:
        (error type, retryable)
    """
    if isinstance(error, RateLimitError):
        return APIErrorType.RATE_LIMIT, True
    elif isinstance(error, (APIConnectionError, APITimeoutError)):
        return APIErrorType.CONNECTION, True
    elif isinstance(error, AuthenticationError):
        return APIErrorType.AUTH, False
    elif isinstance(error, BadRequestError):
        return APIErrorType.BAD_REQUEST, False
    elif isinstance(error, APIStatusError):
        if error.status_code >= 500:
            return APIErrorType.SERVER, True
        return APIErrorType.UNKNOWN, False
    else:
        return APIErrorType.UNKNOWN, False


def retry_delay(error_type: APIErrorType, attempt: int) -> int:
    """Seconds to wait before retry number ``attempt + 1``."""
    if error_type == APIErrorType.RATE_LIMIT:
        return min(2 ** (attempt + 2), 60)  # 4, 8, 16... max 60
    return 2 ** (attempt + 1)  # 2, 4, 8


class LLMCallError(Exception):
    """Raised when an LLM call fails for good (after retries)."""

    def __init__(self, error_type: APIErrorType, cause: Exception):
        self.error_type = error_type
        self.cause = cause
        super().__init__(f"{error_type.value}: {cause}")


async def call_llm_async(
    client: AsyncOpenAI,
    model: str,
    messages: List[Dict[str, str]],
    temperature: float = 0.3,
    max_retries: int = 3,
) -> str:
    """
    Make async call to LLM API with retry logic.

    Args:
        client: AsyncOpenAI client instance
        model: Model name to use
        messages: List of message dictionaries
        temperature: Sampling temperature
        max_retries: Maximum attempts

    Returns:
        Response content as string (may be empty if the model said nothing)

    Raises:
        LLMCallError: on a non-retryable error or once retries are exhausted
    """
    last_error: Optional[Exception] = None
    last_type = APIErrorType.UNKNOWN

    for attempt in range(max_retries):
        try:
            response = await client.chat.completions.create(
                model=model,
                messages=messages,
                temperature=temperature,
            )
            content = response.choices[0].message.content
            return content.strip() if content else ""

        except Exception as e:
            last_error = e
            last_type, retryable = classify_error(e)

            if not retryable:
                logger.error(f"Non-retryable error ({last_type.value}): {e}")
                break

            if attempt == max_retries - 1:
                break

            delay = retry_delay(last_type, attempt)
            logger.warning(
                f"Retryable error ({last_type.value}): {e}. "
                f"Retry {attempt + 1}/{max_retries - 1} in {delay}s..."
            )
            await asyncio.sleep(delay)

    if last_error is None:
        raise LLMCallError(last_type, RuntimeError("max_retries must be at least 1"))

    logger.error(f"LLM call failed after {attempt + 1} attempt(s). Last error: {last_error}")
    raise LLMCallError(last_type, last_error)


def create_client(
    api_key: str,
    base_url: str,
    timeout: float = 60.0
) -> AsyncOpenAI:
    """
    Create an AsyncOpenAI client.

    Works for every provider in ``config.PROVIDERS`` since they all expose
    an OpenAI-compatible chat completions endpoint.

    Args:
        api_key: API key for authentication
        base_url: API base URL
        timeout: Default timeout for requests

    Returns:
        Configured AsyncOpenAI client
    """
    return AsyncOpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,  # 重试由 call_llm_async 负责
    )
