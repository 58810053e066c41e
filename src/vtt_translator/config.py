"""Configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

# Load environment variables once
load_dotenv()


@dataclass(frozen=True)
class ProviderSettings:
    """Connection defaults for one OpenAI-compatible translation backend."""

    base_url: str
    model_name: str
    api_key_env: str


PROVIDERS: Dict[str, ProviderSettings] = {
    "openai": ProviderSettings(
        base_url="https://api.openai.com/v1",
        model_name="gpt-4o-mini",
        api_key_env="OPENAI_API_KEY",
    ),
    # Gemini 的 OpenAI 兼容接口
    "gemini": ProviderSettings(
        base_url="https://generativelanguage.googleapis.com/v1beta/openai/",
        model_name="gemini-2.0-flash",
        api_key_env="GEMINI_API_KEY",
    ),
}

DEFAULT_PROVIDER = "gemini"

SUPPORTED_LANGUAGES: Dict[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
    "sv": "Swedish",
    "no": "Norwegian",
    "da": "Danish",
    "fi": "Finnish",
    "pl": "Polish",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "ru": "Russian",
    "cs": "Czech",
    "sk": "Slovak",
    "hu": "Hungarian",
    "ro": "Romanian",
    "bg": "Bulgarian",
    "hr": "Croatian",
    "sl": "Slovenian",
    "et": "Estonian",
    "lv": "Latvian",
    "lt": "Lithuanian",
    "el": "Greek",
}


def language_name(code: str) -> str:
    """Return the English name for a language code, or the code itself."""
    return SUPPORTED_LANGUAGES.get(code.lower(), code)


def get_provider(name: str) -> ProviderSettings:
    """Look up provider settings by name."""
    try:
        return PROVIDERS[name.lower()]
    except KeyError:
        raise ConfigurationError(
            f"Unknown provider: {name} (choose from {', '.join(sorted(PROVIDERS))})"
        ) from None


@dataclass
class TranslatorConfig:
    """Configuration for the subtitle translator."""

    # API settings
    provider: str = DEFAULT_PROVIDER
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model_name: Optional[str] = None

    # Languages
    source_language: str = "en"
    target_language: str = "es"

    # Processing settings
    concurrency: int = 4
    max_retries: int = 3
    timeout: float = 60.0

    # Output settings
    output_prefix: str = "translated_"

    # Progress settings
    save_progress: bool = True

    def __post_init__(self):
        """Fill provider defaults and load the API key from environment."""
        settings = get_provider(self.provider)
        self.provider = self.provider.lower()
        if not self.base_url:
            self.base_url = settings.base_url
        if not self.model_name:
            self.model_name = settings.model_name
        if not self.api_key:
            self.api_key = os.environ.get(settings.api_key_env)

    @classmethod
    def from_args(cls, args) -> "TranslatorConfig":
        """Create config from argparse namespace."""
        return cls(
            provider=getattr(args, 'provider', DEFAULT_PROVIDER),
            api_key=getattr(args, 'api_key', None),
            base_url=getattr(args, 'base_url', None),
            model_name=getattr(args, 'model_name', None),
            source_language=getattr(args, 'source_language', "en"),
            target_language=getattr(args, 'target_language', "es"),
            concurrency=getattr(args, 'concurrency', 4),
            save_progress=not getattr(args, 'no_progress', False),
        )

    @property
    def api_key_env(self) -> str:
        return PROVIDERS[self.provider].api_key_env

    def validate(self) -> Optional[str]:
        """
        Validate configuration.

        Returns:
            Error message if invalid, None if valid
        """
        if not self.api_key:
            return f"API key is required. Set {self.api_key_env} or use --api-key"

        for code in (self.source_language, self.target_language):
            if code.lower() not in SUPPORTED_LANGUAGES:
                return f"Unsupported language: {code}"

        if self.source_language.lower() == self.target_language.lower():
            return "Source and target language must differ"

        if self.concurrency < 1 or self.concurrency > 50:
            return f"Concurrency must be 1-50, got {self.concurrency}"

        return None


# Supported file extensions
SUPPORTED_EXTENSIONS = {".vtt"}

# Progress file suffix
PROGRESS_SUFFIX = ".progress.json"
