"""
VTT Translator - Sentence-aware WebVTT subtitle translation.

Features:
- Regroups caption fragments into whole sentences before translating
- Redistributes each translated sentence over the original cue lines
- Timing and cue order are never touched
- Async, concurrent translation through OpenAI-compatible backends
- Progress saving and resume support
"""

__version__ = "1.0.0"

from .models import VttCue, VttGroup
from .parser import parse_vtt, reconstruct_vtt, save_vtt, validate_vtt_file
from .grouper import group_cues_into_sentences, combine_cue_texts
from .redistributor import redistribute_translation
from .translator import translate_text, make_translate_fn, TranslationResult
from .pipeline import translate_groups, translate_cues, translate_vtt
from .config import TranslatorConfig, SUPPORTED_LANGUAGES
from .exceptions import VttTranslatorError, ConfigurationError, TranslationError
from .progress import TranslationProgress, save_progress, load_progress

__all__ = [
    # Models
    "VttCue",
    "VttGroup",
    "TranslationResult",
    "TranslationProgress",
    "TranslatorConfig",
    # Parsing
    "parse_vtt",
    "reconstruct_vtt",
    "save_vtt",
    "validate_vtt_file",
    # Grouping / redistribution
    "group_cues_into_sentences",
    "combine_cue_texts",
    "redistribute_translation",
    # Translation
    "translate_text",
    "make_translate_fn",
    "translate_groups",
    "translate_cues",
    "translate_vtt",
    # Config
    "SUPPORTED_LANGUAGES",
    # Errors
    "VttTranslatorError",
    "ConfigurationError",
    "TranslationError",
    # Progress
    "save_progress",
    "load_progress",
]
