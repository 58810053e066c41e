"""Command-line interface for VTT Translator."""

from __future__ import annotations

import asyncio
import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import TranslatorConfig, PROVIDERS, DEFAULT_PROVIDER
from .exceptions import VttTranslatorError
from .grouper import group_cues_into_sentences
from .models import VttGroup
from .parser import parse_vtt, save_vtt, validate_vtt_file
from .pipeline import translate_groups, apply_translations, summarize_groups
from .llm_client import create_client
from .translator import make_translate_fn
from .text_utils import truncate_text
from .progress import (
    TranslationProgress,
    get_progress_file,
    save_progress,
    load_progress,
    content_digest,
    delete_progress,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sentence-aware WebVTT subtitle translator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s talk.vtt                       # English -> Spanish
  %(prog)s talk.vtt talk.de.vtt -t de     # Specify target and output
  %(prog)s talk.vtt --provider openai     # Use OpenAI instead of Gemini
  %(prog)s talk.vtt --preview             # Show sentence groups only
  %(prog)s talk.vtt --resume              # Resume interrupted translation
        """
    )

    # Positional arguments
    parser.add_argument("input_path", help="Input VTT file path")
    parser.add_argument("output_path", nargs='?', default=None, help="Output VTT file path")

    # Languages
    parser.add_argument("-s", "--source", dest="source_language", default="en")
    parser.add_argument("-t", "--target", dest="target_language", default="es")

    # API options
    parser.add_argument("--provider", choices=sorted(PROVIDERS), default=DEFAULT_PROVIDER)
    parser.add_argument("--api-key", help="API key (or set OPENAI_API_KEY / GEMINI_API_KEY)")
    parser.add_argument("--base-url", default=None, help="Override the provider endpoint")
    parser.add_argument("--model", dest="model_name", default=None)

    # Performance
    parser.add_argument("--concurrency", type=int, default=4, help="Max concurrent requests")

    # Progress
    parser.add_argument("--preview", action="store_true", help="Print sentence groups and exit")
    parser.add_argument("--resume", action="store_true", help="Resume from saved progress")
    parser.add_argument("--no-progress", action="store_true", help="Disable progress saving")

    # Misc
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    return parser.parse_args(argv)


def print_preview(groups: Sequence[VttGroup]) -> None:
    """Print one line per sentence group."""
    for idx, group in enumerate(groups):
        first, last = group.cues[0], group.cues[-1]
        print(f"[{idx}] {first.start} --> {last.end} ({len(group)} cues, {group.slot_count} lines)")
        print(f"    {truncate_text(group.combined_text, 100)}")


def default_output_path(in_path: Path, config: TranslatorConfig) -> Path:
    return in_path.with_name(f"{config.output_prefix}{in_path.stem}.{config.target_language}.vtt")


async def main_async(args: argparse.Namespace) -> int:
    """Main async workflow."""
    logger = logging.getLogger(__name__)

    # 验证输入文件
    in_path = Path(args.input_path).expanduser().resolve()
    error = validate_vtt_file(in_path)
    if error:
        logger.error(error)
        return 1

    logger.info(f"Reading: {in_path}")
    content = in_path.read_text(encoding="utf-8-sig")
    cues = parse_vtt(content)

    if not cues:
        logger.error("No valid subtitle cues found")
        return 1

    groups = group_cues_into_sentences(cues)
    cue_count, group_count = summarize_groups(groups)
    logger.info(f"Parsed {cue_count} cues into {group_count} sentence groups")

    if args.preview:
        print_preview(groups)
        return 0

    config = TranslatorConfig.from_args(args)
    error = config.validate()
    if error:
        logger.error(error)
        return 1

    # 进度管理
    progress_path = get_progress_file(in_path) if config.save_progress else None
    progress = None
    digest = content_digest(content)

    if args.resume and progress_path:
        progress = load_progress(progress_path)
        if progress and not progress.matches(
            config.source_language, config.target_language, group_count, digest
        ):
            logger.info("Saved progress does not match this run, starting fresh")
            progress = None
        elif progress:
            logger.info(f"Loaded progress: {progress.completion_rate:.0%} complete")
        else:
            logger.info("No previous progress found, starting fresh")

    if not progress:
        progress = TranslationProgress.create(
            str(in_path), config.source_language, config.target_language, group_count, digest
        )

    def on_group_done(idx: int, translated: str) -> None:
        progress.mark_completed(idx, translated)
        if progress_path:
            save_progress(progress, progress_path)

    client = create_client(config.api_key, config.base_url, timeout=config.timeout)
    translate_fn = make_translate_fn(client, config.model_name, max_retries=config.max_retries)

    translations = await translate_groups(
        groups,
        translate_fn,
        config.source_language,
        config.target_language,
        concurrency=config.concurrency,
        progress=progress,
        on_group_done=on_group_done,
    )

    final_cues = apply_translations(groups, translations)

    output = args.output_path
    out_path = Path(output) if output else default_output_path(in_path, config)
    save_vtt(final_cues, out_path)

    if progress_path and progress_path.exists():
        delete_progress(progress_path)

    logger.info(f"Done! {group_count} sentence groups translated. Saved to {out_path}")
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        exit_code = asyncio.run(main_async(args))
        sys.exit(exit_code)
    except KeyboardInterrupt:
        if args.no_progress:
            print("\nInterrupted by user.")
        else:
            print("\nInterrupted by user. Progress saved.")
        sys.exit(130)
    except VttTranslatorError as e:
        logging.error(str(e))
        sys.exit(1)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
