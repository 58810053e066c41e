"""Progress tracking and resume support."""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass, asdict
from datetime import datetime

from .config import PROGRESS_SUFFIX

logger = logging.getLogger(__name__)


def content_digest(content: str) -> str:
    """SHA-256 of the subtitle text, used to detect edited input files."""
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


@dataclass
class TranslationProgress:
    """翻译进度记录，按句组保存译文。"""

    input_file: str
    source_language: str
    target_language: str
    content_digest: str
    total_groups: int
    translations: Dict[int, str]  # group index -> translated text
    started_at: str
    updated_at: str

    @classmethod
    def create(
        cls,
        input_file: str,
        source_language: str,
        target_language: str,
        total_groups: int,
        digest: str = "",
    ) -> "TranslationProgress":
        """创建新的进度记录。"""
        now = datetime.now().isoformat()
        return cls(
            input_file=input_file,
            source_language=source_language,
            target_language=target_language,
            content_digest=digest,
            total_groups=total_groups,
            translations={},
            started_at=now,
            updated_at=now,
        )

    def mark_completed(self, group_idx: int, translated_text: str) -> None:
        """标记句组完成并保存译文。"""
        self.translations[group_idx] = translated_text
        self.updated_at = datetime.now().isoformat()

    def matches(
        self,
        source_language: str,
        target_language: str,
        total_groups: int,
        digest: str,
    ) -> bool:
        """Whether this record was made from the same input and languages."""
        return (
            self.source_language == source_language
            and self.target_language == target_language
            and self.total_groups == total_groups
            and self.content_digest == digest
        )

    @property
    def is_complete(self) -> bool:
        return len(self.translations) >= self.total_groups

    @property
    def completion_rate(self) -> float:
        """完成率 (0-1)。"""
        if self.total_groups == 0:
            return 1.0
        return len(self.translations) / self.total_groups

    def get_pending_groups(self) -> List[int]:
        """获取未完成的句组索引列表。"""
        return [i for i in range(self.total_groups) if i not in self.translations]


def get_progress_file(input_path: Path) -> Path:
    """获取进度文件路径。"""
    return input_path.with_suffix(input_path.suffix + PROGRESS_SUFFIX)


def save_progress(progress: TranslationProgress, path: Path) -> bool:
    """
    保存进度到文件。

    Returns:
        True if successful
    """
    try:
        data = asdict(progress)
        # JSON 的 key 只能是字符串
        data['translations'] = {str(k): v for k, v in data['translations'].items()}

        with path.open('w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Progress saved to {path}")
        return True
    except OSError as e:
        logger.error(f"Failed to save progress: {e}")
        return False


def load_progress(path: Path) -> Optional[TranslationProgress]:
    """
    从文件加载进度。

    Returns:
        TranslationProgress if found and valid, None otherwise
    """
    if not path.exists():
        return None

    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)

        data['translations'] = {int(k): v for k, v in data['translations'].items()}

        return TranslationProgress(**data)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Failed to load progress file: {e}")
        return None


def delete_progress(path: Path) -> None:
    """删除进度文件。"""
    try:
        if path.exists():
            path.unlink()
            logger.debug(f"Progress file deleted: {path}")
    except OSError as e:
        logger.warning(f"Failed to delete progress file: {e}")
