# bank.py
import logging
import time
from pathlib import Path
from typing import Dict, List, Optional

from block_parser import parse, parse_file
from config import ALL_TOPICS, CACHE_SECONDS, DEFAULT_TOPIC
from models import Question

logger = logging.getLogger(__name__)


class _Entry:
    def __init__(self, questions: List[Question], topic: str, path: Optional[Path] = None):
        self.questions = questions
        self.topic = topic
        self.path = path
        self.loaded_at = time.monotonic()


def _dedupe_key(q: Question) -> str:
    return f"{q.question}__{q.answer}".lower()


class QuestionBank:
    """
    管理多个题库（库名 → Question 列表）。
    解析本身是纯函数，缓存在这里显式维护：文件题库过期后按需重新解析。
    """
    def __init__(self, cache_seconds: float = CACHE_SECONDS):
        self.cache_seconds = cache_seconds
        self.banks: Dict[str, _Entry] = {}

    def add_bank(self, name: str, path, topic: Optional[str] = None) -> List[Question]:
        topic = topic or DEFAULT_TOPIC
        path = Path(path)
        qs = parse_file(path, topic)
        self.banks[name] = _Entry(qs, topic, path)
        return qs

    def add_text(self, name: str, raw_text: str, topic: Optional[str] = None) -> List[Question]:
        topic = topic or DEFAULT_TOPIC
        qs = parse(raw_text, topic)
        self.banks[name] = _Entry(qs, topic)
        return qs

    def remove_bank(self, name: str) -> None:
        self.banks.pop(name, None)

    def names(self) -> List[str]:
        return list(self.banks)

    def _is_stale(self, entry: _Entry) -> bool:
        return (entry.path is not None
                and time.monotonic() - entry.loaded_at >= self.cache_seconds)

    def _reload(self, name: str, entry: _Entry) -> None:
        logger.info("reloading bank %s from %s", name, entry.path)
        self.banks[name] = _Entry(parse_file(entry.path, entry.topic), entry.topic, entry.path)

    def get_by_name(self, name: str) -> List[Question]:
        entry = self.banks.get(name)
        if entry is None:
            return []
        if self._is_stale(entry):
            try:
                self._reload(name, entry)
            except (OSError, ValueError) as e:
                # 源文件不可用时继续使用上次解析的结果
                logger.warning("cannot reload bank %s: %s", name, e)
                entry.loaded_at = time.monotonic()
        return list(self.banks[name].questions)

    def get_all(self) -> List[Question]:
        """合并全部题库，按 题干+答案（忽略大小写）去重，保留先出现的"""
        merged: Dict[str, Question] = {}
        for name in self.names():
            for q in self.get_by_name(name):
                merged.setdefault(_dedupe_key(q), q)
        return list(merged.values())

    def get_by_topic(self, topic: str) -> List[Question]:
        all_q = self.get_all()
        if topic == ALL_TOPICS:
            return all_q
        return [q for q in all_q if q.topic == topic]

    def topics(self, name: Optional[str] = None) -> List[str]:
        """分类列表（按首次出现顺序）；指定 name 时只看该题库"""
        qs = self.get_all() if name is None else self.get_by_name(name)
        seen: List[str] = [ALL_TOPICS]
        for q in qs:
            if q.topic not in seen:
                seen.append(q.topic)
        return seen

    def clear_cache(self) -> None:
        """让所有文件题库在下次读取时重新解析"""
        for entry in self.banks.values():
            if entry.path is not None:
                entry.loaded_at = float('-inf')

    def refresh(self) -> None:
        for name, entry in list(self.banks.items()):
            if entry.path is not None:
                self._reload(name, entry)
