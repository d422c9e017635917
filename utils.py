# utils.py
import json
import logging
from typing import List, Optional

from config import LOG_FORMAT, LOG_LEVEL
from models import Question

def save_questions(file_path: str, questions: List[Question]) -> None:
    """把题目列表保存为 JSON（后缀 .json）"""
    data = [q.to_dict() for q in questions]
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

def load_questions(file_path: str) -> List[Question]:
    """从 JSON 文件加载题目，返回 Question 对象列表"""
    with open(file_path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    return [Question.from_dict(item) for item in raw]

def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
